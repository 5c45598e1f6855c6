"""Renderer-agnostic leaf fields.

Each constructor takes a ``to_view`` callable that turns the field's id and
what should be displayed into a rendered fragment, so the same parsing and
validation logic serves any markup.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from formwork.core.form import Form, FormState
from formwork.core.ids import FieldId, errors_for_range, errors_for_range_and_children
from formwork.core.result import Ok, Result, fail
from formwork.core.view import View

A = TypeVar("A")

TRUTHY_INPUTS = frozenset({"on", "true", "1", "yes", "checked"})


def input_string(
    to_view: Callable[[FieldId, str | None], Any],
    default: str | None = None,
) -> Form[str]:
    """Free text field. Missing input yields the default, or ``""``."""

    async def build(state: FormState) -> tuple[View, Result]:
        raw = await state.input()
        shown = raw if state.has_input else default
        value = raw if raw is not None else (default or "")
        return View.constant(to_view(state.field_id, shown)), Ok(value)

    return Form.leaf(build)


def input_required(
    to_view: Callable[[FieldId, str | None], Any],
    error: Any,
    default: str | None = None,
) -> Form[str]:
    """Text field that fails with ``error`` when empty or blank."""

    async def build(state: FormState) -> tuple[View, Result]:
        raw = await state.input()
        shown = raw if state.has_input else default
        value = raw if raw is not None else default
        if value is None or not str(value).strip():
            return View.constant(to_view(state.field_id, shown)), fail(state.field_range, error)
        return View.constant(to_view(state.field_id, shown)), Ok(value)

    return Form.leaf(build)


def input_parsed(
    to_view: Callable[[FieldId, str | None], Any],
    parse: Callable[[str], A],
    error: Any,
    default: A | None = None,
    required: bool = True,
) -> Form[A]:
    """Text field whose value goes through ``parse``.

    A ``parse`` raising ValueError or TypeError turns into ``error``
    attributed to this field. Missing input yields ``default``; without a
    default it is ``error`` for a required field and None otherwise.
    """

    async def build(state: FormState) -> tuple[View, Result]:
        raw = await state.input()
        if state.has_input:
            shown = raw
        else:
            shown = None if default is None else str(default)
        rendered = View.constant(to_view(state.field_id, shown))

        if raw is None:
            if default is not None:
                return rendered, Ok(default)
            if required:
                return rendered, fail(state.field_range, error)
            return rendered, Ok(None)
        try:
            return rendered, Ok(parse(raw))
        except (ValueError, TypeError):
            return rendered, fail(state.field_range, error)

    return Form.leaf(build)


def input_bool(
    to_view: Callable[[FieldId, bool], Any],
    default: bool = False,
) -> Form[bool]:
    """Checkbox. Browsers omit unchecked boxes, so with input present a
    missing value means unchecked; the default only applies to fresh forms.
    """

    async def build(state: FormState) -> tuple[View, Result]:
        if state.has_input:
            raw = await state.input()
            checked = raw is not None and str(raw).strip().lower() in TRUTHY_INPUTS
        else:
            checked = default
        return View.constant(to_view(state.field_id, checked)), Ok(checked)

    return Form.leaf(build)


def input_choice(
    to_view: Callable[[FieldId, list[tuple[str, Any, bool]]], Any],
    choices: Sequence[A],
    default: A,
    error: Any = "Invalid choice",
) -> Form[A]:
    """Single choice out of ``choices`` (radio buttons, select box).

    Options are submitted as ``"<field id>-<index>"``. ``to_view`` receives
    the field id and a list of ``(option id, choice, selected)``.
    """

    async def build(state: FormState) -> tuple[View, Result]:
        field_id = state.field_id
        option_ids = [f"{field_id}-{index}" for index in range(len(choices))]
        raw = await state.input()

        if raw is None:
            result: Result = Ok(default)
        elif raw in option_ids:
            result = Ok(choices[option_ids.index(raw)])
        else:
            result = fail(state.field_range, error)

        selected = result.value if isinstance(result, Ok) else None
        options = [
            (option_id, choice, choice == selected)
            for option_id, choice in zip(option_ids, choices)
        ]
        return View.constant(to_view(field_id, options)), result

    return Form.leaf(build)


def label(to_view: Callable[[FieldId], Any]) -> Form[None]:
    """Label for the field whose range is current, see ``prepend``."""

    async def build(state: FormState) -> tuple[View, Result]:
        return View.constant(to_view(state.field_id)), Ok(None)

    return Form.leaf(build)


def errors(to_view: Callable[[list[Any]], Any]) -> Form[None]:
    """Errors attributed to exactly the current range."""

    async def build(state: FormState) -> tuple[View, Result]:
        field_range = state.field_range
        return (
            View.from_function(lambda all_errors: to_view(errors_for_range(field_range, all_errors))),
            Ok(None),
        )

    return Form.leaf(build)


def child_errors(to_view: Callable[[list[Any]], Any]) -> Form[None]:
    """Errors of the current range and of everything nested inside it."""

    async def build(state: FormState) -> tuple[View, Result]:
        field_range = state.field_range
        return (
            View.from_function(
                lambda all_errors: to_view(errors_for_range_and_children(field_range, all_errors))
            ),
            Ok(None),
        )

    return Form.leaf(build)
