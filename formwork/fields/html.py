"""Plain HTML rendering of the common fields.

Views are escaped HTML strings, joined with the TEXT monoid. Field ``name``
and ``id`` attributes are the encoded field ids, so a submission can be fed
back through ``from_submission``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from html import escape
from typing import Any, TypeVar

from formwork.core.form import Form, map_view, view
from formwork.core.ids import FieldId
from formwork.fields import common

A = TypeVar("A")


def _input(input_type: str, field_id: FieldId, value: str | None = None, checked: bool = False) -> str:
    name = escape(str(field_id))
    attrs = f'type="{input_type}" name="{name}" id="{name}"'
    if value is not None:
        attrs += f' value="{escape(str(value))}"'
    if checked:
        attrs += ' checked="checked"'
    return f"<input {attrs} />"


def _error_list(messages: list[Any]) -> str:
    if not messages:
        return ""
    items = "".join(f"<li>{escape(str(message))}</li>" for message in messages)
    return f'<ul class="errors">{items}</ul>'


def input_text(default: str | None = None) -> Form[str]:
    return common.input_string(
        lambda field_id, shown: _input("text", field_id, shown or ""), default
    )


def input_required(error: Any, default: str | None = None) -> Form[str]:
    return common.input_required(
        lambda field_id, shown: _input("text", field_id, shown or ""), error, default
    )


def input_text_parsed(
    parse: Callable[[str], A],
    error: Any,
    default: A | None = None,
    required: bool = True,
) -> Form[A]:
    return common.input_parsed(
        lambda field_id, shown: _input("text", field_id, shown or ""),
        parse,
        error,
        default,
        required,
    )


def input_password() -> Form[str]:
    return common.input_string(lambda field_id, shown: _input("password", field_id, ""))


def input_text_area(rows: int | None = None, cols: int | None = None, default: str | None = None) -> Form[str]:
    def to_view(field_id: FieldId, shown: str | None) -> str:
        name = escape(str(field_id))
        size = "".join(
            f' {attr}="{value}"' for attr, value in (("rows", rows), ("cols", cols)) if value is not None
        )
        return f'<textarea name="{name}" id="{name}"{size}>{escape(shown or "")}</textarea>'

    return common.input_string(to_view, default)


def input_checkbox(default: bool = False) -> Form[bool]:
    return common.input_bool(
        lambda field_id, checked: _input("checkbox", field_id, "on", checked), default
    )


def input_radio(
    choices: Sequence[tuple[A, str]],
    default: A,
    line_breaks: bool = False,
    error: Any = "Invalid choice",
) -> Form[A]:
    """Radio group over ``(value, caption)`` pairs."""

    def to_view(field_id: FieldId, options: list[tuple[str, Any, bool]]) -> str:
        group = escape(str(field_id))
        parts = []
        for (option_id, _, selected), (_, caption) in zip(options, choices):
            option = escape(option_id)
            checked = ' checked="checked"' if selected else ""
            parts.append(
                f'<input type="radio" name="{group}" value="{option}" id="{option}"{checked} />'
                f'<label for="{option}">{escape(caption)}</label>'
            )
            if line_breaks:
                parts.append("<br />")
        return "".join(parts)

    return common.input_choice(to_view, [value for value, _ in choices], default, error)


def label(text: str) -> Form[None]:
    return common.label(
        lambda field_id: f'<label for="{escape(str(field_id))}">{escape(text)}</label>'
    )


def errors() -> Form[None]:
    """Error list for exactly the current field, see ``append``."""
    return common.errors(_error_list)


def child_errors() -> Form[None]:
    """Error list for the current range and every field inside it."""
    return common.child_errors(_error_list)


def heading(text: str) -> Form[None]:
    return view(f"<h2>{escape(text)}</h2>")


def submit(text: str) -> Form[None]:
    return view(f'<input type="submit" value="{escape(text)}" />')


def form_tag(form: Form[A], action: str = "", method: str = "post") -> Form[A]:
    """Wrap a form's markup in a ``<form>`` element."""
    return map_view(
        lambda body: f'<form action="{escape(action)}" method="{escape(method)}">{body}</form>',
        form,
    )
