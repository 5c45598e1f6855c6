"""Form composition engine.

A Form is a reusable blueprint. Running it walks the composition once,
threading an immutable cursor (the FieldRange of the sub-form currently
being built) through every step by return value. Each step yields the new
cursor together with a View fragment and a Result fragment.

Two ways to compose:

- ``ap`` / ``lift`` / ``sequence`` combine independent sibling forms. Both
  sides are always run and rendered, and errors from both sides accumulate.
- ``bind`` feeds the validated value of one form into a function choosing
  the next form. It stops at the first failure, and the continuation's view
  is then absent altogether.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, NamedTuple, TypeVar

from pydantic import BaseModel, ConfigDict

from formwork.core import environment as env
from formwork.core.config import RunConfig
from formwork.core.ids import FieldId, FieldRange, union
from formwork.core.result import Error, Ok, Result, apply, fail
from formwork.core.view import Monoid, View

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")


class FormState(BaseModel):
    """Immutable state seen by a step: the environment and the cursor."""

    environment: env.Environment
    cursor: FieldRange
    config: RunConfig = RunConfig()

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def field_id(self) -> FieldId:
        """Current field id. Only meaningful for a leaf, i.e. an uncomposed form."""
        return self.cursor.start

    @property
    def field_range(self) -> FieldRange:
        return self.cursor

    @property
    def has_input(self) -> bool:
        return env.has_input(self.environment)

    async def input(self) -> Any:
        """Submitted value for the current field, or None."""
        return await env.lookup(
            self.environment, self.field_id, self.config.lookup_timeout
        )

    def at(self, cursor: FieldRange) -> FormState:
        return self.model_copy(update={"cursor": cursor})


class Step(NamedTuple):
    """Outcome of running one form step."""

    cursor: FieldRange
    view: View
    result: Result


StepFunction = Callable[[FormState], Awaitable[Step]]


class Form(Generic[A]):
    """Composable form producing a value of type ``A``."""

    __slots__ = ("_step",)

    def __init__(self, step: StepFunction) -> None:
        self._step = step

    async def step(self, state: FormState) -> Step:
        """Run this form from ``state``."""
        return await self._step(state)

    @classmethod
    def leaf(
        cls,
        build: Callable[[FormState], Awaitable[tuple[View, Result]]],
    ) -> Form[A]:
        """Form for a single field.

        ``build`` reads ``state.field_id`` and ``await state.input()`` and
        returns the field's view and result. The field owns exactly the
        identifier at the cursor's start.
        """

        async def step(state: FormState) -> Step:
            field_view, result = await build(state)
            return Step(state.cursor, field_view, result)

        return cls(step)

    def map(self, f: Callable[[A], B]) -> Form[B]:
        return map_form(f, self)

    def ap(self, other: Form[Any]) -> Form[Any]:
        return ap(self, other)

    def bind(self, f: Callable[[A], Form[B]]) -> Form[B]:
        return bind(self, f)

    def validate(self, check: Callable[[A], Any]) -> Form[A]:
        return validate(self, check)

    def map_view(self, f: Callable[[Any], Any], source: Monoid | None = None) -> Form[A]:
        return map_view(f, self, source)


def pure(value: A) -> Form[A]:
    """Form yielding ``value`` with an empty view.

    Zero width: the cursor collapses to ``(start, start)``, so the following
    sibling starts at the same identifier.
    """

    async def step(state: FormState) -> Step:
        start = state.cursor.start
        return Step(FieldRange(start, start), View.empty(), Ok(value))

    return Form(step)


def view(value: Any) -> Form[None]:
    """Form contributing ``value`` to the view and nothing to the result."""

    async def step(state: FormState) -> Step:
        start = state.cursor.start
        return Step(FieldRange(start, start), View.constant(value), Ok(None))

    return Form(step)


def failure(error: Any) -> Form[Any]:
    """Form that always fails with ``error`` attributed to the current range."""

    async def step(state: FormState) -> Step:
        return Step(state.cursor, View.empty(), fail(state.cursor, error))

    return Form(step)


def map_form(f: Callable[[A], B], form: Form[A]) -> Form[B]:
    """Apply ``f`` to a form's value; view and cursor are untouched."""

    async def step(state: FormState) -> Step:
        cursor, form_view, result = await form.step(state)
        return Step(cursor, form_view, result.map(f))

    return Form(step)


def ap(f1: Form[Callable[[A], B]], f2: Form[A]) -> Form[B]:
    """Applicative composition of two independent forms.

    ``f1`` runs from the incoming cursor. ``f2`` then starts on a fresh range
    right after the last identifier ``f1`` consumed. The resulting range spans
    both. Views concatenate and errors from both sides accumulate.
    """

    async def step(state: FormState) -> Step:
        start = state.cursor.start
        first = await f1.step(state)
        second = await f2.step(state.at(FieldRange.fresh(first.cursor.end)))
        return Step(
            FieldRange(start, second.cursor.end),
            first.view.concat(second.view),
            apply(first.result, second.result),
        )

    return Form(step)


def sequence(*forms: Form[Any]) -> Form[tuple[Any, ...]]:
    """Compose forms applicatively into a tuple of their values."""
    combined: Form[tuple[Any, ...]] = pure(())
    for form in forms:
        combined = ap(combined.map(lambda acc: lambda value: acc + (value,)), form)
    return combined


def lift(fn: Callable[..., B], *forms: Form[Any]) -> Form[B]:
    """Call ``fn`` with the values of ``forms``, composed applicatively."""
    return sequence(*forms).map(lambda values: fn(*values))


def bind(form: Form[A], f: Callable[[A], Form[B]]) -> Form[B]:
    """Monadic composition: choose the next form from this form's value.

    On failure the continuation never runs: the result is the left error and
    the view is the left view alone. On success the continuation starts on a
    fresh range after the left form, like the right operand of ``ap``.
    """

    async def step(state: FormState) -> Step:
        start = state.cursor.start
        first = await form.step(state)
        if isinstance(first.result, Error):
            return first
        following = f(first.result.value)
        second = await following.step(state.at(FieldRange.fresh(first.cursor.end)))
        return Step(
            FieldRange(start, second.cursor.end),
            first.view.concat(second.view),
            second.result,
        )

    return Form(step)


def prepend(decoration: Form[Any], form: Form[A]) -> Form[A]:
    """Put a decorative form's view before ``form`` and keep only its result.

    The real form runs first so the decoration sees its range (a label can
    point at the field it labels). A zero-width real form such as ``pure``
    or ``view`` leaves the cursor at ``(s, s)``, so a decoration reading
    ``field_id`` then gets ``s``, the identifier of the next sibling field.
    """

    async def step(state: FormState) -> Step:
        real = await form.step(state)
        deco = await decoration.step(state.at(real.cursor))
        return Step(union(real.cursor, deco.cursor), deco.view.concat(real.view), real.result)

    return Form(step)


def append(form: Form[A], decoration: Form[Any]) -> Form[A]:
    """Put a decorative form's view after ``form`` and keep only its result."""

    async def step(state: FormState) -> Step:
        real = await form.step(state)
        deco = await decoration.step(state.at(real.cursor))
        return Step(union(real.cursor, deco.cursor), real.view.concat(deco.view), real.result)

    return Form(step)


def map_view(f: Callable[[Any], Any], form: Form[A], source: Monoid | None = None) -> Form[A]:
    """Transform the rendered artifact of a form.

    The form's own view is joined with ``source`` before ``f`` sees it, or
    with the render-time monoid when ``source`` is None.
    """

    async def step(state: FormState) -> Step:
        cursor, form_view, result = await form.step(state)
        return Step(cursor, form_view.map(f, source), result)

    return Form(step)


def validate(form: Form[A], check: Callable[[A], Any]) -> Form[A]:
    """Check a form's value after it is built.

    ``check`` returns None when the value is acceptable, or an error payload,
    which is attributed to the form's whole range. Failures inside ``form``
    are passed through without calling ``check``.
    """

    async def step(state: FormState) -> Step:
        cursor, form_view, result = await form.step(state)
        if isinstance(result, Ok):
            error = check(result.value)
            if error is not None:
                logger.debug("Validation failed on %s: %r", cursor, error)
                result = fail(cursor, error)
        return Step(cursor, form_view, result)

    return Form(step)
