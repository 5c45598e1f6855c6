"""Validation result type.

A Result is either ``Ok(value)`` or ``Error(items)`` where each item is a
``(FieldRange, error)`` pair. Combining two results accumulates errors from
both sides instead of stopping at the first one.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Union

from pydantic import BaseModel, ConfigDict

from formwork.core.ids import FieldRange


class Ok(BaseModel):
    """Successful result carrying a value."""

    value: Any

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __init__(self, value: Any, **data: Any) -> None:
        super().__init__(value=value, **data)

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def errors(self) -> list[tuple[FieldRange, Any]]:
        return []

    def map(self, f: Callable[[Any], Any]) -> Result:
        return Ok(f(self.value))

    def bind(self, f: Callable[[Any], Result]) -> Result:
        return f(self.value)


class Error(BaseModel):
    """Failed result carrying every (range, error) pair collected so far."""

    items: tuple[tuple[FieldRange, Any], ...]

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __init__(self, items: Iterable[tuple[FieldRange, Any]], **data: Any) -> None:
        super().__init__(items=tuple(items), **data)

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def errors(self) -> list[tuple[FieldRange, Any]]:
        return list(self.items)

    def map(self, f: Callable[[Any], Any]) -> Result:
        return self

    def bind(self, f: Callable[[Any], Result]) -> Result:
        return self


Result = Union[Ok, Error]


def pure(value: Any) -> Result:
    """Lift a plain value into a successful result."""
    return Ok(value)


def fail(field_range: FieldRange, error: Any) -> Error:
    """Build a result holding a single error attributed to ``field_range``."""
    return Error([(field_range, error)])


def combine(left: Result, right: Result) -> Result:
    """Zip two independent results.

    Two successes pair their values. Otherwise the errors of whichever sides
    failed are concatenated, left items first.
    """
    if isinstance(left, Ok) and isinstance(right, Ok):
        return Ok((left.value, right.value))
    return Error(left.errors + right.errors)


def apply(rf: Result, rx: Result) -> Result:
    """Applicative apply: call the function in ``rf`` with the value in ``rx``."""
    return combine(rf, rx).map(lambda pair: pair[0](pair[1]))
