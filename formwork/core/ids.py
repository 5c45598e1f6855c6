"""Field identifiers and identifier ranges.

Every field in a running form gets a FieldId. A composed sub-form covers a
contiguous, half-open FieldRange of identifiers, which is how errors raised
deep inside a form are attributed back to the right part of the view.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

E = TypeVar("E")

_ENCODED_ID = re.compile(r"^(?P<prefix>.*)-f(?P<sequence>0|[1-9][0-9]*)$")


class InvalidFieldIdError(ValueError):
    """Raised when a string does not decode to a FieldId."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Not an encoded field id: {text!r}")


class FieldId(BaseModel):
    """Identifier of a single field within one form run.

    Ordering compares the sequence only; the prefix is assumed constant
    within a run.

    Attributes:
        prefix: Scopes identifiers to one top-level form instance.
        sequence: Position of the field in composition order.
    """

    prefix: str
    sequence: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    def __init__(self, prefix: str, sequence: int, **data: Any) -> None:
        super().__init__(prefix=prefix, sequence=sequence, **data)

    def __str__(self) -> str:
        return f"{self.prefix}-f{self.sequence}"

    def __lt__(self, other: FieldId) -> bool:
        return self.sequence < other.sequence

    def __le__(self, other: FieldId) -> bool:
        return self.sequence <= other.sequence

    def __gt__(self, other: FieldId) -> bool:
        return self.sequence > other.sequence

    def __ge__(self, other: FieldId) -> bool:
        return self.sequence >= other.sequence

    @classmethod
    def parse(cls, text: str) -> FieldId:
        """Decode the ``prefix-fN`` form produced by ``str()``.

        Args:
            text: An encoded field id, e.g. ``"signup-f3"``.

        Returns:
            The FieldId with the identical prefix and sequence.

        Raises:
            InvalidFieldIdError: If the text is not an encoded field id.
        """
        match = _ENCODED_ID.match(text)
        if match is None:
            raise InvalidFieldIdError(text)
        return cls(match.group("prefix"), int(match.group("sequence")))


class FieldRange(BaseModel):
    """Half-open range ``[start, end)`` of field identifiers."""

    start: FieldId
    end: FieldId

    model_config = ConfigDict(frozen=True)

    def __init__(self, start: FieldId, end: FieldId, **data: Any) -> None:
        super().__init__(start=start, end=end, **data)

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"

    @classmethod
    def fresh(cls, start: FieldId) -> FieldRange:
        """Range holding exactly one identifier, ``start``."""
        return cls(start, increment(start))

    @property
    def width(self) -> int:
        """Number of identifiers covered by the range."""
        return self.end.sequence - self.start.sequence


def increment(field_id: FieldId) -> FieldId:
    """Return the next identifier with the same prefix."""
    return FieldId(field_id.prefix, field_id.sequence + 1)


def is_in_range(field_id: FieldId, field_range: FieldRange) -> bool:
    """Check whether an identifier falls inside a range."""
    return field_range.start.sequence <= field_id.sequence < field_range.end.sequence


def is_sub_range(inner: FieldRange, outer: FieldRange) -> bool:
    """Check whether ``inner`` is contained in ``outer`` (equal ranges included)."""
    return (
        inner.start.sequence >= outer.start.sequence
        and inner.end.sequence <= outer.end.sequence
    )


def union(a: FieldRange, b: FieldRange) -> FieldRange:
    """Smallest range covering both ``a`` and ``b``."""
    return FieldRange(min(a.start, b.start), max(a.end, b.end))


def errors_for_range(
    field_range: FieldRange,
    errors: Iterable[tuple[FieldRange, E]],
) -> list[E]:
    """Select the errors attributed to exactly this range.

    Args:
        field_range: The range of the field being rendered.
        errors: All (range, error) pairs from a run.

    Returns:
        Error payloads whose range equals ``field_range``, in run order.
    """
    return [error for error_range, error in errors if error_range == field_range]


def errors_for_range_and_children(
    field_range: FieldRange,
    errors: Iterable[tuple[FieldRange, E]],
) -> list[E]:
    """Select the errors of this range and of every sub-form inside it."""
    return [
        error
        for error_range, error in errors
        if is_sub_range(error_range, field_range)
    ]
