"""Deferred, error-aware views.

A View is a function of the complete error list of a run. Rendering is
postponed until that list is known, because a field only learns about its
own errors while the form is being composed.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Sequence
from functools import reduce
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from formwork.core.ids import FieldRange

V = TypeVar("V")
W = TypeVar("W")

ErrorList = Sequence[tuple[FieldRange, Any]]
RenderPart = Callable[[ErrorList, "Monoid"], Any]


class Monoid(BaseModel):
    """Concatenation structure of a rendered artifact type.

    Attributes:
        empty: The neutral element (``""`` for text).
        concat: Associative binary concatenation.
    """

    empty: Any
    concat: Callable[[Any, Any], Any]

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def concat_all(self, values: Sequence[Any]) -> Any:
        return reduce(self.concat, values, self.empty)


TEXT = Monoid(empty="", concat=operator.add)
SEQUENCE = Monoid(empty=(), concat=lambda a, b: tuple(a) + tuple(b))


class View(Generic[V]):
    """Rendering function over ``[(FieldRange, error)]``.

    Kept as an ordered tuple of parts; concatenating two views joins their
    parts, and rendering evaluates each part on the same error list, left to
    right, joining the outputs with the monoid given at render time.
    """

    __slots__ = ("_parts",)

    def __init__(self, parts: tuple[RenderPart, ...] = ()) -> None:
        self._parts = parts

    @classmethod
    def empty(cls) -> View[V]:
        """Identity element: renders the monoid's empty value."""
        return cls()

    @classmethod
    def constant(cls, value: V) -> View[V]:
        """View that ignores errors and always renders ``value``."""
        return cls((lambda errors, monoid: value,))

    @classmethod
    def from_function(cls, render: Callable[[ErrorList], V]) -> View[V]:
        """View computed from the error list."""
        return cls((lambda errors, monoid: render(errors),))

    def concat(self, other: View[V]) -> View[V]:
        """Concatenate two views: this one's output first."""
        return View(self._parts + other._parts)

    def map(self, f: Callable[[V], W], source: Monoid | None = None) -> View[W]:
        """Transform the whole rendered output.

        Args:
            f: Applied to the complete output of this view.
            source: Monoid used to join this view's own parts before ``f``.
                Defaults to the monoid the result is rendered with; pass one
                when ``f`` changes the artifact type.
        """
        inner = self

        def part(errors: ErrorList, monoid: Monoid) -> W:
            return f(inner.render(errors, monoid if source is None else source))

        return View((part,))

    def render(self, errors: ErrorList, monoid: Monoid = TEXT) -> V:
        """Evaluate the view against the final error list."""
        return monoid.concat_all([part(errors, monoid) for part in self._parts])
