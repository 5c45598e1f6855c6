"""Input environments.

An environment answers "what did the user submit for this field?". It is
either Present, wrapping an async lookup, or Absent, meaning the form is
being rendered fresh with no submission at all.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any, Union

from pydantic import BaseModel, ConfigDict

from formwork.core.ids import FieldId, InvalidFieldIdError

logger = logging.getLogger(__name__)

Lookup = Callable[[FieldId], Awaitable[Any]]


class EnvironmentTimeoutError(TimeoutError):
    """Raised when an environment lookup does not answer in time."""

    def __init__(self, field_id: FieldId, timeout: float) -> None:
        self.field_id = field_id
        self.timeout = timeout
        super().__init__(f"Lookup for field {field_id} timed out after {timeout}s")


class Present(BaseModel):
    """Environment backed by an async lookup function."""

    lookup: Callable[[FieldId], Awaitable[Any]]

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __init__(self, lookup: Lookup, **data: Any) -> None:
        super().__init__(lookup=lookup, **data)


class Absent(BaseModel):
    """No submission: every lookup yields nothing."""

    model_config = ConfigDict(frozen=True)


Environment = Union[Present, Absent]

ABSENT = Absent()


def from_mapping(pairs: Mapping[FieldId, Any] | Iterable[tuple[FieldId, Any]]) -> Present:
    """Build an environment from explicit (FieldId, value) pairs.

    When an identifier appears more than once the first pair wins.
    """
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    table: dict[FieldId, Any] = {}
    for field_id, value in items:
        table.setdefault(field_id, value)

    async def lookup(field_id: FieldId) -> Any:
        return table.get(field_id)

    return Present(lookup)


def from_submission(data: Mapping[str, Any]) -> Present:
    """Build an environment from submitted values keyed by encoded field names.

    Args:
        data: Mapping such as ``{"signup-f0": "Alice"}``, as produced by a
            web framework from the rendered ``name`` attributes.

    Returns:
        A present environment. Keys that are not encoded field ids are skipped.
    """
    pairs: list[tuple[FieldId, Any]] = []
    for key, value in data.items():
        try:
            pairs.append((FieldId.parse(key), value))
        except InvalidFieldIdError:
            logger.debug("Ignoring submitted key %r: not a field id", key)
    return from_mapping(pairs)


def merge(left: Environment, right: Environment) -> Environment:
    """Combine two environments, first match wins.

    Absent is the identity on either side. For two present environments the
    left lookup is awaited first and the right one is consulted only when the
    left yields nothing.
    """
    if isinstance(left, Absent):
        return right
    if isinstance(right, Absent):
        return left

    async def lookup(field_id: FieldId) -> Any:
        value = await left.lookup(field_id)
        if value is None:
            value = await right.lookup(field_id)
        return value

    return Present(lookup)


def has_input(environment: Environment) -> bool:
    """Whether a submission is present at all."""
    return isinstance(environment, Present)


async def lookup(
    environment: Environment,
    field_id: FieldId,
    timeout: float | None = None,
) -> Any:
    """Look up the submitted value for a field.

    Args:
        environment: The environment to consult.
        field_id: The field to look up.
        timeout: Seconds to wait before giving up, or None to wait forever.

    Returns:
        The submitted value, or None when there is none.

    Raises:
        EnvironmentTimeoutError: If the lookup exceeds ``timeout``.
    """
    if isinstance(environment, Absent):
        return None
    if timeout is None:
        return await environment.lookup(field_id)
    try:
        return await asyncio.wait_for(environment.lookup(field_id), timeout)
    except asyncio.TimeoutError as e:
        logger.warning("Lookup for %s exceeded %.3fs", field_id, timeout)
        raise EnvironmentTimeoutError(field_id, timeout) from e
