"""Entry points for running a form against an environment."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Union

from pydantic import BaseModel, ConfigDict

from formwork.core import environment as env
from formwork.core.config import RunConfig
from formwork.core.form import Form, FormState
from formwork.core.ids import FieldId, FieldRange
from formwork.core.result import Ok, Result
from formwork.core.view import TEXT, Monoid, View

logger = logging.getLogger(__name__)


class Left(BaseModel):
    """Failed run: the view rendered with every error of the run."""

    value: Any

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Right(BaseModel):
    """Successful run: the validated value."""

    value: Any

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


Either = Union[Left, Right]


async def run_form(
    form: Form[Any],
    prefix: str,
    environment: env.Environment = env.ABSENT,
    config: RunConfig | None = None,
) -> tuple[View, Result]:
    """Run a form.

    Each call starts a fresh cursor at ``(prefix-f0, prefix-f1)``; nothing is
    shared between runs of the same form.

    Args:
        form: The form to run.
        prefix: Identifier prefix for this form instance.
        environment: Submitted input, or ABSENT for a fresh form.
        config: Run configuration (lookup timeout).

    Returns:
        The view, still waiting for the error list, and the result.

    Raises:
        EnvironmentTimeoutError: If a lookup exceeds the configured timeout.
    """
    config = config or RunConfig()
    state = FormState(
        environment=environment,
        cursor=FieldRange.fresh(FieldId(prefix, 0)),
        config=config,
    )
    step = await form.step(state)
    logger.debug(
        "Ran form %r over %s: %s",
        prefix,
        step.cursor,
        "ok" if step.result.is_ok else f"{len(step.result.errors)} error(s)",
    )
    return step.view, step.result


async def either_form(
    form: Form[Any],
    prefix: str,
    environment: env.Environment,
    monoid: Monoid = TEXT,
    config: RunConfig | None = None,
) -> Either:
    """Run a form and return its value, or its view rendered with the errors."""
    form_view, result = await run_form(form, prefix, environment, config)
    if isinstance(result, Ok):
        return Right(value=result.value)
    return Left(value=form_view.render(result.errors, monoid))


async def view_form(form: Form[Any], prefix: str, monoid: Monoid = TEXT) -> Any:
    """Render a fresh form: no environment and an empty error list."""
    form_view, _ = await run_form(form, prefix, env.ABSENT)
    return form_view.render([], monoid)


def run_form_sync(
    form: Form[Any],
    prefix: str,
    environment: env.Environment = env.ABSENT,
    config: RunConfig | None = None,
) -> tuple[View, Result]:
    """Blocking variant of run_form. Must not be called from a running loop."""
    return asyncio.run(run_form(form, prefix, environment, config))


def either_form_sync(
    form: Form[Any],
    prefix: str,
    environment: env.Environment,
    monoid: Monoid = TEXT,
    config: RunConfig | None = None,
) -> Either:
    return asyncio.run(either_form(form, prefix, environment, monoid, config))


def view_form_sync(form: Form[Any], prefix: str, monoid: Monoid = TEXT) -> Any:
    return asyncio.run(view_form(form, prefix, monoid))
