"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from formwork.core import FieldId, Form, FormState, Ok, View
from formwork.fields import common


def text_view(field_id: FieldId, shown: str | None) -> str:
    """Render a text field as ``<id:value>``."""
    return f"<{field_id}:{shown or ''}>"


def error_view(messages: list[Any]) -> str:
    """Render errors as ``!message`` fragments."""
    return "".join(f"!{message}" for message in messages)


@pytest.fixture
def text_field() -> Callable[..., Form[str]]:
    """Factory for plain text fields."""
    return lambda default=None: common.input_string(text_view, default)


@pytest.fixture
def int_field() -> Callable[..., Form[int]]:
    """Factory for integer fields failing with a given error."""
    return lambda error="NotANumber", default=None: common.input_parsed(
        text_view, int, error, default
    )


@pytest.fixture
def error_list() -> Form[None]:
    """Decoration rendering errors of exactly the current range."""
    return common.errors(error_view)


@pytest.fixture
def child_error_list() -> Form[None]:
    """Decoration rendering errors of the current range and its children."""
    return common.child_errors(error_view)


@pytest.fixture
def id_field() -> Form[FieldId]:
    """Leaf whose value is the field id it was assigned."""

    async def build(state: FormState) -> tuple[View, Ok]:
        return View.constant(f"[{state.field_id}]"), Ok(state.field_id)

    return Form.leaf(build)


@pytest.fixture
def description_data() -> dict[str, Any]:
    """A valid form description."""
    return {
        "type": "form_description",
        "form_id": "signup",
        "title": "Sign up",
        "fields": [
            {"name": "name", "label": "Name", "kind": "text", "required": True},
            {"name": "age", "label": "Age", "kind": "integer", "required": True},
            {"name": "newsletter", "label": "Newsletter", "kind": "checkbox"},
            {
                "name": "plan",
                "label": "Plan",
                "kind": "choice",
                "choices": ["free", "pro"],
                "default": "free",
            },
        ],
    }


@pytest.fixture
def description_path(tmp_path: Path, description_data: dict[str, Any]) -> Path:
    """The valid form description written to a file."""
    path = tmp_path / "signup.json"
    path.write_text(json.dumps(description_data))
    return path
