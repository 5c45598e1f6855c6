"""Loading and validating form description files."""

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema
from pydantic import ValidationError

from formwork.description.models import FormDescription
from formwork.description.schema import FORM_DESCRIPTION_SCHEMA

logger = logging.getLogger(__name__)


class DescriptionError(ValueError):
    """Raised when a form description is malformed."""

    pass


def validate_description(data: dict[str, Any]) -> list[str]:
    """Check raw description data against the schema.

    Args:
        data: Parsed JSON of a form description.

    Returns:
        List of validation error messages (empty if valid).
    """
    validator = jsonschema.Draft202012Validator(FORM_DESCRIPTION_SCHEMA)
    messages = []
    for error in sorted(validator.iter_errors(data), key=lambda e: list(e.path)):
        location = "/".join(str(part) for part in error.path)
        messages.append(f"{location}: {error.message}" if location else error.message)
    return messages


def _default_fits(kind: str, default: Any) -> bool:
    # bool is a subclass of int, so it is excluded from the numeric kinds
    if kind == "integer":
        return isinstance(default, int) and not isinstance(default, bool)
    if kind == "number":
        return isinstance(default, (int, float)) and not isinstance(default, bool)
    if kind == "checkbox":
        return isinstance(default, bool)
    return isinstance(default, str)


def parse_description(data: dict[str, Any]) -> FormDescription:
    """Validate raw description data and build the model.

    Raises:
        DescriptionError: If the data fails schema validation, a field's
            default does not fit its kind, or a choice field's default is not
            one of its choices.
    """
    try:
        jsonschema.validate(data, FORM_DESCRIPTION_SCHEMA)
    except jsonschema.ValidationError as e:
        raise DescriptionError(f"Form description validation failed: {e.message}") from e

    try:
        description = FormDescription.model_validate(data)
    except ValidationError as e:
        raise DescriptionError(f"Form description validation failed: {e}") from e

    seen: set[str] = set()
    for field in description.fields:
        if field.name in seen:
            raise DescriptionError(f"Duplicate field name: {field.name}")
        seen.add(field.name)
        if field.default is not None and not _default_fits(field.kind, field.default):
            raise DescriptionError(
                f"Default {field.default!r} of field {field.name} does not fit kind {field.kind}"
            )
        if field.kind == "choice" and field.default is not None and field.default not in field.choices:
            raise DescriptionError(
                f"Default {field.default!r} of field {field.name} is not one of its choices"
            )
    return description


def load_description(path: Path | str) -> FormDescription:
    """Load a form description from a JSON file.

    Raises:
        DescriptionError: If the file is not valid JSON or not a valid description.
    """
    path = Path(path)
    logger.debug("Loading form description from %s", path)
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DescriptionError(f"Invalid JSON in {path}: {e}") from e
    return parse_description(data)
