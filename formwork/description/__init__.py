"""Declarative form descriptions.

Loads JSON form descriptions, validates them against a JSON Schema and
builds HTML forms from them.
"""

from formwork.description.builder import build_field, build_form, build_input
from formwork.description.loader import (
    DescriptionError,
    load_description,
    parse_description,
    validate_description,
)
from formwork.description.models import FieldDescription, FieldError, FormDescription
from formwork.description.schema import FORM_DESCRIPTION_SCHEMA

__all__ = [
    "DescriptionError",
    "FORM_DESCRIPTION_SCHEMA",
    "FieldDescription",
    "FieldError",
    "FormDescription",
    "build_field",
    "build_form",
    "build_input",
    "load_description",
    "parse_description",
    "validate_description",
]
