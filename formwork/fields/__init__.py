"""Leaf fields for formwork.

``common`` holds renderer-agnostic leaves; ``html`` renders them as plain
HTML strings.
"""

from formwork.fields import html
from formwork.fields.common import (
    child_errors,
    errors,
    input_bool,
    input_choice,
    input_parsed,
    input_required,
    input_string,
    label,
)

__all__ = [
    "child_errors",
    "errors",
    "html",
    "input_bool",
    "input_choice",
    "input_parsed",
    "input_required",
    "input_string",
    "label",
]
