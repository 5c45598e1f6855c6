"""Build HTML forms from form descriptions.

Each described field becomes ``label ++> input <++ errors`` wrapped in a
``<div class="field">``. Fields are composed applicatively, so a submission
reports the errors of every field at once, and the form's value is a dict
keyed by field name.
"""

from collections.abc import Callable
from html import escape
from typing import Any

from formwork.core.form import Form, append, lift, map_view, prepend
from formwork.description.models import FieldDescription, FieldError, FormDescription
from formwork.fields import html


def _optional(parse: Callable[[str], Any]) -> Callable[[str], Any]:
    def parse_optional(raw: str) -> Any:
        if not raw.strip():
            return None
        return parse(raw)

    return parse_optional


def build_input(field: FieldDescription) -> Form[Any]:
    """Build the bare input leaf for a described field."""
    if field.kind == "text":
        default = None if field.default is None else str(field.default)
        if field.required:
            return html.input_required(
                FieldError(field=field.name, code="REQUIRED", message=f"{field.label} is required"),
                default,
            )
        return html.input_text(default)

    if field.kind in ("integer", "number"):
        parse: Callable[[str], Any] = int if field.kind == "integer" else float
        noun = "a whole number" if field.kind == "integer" else "a number"
        error = FieldError(
            field=field.name,
            code="NOT_A_NUMBER",
            message=f"{field.label} must be {noun}",
        )
        if not field.required:
            parse = _optional(parse)
        return html.input_text_parsed(parse, error, field.default, field.required)

    if field.kind == "checkbox":
        return html.input_checkbox(bool(field.default))

    # choice
    default = field.default if field.default is not None else field.choices[0]
    return html.input_radio(
        [(choice, choice) for choice in field.choices],
        default,
        error=FieldError(field=field.name, code="INVALID_CHOICE", message=f"{field.label}: invalid choice"),
    )


def build_field(field: FieldDescription) -> Form[Any]:
    """Input with its label before it and its error list after it."""
    decorated = append(prepend(html.label(field.label), build_input(field)), html.errors())
    help_text = f'<p class="help">{escape(field.help)}</p>' if field.help else ""
    return map_view(lambda body: f'<div class="field">{body}{help_text}</div>', decorated)


def build_form(description: FormDescription, action: str = "") -> Form[dict[str, Any]]:
    """Build the complete form for a description.

    Args:
        description: A parsed form description.
        action: URL for the ``<form>`` element's action attribute.

    Returns:
        Form whose value maps each field name to its validated value.
    """
    names = description.field_names
    form: Form[dict[str, Any]] = lift(
        lambda *values: dict(zip(names, values)),
        *(build_field(field) for field in description.fields),
    )
    if description.title:
        form = prepend(html.heading(description.title), form)
    if description.submit:
        form = append(form, html.submit(description.submit))
    return html.form_tag(form, action)
