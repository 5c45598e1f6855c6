"""JSON Schema for form description files."""

FORM_DESCRIPTION_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Form description",
    "type": "object",
    "required": ["type", "form_id", "fields"],
    "additionalProperties": False,
    "properties": {
        "type": {"const": "form_description"},
        "form_id": {"type": "string", "pattern": "^[A-Za-z][A-Za-z0-9_-]*$"},
        "title": {"type": ["string", "null"]},
        "submit": {"type": ["string", "null"]},
        "fields": {
            "type": "array",
            "minItems": 1,
            "items": {"$ref": "#/$defs/field"},
        },
    },
    "$defs": {
        "field": {
            "type": "object",
            "required": ["name", "label"],
            "additionalProperties": False,
            "properties": {
                "name": {"type": "string", "pattern": "^[A-Za-z_][A-Za-z0-9_]*$"},
                "label": {"type": "string"},
                "kind": {"enum": ["text", "integer", "number", "checkbox", "choice"]},
                "required": {"type": "boolean"},
                "default": {"type": ["string", "number", "boolean", "null"]},
                "choices": {"type": "array", "items": {"type": "string"}},
                "help": {"type": ["string", "null"]},
            },
            "if": {"properties": {"kind": {"const": "choice"}}, "required": ["kind"]},
            "then": {"required": ["choices"], "properties": {"choices": {"minItems": 1}}},
        },
    },
}
