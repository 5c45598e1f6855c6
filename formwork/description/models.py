"""Pydantic models for declarative form descriptions."""

from typing import Literal

from pydantic import BaseModel, Field


class FieldDescription(BaseModel):
    """Single field within a form description."""

    name: str
    label: str
    kind: Literal["text", "integer", "number", "checkbox", "choice"] = "text"
    required: bool = False
    default: str | int | float | bool | None = None
    choices: list[str] = Field(default_factory=list)
    help: str | None = None


class FormDescription(BaseModel):
    """Complete form description."""

    type: Literal["form_description"]
    form_id: str
    title: str | None = None
    submit: str | None = "Submit"
    fields: list[FieldDescription]

    def get_field(self, name: str) -> FieldDescription | None:
        """Get a field by its name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None

    @property
    def field_names(self) -> list[str]:
        return [field.name for field in self.fields]


class FieldError(BaseModel):
    """Validation error raised by a described field.

    Renders as its message, so it can be shown directly in a view.
    """

    field: str
    code: str  # e.g. "REQUIRED", "NOT_A_NUMBER"
    message: str

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.message
