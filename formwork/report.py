"""Reports summarizing a form run.

Turns a run's Result into a serializable record of its status and every
error with the range it is attributed to.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from formwork.core.result import Ok, Result


class RunStatus(str, Enum):
    """Status of a form run."""

    SUCCESS = "success"  # Value validated
    FAILED = "failed"  # At least one error


class ReportedError(BaseModel):
    """A single error with its attribution range."""

    start: str  # Encoded id of the first field in range, e.g. "signup-f2"
    end: str
    code: str | None = None
    field: str | None = None
    message: str


class FormReport(BaseModel):
    """Outcome of running one submission through a form."""

    prefix: str
    submission_id: str | None = None
    status: RunStatus
    value: Any = None
    errors: list[ReportedError] = Field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)


def _reported(field_range: Any, error: Any) -> ReportedError:
    return ReportedError(
        start=str(field_range.start),
        end=str(field_range.end),
        code=getattr(error, "code", None),
        field=getattr(error, "field", None),
        message=str(error),
    )


def build_report(prefix: str, result: Result, submission_id: str | None = None) -> FormReport:
    """Build the report for a run's result.

    Args:
        prefix: Prefix the form was run with.
        result: The run's result.
        submission_id: Optional id of the submission that was checked.

    Returns:
        FormReport with the value on success, or every error in run order.
    """
    if isinstance(result, Ok):
        return FormReport(
            prefix=prefix,
            submission_id=submission_id,
            status=RunStatus.SUCCESS,
            value=result.value,
        )
    return FormReport(
        prefix=prefix,
        submission_id=submission_id,
        status=RunStatus.FAILED,
        errors=[_reported(field_range, error) for field_range, error in result.errors],
    )
