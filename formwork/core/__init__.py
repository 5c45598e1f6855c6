"""Core composition engine for formwork.

Contains the identifier and range model, the accumulating Result type,
input environments, deferred views and the Form combinators that glue
them together.
"""

from formwork.core.config import RunConfig
from formwork.core.environment import (
    ABSENT,
    Absent,
    Environment,
    EnvironmentTimeoutError,
    Present,
    from_mapping,
    from_submission,
    has_input,
    lookup,
    merge,
)
from formwork.core.form import (
    Form,
    FormState,
    Step,
    ap,
    append,
    bind,
    failure,
    lift,
    map_form,
    map_view,
    prepend,
    pure,
    sequence,
    validate,
    view,
)
from formwork.core.ids import (
    FieldId,
    FieldRange,
    InvalidFieldIdError,
    errors_for_range,
    errors_for_range_and_children,
    increment,
    is_in_range,
    is_sub_range,
    union,
)
from formwork.core.result import Error, Ok, Result, apply, combine, fail
from formwork.core.run import (
    Either,
    Left,
    Right,
    either_form,
    either_form_sync,
    run_form,
    run_form_sync,
    view_form,
    view_form_sync,
)
from formwork.core.view import SEQUENCE, TEXT, Monoid, View

__all__ = [
    # Identifiers
    "FieldId",
    "FieldRange",
    "InvalidFieldIdError",
    "errors_for_range",
    "errors_for_range_and_children",
    "increment",
    "is_in_range",
    "is_sub_range",
    "union",
    # Result
    "Error",
    "Ok",
    "Result",
    "apply",
    "combine",
    "fail",
    # Environment
    "ABSENT",
    "Absent",
    "Environment",
    "EnvironmentTimeoutError",
    "Present",
    "from_mapping",
    "from_submission",
    "has_input",
    "lookup",
    "merge",
    # View
    "Monoid",
    "SEQUENCE",
    "TEXT",
    "View",
    # Form
    "Form",
    "FormState",
    "Step",
    "ap",
    "append",
    "bind",
    "failure",
    "lift",
    "map_form",
    "map_view",
    "prepend",
    "pure",
    "sequence",
    "validate",
    "view",
    # Running
    "Either",
    "Left",
    "Right",
    "RunConfig",
    "either_form",
    "either_form_sync",
    "run_form",
    "run_form_sync",
    "view_form",
    "view_form_sync",
]
