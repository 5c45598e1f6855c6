"""formwork: composable, error-accumulating form descriptions."""

__version__ = "0.1.0"

# Import the engine - these imports must come after __version__ to avoid circular import
from formwork.core import (
    ABSENT,
    Error,
    FieldId,
    FieldRange,
    Form,
    FormState,
    Ok,
    RunConfig,
    View,
    ap,
    append,
    bind,
    either_form,
    from_mapping,
    from_submission,
    lift,
    map_view,
    merge,
    prepend,
    pure,
    run_form,
    sequence,
    validate,
    view,
    view_form,
)

__all__ = [
    "__version__",
    "ABSENT",
    "Error",
    "FieldId",
    "FieldRange",
    "Form",
    "FormState",
    "Ok",
    "RunConfig",
    "View",
    "ap",
    "append",
    "bind",
    "either_form",
    "from_mapping",
    "from_submission",
    "lift",
    "map_view",
    "merge",
    "prepend",
    "pure",
    "run_form",
    "sequence",
    "validate",
    "view",
    "view_form",
]
