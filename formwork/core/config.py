"""Run configuration."""

from pydantic import BaseModel, Field

LOOKUP_TIMEOUT_ENV = "FORMWORK_LOOKUP_TIMEOUT"
PREFIX_ENV = "FORMWORK_PREFIX"
DEFAULT_PREFIX = "form"


class RunConfig(BaseModel):
    """Configuration for a single form run.

    Attributes:
        lookup_timeout: Seconds an environment lookup may take before the run
            fails with EnvironmentTimeoutError. None waits forever.
    """

    lookup_timeout: float | None = Field(default=None, gt=0)
