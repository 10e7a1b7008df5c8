"""Configuration for the workflow engine core.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Both behavior switches default to the lenient behavior existing clients rely on.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Settings for definition validation and transition resolution.

    Environment variables:
    - WORKFLOW_STRICT_DEFINITIONS       (optional)
    - WORKFLOW_LOCK_FINAL_STATES        (optional)
    - WORKFLOW_MAX_TRANSITION_ATTEMPTS  (optional)
    """

    strict_definitions: bool = Field(
        default=False,
        validation_alias="WORKFLOW_STRICT_DEFINITIONS",
        description=(
            "If true, definitions are also rejected for duplicate state/action ids, actions "
            "without source states, and actions referencing undeclared states."
        ),
    )
    lock_final_states: bool = Field(
        default=False,
        validation_alias="WORKFLOW_LOCK_FINAL_STATES",
        description="If true, no action may be executed once an instance is in a final state.",
    )
    max_transition_attempts: int = Field(
        default=3,
        validation_alias="WORKFLOW_MAX_TRANSITION_ATTEMPTS",
        description=(
            "How many times an execute request re-reads the instance and retries when another "
            "request replaced it in between."
        ),
        ge=1,
        le=100,
    )

    model_config = SettingsConfigDict(
        env_prefix="", env_file=".env", extra="ignore", populate_by_name=True
    )
