"""Configuration for the REST server."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Settings for the HTTP surface and process startup.

    Notes:
        - Engine behavior (strict definitions, final-state locking) lives in
          :class:`workflow_state_engine.engine.config.EngineSettings`.
    """

    host: str = Field(default="127.0.0.1", validation_alias="WORKFLOW_HOST")
    port: int = Field(default=8000, validation_alias="WORKFLOW_PORT", ge=1, le=65535)

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    environment: str = Field(
        default="development",
        validation_alias="WORKFLOW_ENV",
        description="Deployment environment. API docs are only served in 'development'.",
    )

    cors_origins: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        validation_alias="WORKFLOW_CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins.",
    )

    https_redirect: bool = Field(
        default=False,
        validation_alias="WORKFLOW_HTTPS_REDIRECT",
        description="If true, plain HTTP requests are redirected to HTTPS.",
    )

    model_config = SettingsConfigDict(
        env_prefix="", env_file=".env", extra="ignore", populate_by_name=True
    )

    @property
    def docs_enabled(self) -> bool:
        return self.environment.strip().lower() == "development"

    def parsed_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
