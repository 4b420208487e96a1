"""
Application settings using Pydantic Settings.

These are process-level knobs (workspace names, list window size, logging).
They are distinct from the workspace ``config.json`` which is user data and is
modelled by :class:`postless.models.Config`.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Every setting can be overridden with a ``POSTLESS_`` prefixed environment
    variable, e.g. ``POSTLESS_LOG_LEVEL=DEBUG``.
    """

    model_config = SettingsConfigDict(
        env_prefix="POSTLESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Workspace layout
    root_dir: str = Field(
        default="postless",
        description="Name of the workspace directory inside the working directory"
    )
    config_file: str = Field(
        default="config.json",
        description="Config file name inside the workspace directory"
    )
    secret_file: str = Field(
        default="secret.json",
        description="Secret file name inside the workspace directory"
    )
    requests_dir: str = Field(
        default="requests",
        description="Directory holding one subdirectory per collection"
    )
    request_file_suffix: str = Field(
        default=".json",
        description="Extension of request definition files"
    )

    # Interface
    max_visible_rows: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of list rows shown at once"
    )
    body_preview_limit: int = Field(
        default=1000,
        ge=10,
        description="Maximum characters of a non-JSON response body to display"
    )
    input_char_limit: int = Field(
        default=500,
        ge=1,
        description="Maximum length of a single text input value"
    )

    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level"
    )
    log_format: Literal["structured", "simple"] = Field(
        default="simple",
        description="Log format type"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Write logs to this file instead of stderr"
    )
    sanitize_logs: bool = Field(
        default=True,
        description="Redact tokens and authorization headers from structured logs"
    )

    @field_validator("request_file_suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        """Ensure the suffix carries its leading dot."""
        return v if v.startswith(".") else f".{v}"


# Global settings instance
settings = Settings()
