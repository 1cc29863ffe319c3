"""
Pydantic settings for envschema's own behaviour.

envschema validates other applications' environments, but it also reads a
few ENVSCHEMA_* variables of its own. They supply the defaults used by
define_env() when a caller leaves an option unset, and drive the logging
setup.

    ENVSCHEMA_THROW=false        accumulate errors instead of failing fast
    ENVSCHEMA_DEBUG_MODE=true    log every resolved variable
    ENVSCHEMA_LOG_LEVEL=DEBUG    level for configure_logging()
    ENVSCHEMA_LOG_FORMAT=json    "console" (colored) or "json"
    ENVSCHEMA_ENV_FILE=.env.dev  .env file overlaid on the process environment

Usage:
    from envschema.config.settings import get_settings

    settings = get_settings()
    config = settings.to_config()
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from envschema.schema.errors import SettingsError


class EnvConfig(BaseModel):
    """
    Options for a single validation run.

    Attributes:
        throw: Fail on the first field error (True) or evaluate every field
            and fail once with all errors (False).
        debug_mode: Log each resolved variable.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    throw: bool = Field(
        default=True,
        validation_alias=AliasChoices("throw", "throw_on_error"),
        description="Fail fast on the first error.",
    )
    debug_mode: bool = Field(
        default=False,
        validation_alias=AliasChoices("debug_mode", "debug_log", "debugMode"),
        description="Emit one log event per resolved variable.",
    )


class EnvSchemaSettings(BaseSettings):
    """
    Library settings loaded from ENVSCHEMA_* environment variables.

    Every setting has a default, so constructing this never fails on a clean
    environment.
    """

    # =========================================================================
    # Validation Defaults
    # =========================================================================
    throw: bool = Field(
        default=True,
        description=(
            "Default error mode for define_env(). True fails on the first "
            "invalid variable, False reports all of them at once."
        ),
    )

    debug_mode: bool = Field(
        default=False,
        description="Default for define_env(debug_mode=...).",
    )

    env_file: Path | None = Field(
        default=None,
        description=(
            "Optional .env file whose values are overlaid on the process "
            "environment before validation. Process values win."
        ),
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL.",
    )

    log_format: str = Field(
        default="console",
        description="Log renderer: 'console' for colored output, 'json' for JSON lines.",
    )

    # =========================================================================
    # Pydantic Settings Configuration
    # =========================================================================
    model_config = SettingsConfigDict(
        env_prefix="ENVSCHEMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        validate_default=True,
    )

    # =========================================================================
    # Validators
    # =========================================================================
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {valid_levels}")
        return upper_v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is either 'console' or 'json'."""
        lower_v = v.lower()
        if lower_v not in {"console", "json"}:
            raise ValueError(f"Invalid log format '{v}'. Must be 'console' or 'json'.")
        return lower_v

    # =========================================================================
    # Helper Methods
    # =========================================================================
    def to_config(
        self,
        *,
        throw: bool | None = None,
        debug_mode: bool | None = None,
    ) -> EnvConfig:
        """
        Build run options, letting explicit arguments override the settings.

        Args:
            throw: Overrides the configured error mode when not None.
            debug_mode: Overrides the configured debug flag when not None.
        """
        return EnvConfig(
            throw=self.throw if throw is None else throw,
            debug_mode=self.debug_mode if debug_mode is None else debug_mode,
        )


@lru_cache
def get_settings() -> EnvSchemaSettings:
    """
    Get the library settings singleton.

    Cached so ENVSCHEMA_* variables are read once per process. Tests that
    change them call get_settings.cache_clear(). Failures are not cached.

    Raises:
        SettingsError: If an ENVSCHEMA_* variable holds an invalid value.
    """
    try:
        return EnvSchemaSettings()
    except ValidationError as exc:
        problems = "; ".join(
            f"ENVSCHEMA_{str(error['loc'][0]).upper()}: {error['msg']}"
            if error["loc"]
            else error["msg"]
            for error in exc.errors()
        )
        raise SettingsError(f"Invalid envschema settings: {problems}") from exc


__all__ = [
    "EnvConfig",
    "EnvSchemaSettings",
    "get_settings",
]
