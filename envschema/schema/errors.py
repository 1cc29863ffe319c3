"""
Exception taxonomy for environment validation.

Every failure raised by envschema derives from EnvSchemaError so callers can
abort startup with a single except clause. Per-field failures carry the field
name and an ErrorKind so they can be inspected without parsing messages.

Hierarchy:
    EnvSchemaError
    ├── SchemaError              - malformed schema (programming error)
    ├── SettingsError            - invalid ENVSCHEMA_* setting
    └── EnvValidationError       - a field failed at runtime
        ├── MissingEnvError
        ├── InvalidTypeError
        ├── InvalidEnumError
        ├── ValidationFailedError
        └── AggregatedEnvError   - every failure of an accumulate run
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Category of a field-level validation failure."""

    MISSING = "missing"
    INVALID_TYPE = "invalid_type"
    INVALID_ENUM = "invalid_enum"
    VALIDATION_FAILED = "validation_failed"
    AGGREGATED = "aggregated"


class EnvSchemaError(Exception):
    """Base class for all envschema errors."""


class SchemaError(EnvSchemaError):
    """
    Raised when a schema entry is malformed.

    Always raised, whatever the throw setting, because it points at a bug in
    the schema rather than at the environment.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class SettingsError(EnvSchemaError):
    """Raised when an ENVSCHEMA_* variable holds an unusable value."""


class EnvValidationError(EnvSchemaError):
    """A single environment variable failed to resolve."""

    kind: ErrorKind = ErrorKind.VALIDATION_FAILED

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(field={self.field!r}, message={self.message!r})"


class MissingEnvError(EnvValidationError):
    """Required variable is absent or empty and has no default."""

    kind = ErrorKind.MISSING


class InvalidTypeError(EnvValidationError):
    """Raw text could not be coerced to the declared number/boolean kind."""

    kind = ErrorKind.INVALID_TYPE


class InvalidEnumError(EnvValidationError):
    """Raw text is not one of the allowed enum values."""

    kind = ErrorKind.INVALID_ENUM


class ValidationFailedError(EnvValidationError):
    """A custom validator rejected the typed value."""

    kind = ErrorKind.VALIDATION_FAILED


class AggregatedEnvError(EnvValidationError):
    """
    All failures of an accumulate-mode run, raised once after every field.

    Attributes:
        errors: Individual field errors in schema order.
        values: Fields that did resolve during the same run.
    """

    kind = ErrorKind.AGGREGATED

    def __init__(
        self,
        errors: Sequence[EnvValidationError],
        values: dict[str, Any] | None = None,
    ) -> None:
        self.errors = list(errors)
        self.values = dict(values or {})
        message = "Environment validation failed:\n" + "\n".join(
            error.message for error in self.errors
        )
        super().__init__(", ".join(error.field for error in self.errors), message)

    @property
    def fields(self) -> list[str]:
        """Names of the fields that failed."""
        return [error.field for error in self.errors]


__all__ = [
    "ErrorKind",
    "EnvSchemaError",
    "SchemaError",
    "SettingsError",
    "EnvValidationError",
    "MissingEnvError",
    "InvalidTypeError",
    "InvalidEnumError",
    "ValidationFailedError",
    "AggregatedEnvError",
]
