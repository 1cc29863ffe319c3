"""
Schema validation and coercion of environment variables.

One pass over the schema produces a FieldOutcome per field. The two error
modes are views over that pass:

    - fail fast (throw=True): the first failing field's error is raised and
      no later field is evaluated.
    - accumulate (throw=False): every field is evaluated, then a single
      AggregatedEnvError lists every failure and carries the partial values.

Per field the checks run in a fixed order: missing/required, then coercion
(or enum membership), then the custom validator. An empty string counts as
unset, so it falls back to the default or fails as missing.

Usage:
    from envschema.validation.validator import define_env

    env = define_env(
        {
            "NODE_ENV": {"kind": "enum", "allowed_values": ["development", "production"]},
            "PORT": {"kind": "number", "default": 3000},
        },
        debug_mode=True,
    )
    env["PORT"]  # 3000 when PORT is unset
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from envschema.config.settings import EnvConfig, get_settings
from envschema.environment import snapshot_environ
from envschema.logging_config import get_logger
from envschema.schema.errors import (
    AggregatedEnvError,
    EnvValidationError,
    InvalidEnumError,
    MissingEnvError,
    ValidationFailedError,
)
from envschema.schema.fields import (
    BaseField,
    BooleanField,
    EnumField,
    FieldSpec,
    NumberField,
    Validator,
    build_schema,
)
from envschema.validation.coercion import parse_boolean, parse_number

SchemaInput = Mapping[str, "BaseField | Mapping[str, Any]"]


# =============================================================================
# Outcomes
# =============================================================================


def _format_value(value: Any) -> str:
    # Booleans read the way they are written in the environment
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class FieldOutcome:
    """Result of resolving one schema field."""

    name: str
    value: Any = None
    error: EnvValidationError | None = None
    from_default: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def log_entry(self) -> str | None:
        """`NAME=value`, annotated when the default was used."""
        if self.error is not None:
            return None
        suffix = " (using default)" if self.from_default else ""
        return f"{self.name}={_format_value(self.value)}{suffix}"


@dataclass
class EnvReport:
    """
    Everything one accumulate pass produced.

    Returned by check_env() so callers can inspect failures without
    exception handling. raise_for_errors() turns it back into the
    aggregated error.
    """

    outcomes: list[FieldOutcome] = field(default_factory=list)

    def add(self, outcome: FieldOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def values(self) -> dict[str, Any]:
        return {o.name: o.value for o in self.outcomes if o.error is None}

    @property
    def errors(self) -> list[EnvValidationError]:
        return [o.error for o in self.outcomes if o.error is not None]

    @property
    def log_entries(self) -> list[str]:
        return [o.log_entry for o in self.outcomes if o.log_entry is not None]

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise AggregatedEnvError if any field failed."""
        if self.errors:
            raise AggregatedEnvError(self.errors, self.values)


# =============================================================================
# Field Resolution
# =============================================================================


def _run_validator(name: str, validator: Validator, value: Any) -> None:
    try:
        result = validator(value)
    except Exception as exc:
        raise ValidationFailedError(
            name, f'Environment variable "{name}" validation error: {exc}'
        ) from exc

    if result is False:
        raise ValidationFailedError(name, f'Environment variable "{name}" failed validation')
    if isinstance(result, str):
        raise ValidationFailedError(
            name, f'Environment variable "{name}" validation error: {result}'
        )


def resolve_field(name: str, spec: FieldSpec, raw: str | None) -> FieldOutcome:
    """
    Resolve one field from its raw text.

    Defaults are returned as declared: they are not coerced and not passed
    to the validator.

    Raises:
        EnvValidationError: The field is missing, malformed or rejected.
    """
    if raw is None or raw == "":
        if spec.default is not None:
            return FieldOutcome(name, spec.default, from_default=True)
        raise MissingEnvError(name, f'Environment variable "{name}" is required but not set')

    value: Any
    if isinstance(spec, EnumField):
        if raw not in spec.allowed_texts:
            raise InvalidEnumError(
                name,
                f'Environment variable "{name}" must be one of: '
                f"{', '.join(spec.allowed_texts)}",
            )
        value = raw
    elif isinstance(spec, NumberField):
        value = parse_number(raw, name)
    elif isinstance(spec, BooleanField):
        value = parse_boolean(raw, name)
    else:
        value = raw

    if spec.validator is not None:
        _run_validator(name, spec.validator, value)
    return FieldOutcome(name, value)


def _iter_outcomes(
    fields: dict[str, FieldSpec],
    raw_env: Mapping[str, str],
) -> Iterator[FieldOutcome]:
    for name, spec in fields.items():
        try:
            yield resolve_field(name, spec, raw_env.get(name))
        except EnvValidationError as exc:
            yield FieldOutcome(name, error=exc)


def evaluate(schema: SchemaInput, raw_env: Mapping[str, str]) -> Iterator[FieldOutcome]:
    """
    Lazily resolve every field of a schema, in schema order.

    The schema is normalized eagerly, so SchemaError is raised by this call
    rather than by the first iteration. Fields are only resolved as the
    iterator is consumed; stopping early skips the remaining fields
    (including their validators).

    Raises:
        SchemaError: If the schema is malformed.
    """
    fields = build_schema(schema)
    return _iter_outcomes(fields, raw_env)


# =============================================================================
# Debug Logging
# =============================================================================


def _log_report(report: EnvReport) -> None:
    log = get_logger(__name__)
    log.info("env_validation_started", fields=len(report.outcomes))

    for outcome in report.outcomes:
        if outcome.error is None:
            log.info(
                "env_variable",
                name=outcome.name,
                value=outcome.value,
                source="default" if outcome.from_default else "environment",
                entry=outcome.log_entry,
            )
        else:
            log.warning(
                "env_variable_invalid",
                name=outcome.name,
                error_kind=outcome.error.kind.value,
                error=outcome.error.message,
            )

    log.info(
        "env_validation_finished",
        resolved=len(report.values),
        failed=len(report.errors),
    )


# =============================================================================
# Public API
# =============================================================================


def check_env(
    schema: SchemaInput,
    raw_env: Mapping[str, str] | None = None,
) -> EnvReport:
    """
    Evaluate every field and return the report without raising.

    Args:
        schema: Field name to field model (or mapping).
        raw_env: Environment to read. Defaults to a snapshot of os.environ.

    Raises:
        SchemaError: If the schema is malformed.
    """
    env = snapshot_environ() if raw_env is None else raw_env
    report = EnvReport()
    for outcome in evaluate(schema, env):
        report.add(outcome)
    return report


def validate_env(
    schema: SchemaInput,
    raw_env: Mapping[str, str],
    config: EnvConfig | None = None,
) -> dict[str, Any]:
    """
    Validate raw_env against schema and return the typed values.

    Args:
        schema: Field name to field model (or mapping).
        raw_env: Environment to read. Never mutated.
        config: Run options. Defaults to fail fast without debug logging.

    Returns:
        Field name to typed value, one entry per field.

    Raises:
        SchemaError: If the schema is malformed, whatever config.throw says.
        EnvValidationError: With config.throw, the first failing field's error.
        AggregatedEnvError: Without config.throw, every failure at once.
    """
    config = config or EnvConfig()
    outcomes = evaluate(schema, raw_env)

    report = EnvReport()
    try:
        for outcome in outcomes:
            report.add(outcome)
            if outcome.error is not None and config.throw:
                raise outcome.error
    finally:
        if config.debug_mode:
            _log_report(report)

    report.raise_for_errors()
    return report.values


def define_env(
    schema: SchemaInput,
    *,
    debug_mode: bool | None = None,
    throw: bool | None = None,
    environ: Mapping[str, str] | None = None,
    env_file: str | os.PathLike[str] | None = None,
) -> dict[str, Any]:
    """
    Validate the process environment against a schema.

    Options left as None fall back to the ENVSCHEMA_* settings, which
    default to fail fast without debug logging.

    Args:
        schema: Field name to field model (or mapping).
        debug_mode: Log every resolved variable.
        throw: Fail on the first error instead of collecting all of them.
        environ: Mapping to validate instead of os.environ.
        env_file: .env file overlaid on the environment (process values win).

    Returns:
        Field name to typed value.

    Raises:
        SettingsError: If an ENVSCHEMA_* variable is invalid.
        SchemaError: If the schema is malformed.
        EnvValidationError: If the environment does not satisfy the schema.

    Example:
        env = define_env({"PORT": NumberField(default=3000)})
    """
    settings = get_settings()
    config = settings.to_config(throw=throw, debug_mode=debug_mode)
    if env_file is None:
        env_file = settings.env_file

    raw_env = snapshot_environ(env_file, environ=environ)
    return validate_env(schema, raw_env, config)


__all__ = [
    "FieldOutcome",
    "EnvReport",
    "resolve_field",
    "evaluate",
    "check_env",
    "validate_env",
    "define_env",
]
