"""
Validation package: coercion helpers and the schema validator.

Usage:
    from envschema.validation import check_env, define_env, validate_env

    report = check_env(schema, {"PORT": "8080"})
    if not report.ok:
        print("\n".join(report.messages))
"""

from envschema.validation.coercion import parse_boolean, parse_number
from envschema.validation.validator import (
    EnvReport,
    FieldOutcome,
    check_env,
    define_env,
    evaluate,
    resolve_field,
    validate_env,
)

__all__ = [
    "parse_number",
    "parse_boolean",
    "FieldOutcome",
    "EnvReport",
    "resolve_field",
    "evaluate",
    "check_env",
    "validate_env",
    "define_env",
]
