"""
envschema: declarative validation of environment variables.

Describe the variables an application expects, then resolve them once at
startup into typed values:

    from envschema import BooleanField, EnumField, NumberField, define_env

    env = define_env(
        {
            "NODE_ENV": EnumField(allowed_values=("development", "production", "test")),
            "PORT": NumberField(default=3000),
            "DEBUG": BooleanField(default=False),
        }
    )

By default the first invalid variable raises. Pass throw=False to collect
every failure into one AggregatedEnvError, or use check_env() to get an
EnvReport without raising.
"""

from envschema.config import EnvConfig, EnvSchemaSettings, get_settings
from envschema.environment import read_env_file, snapshot_environ
from envschema.schema import (
    AggregatedEnvError,
    BooleanField,
    EnumField,
    EnvSchemaError,
    EnvValidationError,
    ErrorKind,
    FieldSpec,
    InvalidEnumError,
    InvalidTypeError,
    MissingEnvError,
    NumberField,
    SchemaError,
    SettingsError,
    StringField,
    ValidationFailedError,
    build_schema,
)
from envschema.validation import (
    EnvReport,
    FieldOutcome,
    check_env,
    define_env,
    validate_env,
)

__version__ = "0.3.0"

__all__ = [
    "__version__",
    # Entry points
    "define_env",
    "validate_env",
    "check_env",
    "EnvReport",
    "FieldOutcome",
    # Schema
    "StringField",
    "NumberField",
    "BooleanField",
    "EnumField",
    "FieldSpec",
    "build_schema",
    # Configuration
    "EnvConfig",
    "EnvSchemaSettings",
    "get_settings",
    # Environment
    "snapshot_environ",
    "read_env_file",
    # Errors
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
