"""
Schema package: field models and the error taxonomy.

Usage:
    from envschema.schema import EnumField, NumberField, build_schema

    schema = build_schema({"PORT": NumberField(default=8000)})
"""

from envschema.schema.errors import (
    AggregatedEnvError,
    EnvSchemaError,
    EnvValidationError,
    ErrorKind,
    InvalidEnumError,
    InvalidTypeError,
    MissingEnvError,
    SchemaError,
    SettingsError,
    ValidationFailedError,
)
from envschema.schema.fields import (
    FIELD_TYPES,
    BaseField,
    BooleanField,
    EnumField,
    FieldSpec,
    NumberField,
    StringField,
    Validator,
    build_field,
    build_schema,
)

__all__ = [
    # Fields
    "BaseField",
    "StringField",
    "NumberField",
    "BooleanField",
    "EnumField",
    "FieldSpec",
    "FIELD_TYPES",
    "Validator",
    "build_field",
    "build_schema",
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
