"""
Field specifications for environment schemas.

Each supported kind has its own frozen Pydantic model carrying only the
attributes legal for that kind, so a malformed field fails when it is built
instead of halfway through a validation run.

Schemas can be written with the models directly or as plain mappings:

    from envschema.schema.fields import EnumField, NumberField, build_schema

    schema = build_schema(
        {
            "NODE_ENV": EnumField(
                allowed_values=("development", "production", "test"),
                default="development",
            ),
            "PORT": NumberField(default=3000),
            "DEBUG": {"kind": "boolean", "default": False},
        }
    )

A field without a default is required.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    model_validator,
)

from envschema.schema.errors import SchemaError

# Custom validator contract: return True (or any non-False, non-str value) to
# accept, False to reject, or a str describing why the value was rejected.
Validator = Callable[[Any], Any]


class BaseField(BaseModel):
    """Attributes shared by every field kind."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    validator: Validator | None = Field(
        default=None,
        description="Optional check run against the typed value.",
    )
    description: str | None = Field(
        default=None,
        description="Free text shown by `envschema describe`.",
    )

    @property
    def is_required(self) -> bool:
        """A field is required when it has no default."""
        return getattr(self, "default", None) is None


class StringField(BaseField):
    """Raw text, used unmodified."""

    kind: Literal["string"] = "string"
    default: StrictStr | None = None


class NumberField(BaseField):
    """Decimal number; integer literals stay `int`."""

    kind: Literal["number"] = "number"
    default: StrictInt | StrictFloat | None = None


class BooleanField(BaseField):
    """true/false/1/0, case-insensitive."""

    kind: Literal["boolean"] = "boolean"
    default: StrictBool | None = None


class EnumField(BaseField):
    """
    Text restricted to a fixed set of literals.

    Allowed values may be declared as numbers, but membership is always
    decided on their text form: raw "2" matches an allowed value of 2, and the
    resolved value is the raw text. Defaults are therefore text too, so a
    field resolves to the same type whether it was set or defaulted.
    """

    kind: Literal["enum"] = "enum"
    allowed_values: tuple[StrictStr | StrictInt | StrictFloat, ...] = Field(
        ...,
        min_length=1,
        description="Permitted literals, in display order.",
    )
    default: StrictStr | None = None

    @property
    def allowed_texts(self) -> tuple[str, ...]:
        return tuple(str(value) for value in self.allowed_values)

    @model_validator(mode="after")
    def validate_default_is_allowed(self) -> "EnumField":
        """Reject a default that is not one of the allowed values."""
        if self.default is not None and self.default not in self.allowed_texts:
            raise ValueError(
                f"default {self.default!r} is not one of: {', '.join(self.allowed_texts)}"
            )
        return self


FieldSpec = Union[StringField, NumberField, BooleanField, EnumField]

FIELD_TYPES: dict[str, type[BaseField]] = {
    "string": StringField,
    "number": NumberField,
    "boolean": BooleanField,
    "enum": EnumField,
}

# camelCase keys accepted for schemas ported from JavaScript configs
_KEY_ALIASES = {
    "type": "kind",
    "defaultValue": "default",
    "validValues": "allowed_values",
    "validate": "validator",
}


def _summarize(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "entry"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def build_field(name: str, spec: BaseField | Mapping[str, Any]) -> FieldSpec:
    """
    Normalize one schema entry into a field model.

    Args:
        name: Environment variable name the entry is keyed by.
        spec: A field model, or a mapping with a `kind` (or `type`) key.

    Returns:
        The field model.

    Raises:
        SchemaError: If the entry cannot describe a valid field.
    """
    if not isinstance(name, str) or not name:
        raise SchemaError(f"Schema keys must be non-empty strings, got {name!r}")

    if isinstance(spec, BaseField):
        return spec  # type: ignore[return-value]

    if not isinstance(spec, Mapping):
        raise SchemaError(
            f'Schema entry "{name}" must be a field or a mapping, '
            f"got {type(spec).__name__}",
            field=name,
        )

    data = {_KEY_ALIASES.get(key, key): value for key, value in spec.items()}
    kind = data.get("kind")
    if kind is None:
        raise SchemaError(f'Schema entry "{name}" has no kind', field=name)

    field_cls = FIELD_TYPES.get(str(kind).lower())
    if field_cls is None:
        raise SchemaError(
            f'Unknown kind "{kind}" for "{name}". '
            f"Must be one of: {', '.join(FIELD_TYPES)}",
            field=name,
        )
    data["kind"] = str(kind).lower()

    if field_cls is EnumField and not data.get("allowed_values"):
        raise SchemaError(f'Enum "{name}" missing allowed values', field=name)

    try:
        return field_cls.model_validate(data)  # type: ignore[return-value]
    except ValidationError as exc:
        raise SchemaError(
            f'Invalid schema entry "{name}": {_summarize(exc)}', field=name
        ) from exc


def build_schema(
    schema: Mapping[str, BaseField | Mapping[str, Any]],
) -> dict[str, FieldSpec]:
    """Normalize a whole schema, preserving its order."""
    if not isinstance(schema, Mapping):
        raise SchemaError(f"Schema must be a mapping, got {type(schema).__name__}")
    return {name: build_field(name, spec) for name, spec in schema.items()}


__all__ = [
    "Validator",
    "BaseField",
    "StringField",
    "NumberField",
    "BooleanField",
    "EnumField",
    "FieldSpec",
    "FIELD_TYPES",
    "build_field",
    "build_schema",
]
