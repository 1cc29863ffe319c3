from __future__ import annotations

import pytest

from envschema.schema.errors import ErrorKind, InvalidTypeError
from envschema.validation.coercion import parse_boolean, parse_number


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("42", 42),
        ("-7", -7),
        ("+3", 3),
        ("3.14", 3.14),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
        (" 8080 ", 8080),
    ],
)
def test_parse_number_accepts_decimal_text(raw: str, expected: float) -> None:
    assert parse_number(raw, "PORT") == expected


def test_parse_number_keeps_integers_as_int() -> None:
    assert isinstance(parse_number("42", "PORT"), int)
    assert isinstance(parse_number("42.0", "PORT"), float)


@pytest.mark.parametrize(
    "raw",
    ["not-a-number", "0x10", "1_000", "nan", "inf", "1e999", " ", "\u0664\u0662", "\uff18\uff10"],
)
def test_parse_number_rejects_non_decimal_text(raw: str) -> None:
    with pytest.raises(InvalidTypeError) as exc_info:
        parse_number(raw, "PORT")

    assert exc_info.value.field == "PORT"
    assert exc_info.value.kind is ErrorKind.INVALID_TYPE
    assert f'Cannot parse "{raw}" as number for PORT' in str(exc_info.value)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("1", True), ("TRUE", True), ("False", False), ("0", False)],
)
def test_parse_boolean(raw: str, expected: bool) -> None:
    assert parse_boolean(raw, "DEBUG") is expected


def test_parse_boolean_rejects_other_text() -> None:
    with pytest.raises(InvalidTypeError) as exc_info:
        parse_boolean("maybe", "ENABLED")

    message = str(exc_info.value)
    assert 'Cannot parse "maybe" as boolean' in message
    assert message.endswith("Expected: true, false, 1, or 0")
