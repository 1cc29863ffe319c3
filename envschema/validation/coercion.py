"""
Text-to-value coercion for number and boolean fields.

Both helpers take the raw environment text plus the variable name and raise
InvalidTypeError with a message naming both, so callers never have to format
coercion errors themselves.
"""

from __future__ import annotations

import math
import re

from envschema.schema.errors import InvalidTypeError

# Optional sign, digits with an optional fraction (".5" and "5." included),
# optional exponent. ASCII digits only; hex, underscores, "nan" and "inf" are
# not decimal text.
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

TRUE_VALUES = frozenset({"true", "1"})
FALSE_VALUES = frozenset({"false", "0"})


def parse_number(raw: str, name: str) -> int | float:
    """
    Parse decimal text into an int (integer literals) or a float.

    Surrounding whitespace is ignored.

    Raises:
        InvalidTypeError: If the text is not a finite decimal number.
    """
    text = raw.strip()
    if not _DECIMAL_PATTERN.fullmatch(text):
        raise InvalidTypeError(name, f'Cannot parse "{raw}" as number for {name}')

    try:
        if "." not in text and "e" not in text.lower():
            return int(text)
        value = float(text)
    except ValueError as exc:
        # int() refuses literals longer than sys.get_int_max_str_digits()
        raise InvalidTypeError(
            name, f'Cannot parse "{raw}" as number for {name}'
        ) from exc

    if not math.isfinite(value):
        raise InvalidTypeError(name, f'Cannot parse "{raw}" as number for {name}')
    return value


def parse_boolean(raw: str, name: str) -> bool:
    """
    Parse true/false/1/0 (case-insensitive).

    Raises:
        InvalidTypeError: For any other text.
    """
    lowered = raw.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise InvalidTypeError(
        name,
        f'Cannot parse "{raw}" as boolean for {name}. '
        "Expected: true, false, 1, or 0",
    )


__all__ = ["parse_number", "parse_boolean", "TRUE_VALUES", "FALSE_VALUES"]
