"""Single-value coercion.

Every function here is total: it returns a value for any input and never
raises. Strings are never converted to numbers by the string coercions, so
values like zip code "00501" keep their leading zeros.
"""

import math
import re
from typing import Any

from typed_form.coercion.types import FieldType

# Decimal literal with optional fraction and exponent ("42", "-1.5", ".5", "1e3")
DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

# Unsigned hex, octal and binary literals ("0x1F", "0o17", "0b101")
RADIX_PATTERN = re.compile(r"^0([xXoObB])([0-9a-fA-F]+)$")

RADIX_BASES = {"x": 16, "o": 8, "b": 2}

INFINITY_LITERALS = {
    "Infinity": math.inf,
    "+Infinity": math.inf,
    "-Infinity": -math.inf,
}

# Largest magnitude at which every integer is exactly representable as a float
MAX_EXACT_INTEGER = 2**53


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _narrow(number: float) -> int | float:
    """Return integral, exactly representable floats as int."""
    if math.isfinite(number) and number.is_integer() and abs(number) <= MAX_EXACT_INTEGER:
        return int(number)
    return number


def _parse_number(text: str) -> int | float:
    text = text.strip()
    if not text:
        return 0

    if DECIMAL_PATTERN.match(text):
        return _narrow(float(text))

    radix = RADIX_PATTERN.match(text)
    if radix:
        base = RADIX_BASES[radix.group(1).lower()]
        try:
            return int(radix.group(2), base)
        except ValueError:
            return math.nan

    return INFINITY_LITERALS.get(text, math.nan)


def to_text(value: Any) -> str:
    """Render a value as text.

    Booleans use their JSON spelling, integral floats drop the trailing
    ".0" and non-finite floats render as NaN/Infinity.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def to_number(value: Any) -> int | float:
    """Convert a value to a number, yielding NaN when it is not numeric.

    None and blank strings are 0, booleans are 0/1 and numbers are returned
    unchanged. Strings accept decimal, exponent, hex/octal/binary and
    Infinity literals. A list converts through the text of its single
    element; empty lists are 0 and longer lists are NaN.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if _is_number(value):
        return value
    if isinstance(value, str):
        return _parse_number(value)
    if isinstance(value, (list, tuple)):
        if not value:
            return 0
        if len(value) == 1:
            element = value[0]
            return _parse_number("" if element is None else to_text(element))
    return math.nan


def to_boolean(value: Any) -> bool:
    """Convert a value to a boolean by truthiness."""
    return bool(value)


def ensure_string(value: Any) -> str:
    """Return the value as a string; None becomes an empty string."""
    if value is None:
        return ""
    return to_text(value)


def ensure_number(value: Any) -> int | float:
    """Return the value as a number, or 0 if it cannot be converted."""
    if value is None:
        return 0
    number = to_number(value)
    if isinstance(number, float) and math.isnan(number):
        return 0
    return number


def preserve_numeric_string(value: Any) -> str:
    """Return the value as a string without ever parsing strings.

    Meant for phone numbers, zip codes and IDs that contain only digits but
    must stay strings. Existing strings are returned untouched.
    """
    # Already a string, numeric looking or not
    if isinstance(value, str):
        return value

    if _is_number(value):
        return to_text(value)

    if value is None:
        return ""

    return to_text(value)


def coerce_value(value: Any, field_type: FieldType | None) -> Any:
    """Coerce a value to its declared field type.

    string -> preserve_numeric_string, number -> to_number (no NaN guard),
    boolean -> to_boolean. auto and undeclared fields are returned unchanged.
    """
    if field_type == FieldType.STRING:
        return preserve_numeric_string(value)
    if field_type == FieldType.NUMBER:
        return to_number(value)
    if field_type == FieldType.BOOLEAN:
        return to_boolean(value)
    return value
