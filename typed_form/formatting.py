"""Display formatting for form and payload values.

These produce text for display only. Stored values (a phone number kept as
a digit string, an amount kept as a number) are never replaced by their
formatted form.
"""

import math
import re

from babel.numbers import format_currency as babel_format_currency

from typed_form.coercion import to_text

NON_DIGIT_PATTERN = re.compile(r"\D")
FILE_SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]


def format_phone_number(phone_number: str) -> str:
    """Format a US phone number for display.

    10 digits become "(555) 123-4567" and 11 digits with a leading 1 become
    "+1 (555) 123-4567". Punctuation in the input is ignored. Anything else
    is returned exactly as given.
    """
    digits = NON_DIGIT_PATTERN.sub("", phone_number)

    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    if len(digits) == 11 and digits[0] == "1":
        return f"+1 ({digits[1:4]}) {digits[4:7]}-{digits[7:]}"
    return phone_number


def format_currency(amount: float, currency: str = "USD", locale: str = "en-US") -> str:
    """Format an amount in a currency using the locale's conventions.

    Args:
        amount: Amount to format.
        currency: ISO 4217 currency code.
        locale: BCP 47 ("en-US") or POSIX ("en_US") locale identifier.
    """
    return babel_format_currency(amount, currency, locale=locale.replace("-", "_"))


def format_file_size(size: int, decimals: int = 2) -> str:
    """Format a byte count with a binary (1024) unit, e.g. "1.5 KB".

    Trailing zeros are dropped from the rounded value ("1 KB", not "1.00 KB").

    Raises:
        ValueError: If size is negative.
    """
    if size < 0:
        raise ValueError(f"File size cannot be negative: {size}")
    if size == 0:
        return "0 Bytes"

    unit = 0
    while unit < len(FILE_SIZE_UNITS) - 1 and size >= 1024 ** (unit + 1):
        unit += 1

    scaled = round(size / 1024**unit, max(decimals, 0))
    return f"{to_text(scaled)} {FILE_SIZE_UNITS[unit]}"


def truncate_text(text: str, max_length: int = 50) -> str:
    """Cut text to max_length characters and append "..." if it was longer."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_duration(hours: float) -> str:
    """Format a duration in hours as "1h 30m", "2h" or "45m"."""
    whole_hours = math.floor(hours)
    minutes = math.floor((hours - whole_hours) * 60 + 0.5)

    # 1.999h rounds to 60 minutes
    if minutes == 60:
        whole_hours += 1
        minutes = 0

    if whole_hours == 0:
        return f"{minutes}m"
    if minutes == 0:
        return f"{whole_hours}h"
    return f"{whole_hours}h {minutes}m"
