"""Field validators and a rule-based builder for form validate callables."""

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any
from urllib.parse import urlsplit

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
SPECIAL_CHAR_PATTERN = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")
SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")
NON_DIGIT_PATTERN = re.compile(r"\D")

Rule = Callable[[Any], str | None]


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_password(
    password: str,
    min_length: int = 8,
    require_special_char: bool = True,
    require_number: bool = True,
    require_uppercase: bool = True,
) -> bool:
    """Check a password against length and character class requirements."""
    if len(password) < min_length:
        return False
    if require_special_char and not SPECIAL_CHAR_PATTERN.search(password):
        return False
    if require_number and not re.search(r"\d", password):
        return False
    if require_uppercase and not re.search(r"[A-Z]", password):
        return False
    return True


def is_valid_phone_number(phone_number: str) -> bool:
    """Check for a US phone number: 10 digits, or 11 digits starting with 1.

    Formatting characters are ignored.
    """
    digits = NON_DIGIT_PATTERN.sub("", phone_number)
    return len(digits) == 10 or (len(digits) == 11 and digits[0] == "1")


def is_valid_url(url: str) -> bool:
    """Check that a URL has a valid scheme and something after it."""
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return False

    if not parts.scheme or not SCHEME_PATTERN.match(parts.scheme):
        return False
    return bool(parts.netloc or parts.path)


def is_valid_credit_card(card_number: str) -> bool:
    """Check a card number's length (13-19 digits) and Luhn checksum."""
    digits = NON_DIGIT_PATTERN.sub("", card_number)
    if not 13 <= len(digits) <= 19:
        return False

    total = 0
    for index, char in enumerate(reversed(digits)):
        digit = int(char)
        # Double every second digit from the right
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit

    return total % 10 == 0


def required(message: str) -> Rule:
    """Fail when the value is empty (None, "", 0, False or an empty collection)."""

    def rule(value: Any) -> str | None:
        return None if value else message

    return rule


def matches(pattern: str, message: str) -> Rule:
    """Fail when the value's text does not fully match the pattern."""
    compiled = re.compile(pattern)

    def rule(value: Any) -> str | None:
        return None if compiled.fullmatch(str(value)) else message

    return rule


def satisfies(predicate: Callable[[Any], bool], message: str) -> Rule:
    def rule(value: Any) -> str | None:
        return None if predicate(value) else message

    return rule


def at_least(minimum: int | float, message: str) -> Rule:
    """Fail when the value is not a number of at least minimum."""

    def rule(value: Any) -> str | None:
        try:
            return None if value >= minimum else message
        except TypeError:
            return message

    return rule


def build_validator(rules: Mapping[str, Sequence[Rule]]) -> Callable[[dict[str, Any]], dict[str, str]]:
    """Build a validate callable for FormController.

    Args:
        rules: Mapping of field name -> rules checked in order.

    Returns:
        A callable returning field -> message for the first failing rule of
        each field. Missing fields are validated as None.
    """

    def validate(values: dict[str, Any]) -> dict[str, str]:
        errors: dict[str, str] = {}
        for field, field_rules in rules.items():
            value = values.get(field)
            for rule in field_rules:
                message = rule(value)
                if message:
                    errors[field] = message
                    break
        return errors

    return validate
