"""Numeric literal parsing for decimal, 0b, 0o and 0x tokens."""
import re

from ..utils.errors import InvalidLiteral

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_LIMIT = 1 << 64

PREFIXES = {
    '0b': (2, re.compile(r'^[01]+$')),
    '0o': (8, re.compile(r'^[0-7]+$')),
    '0x': (16, re.compile(r'^[0-9A-Fa-f]+$')),
}

DECIMAL = re.compile(r'^[+-]?[0-9]+$')


def looks_numeric(token: str) -> bool:
    """True when the token is shaped like a number literal.

    Prefixed tokens count even when their digits are bad, so that a
    malformed literal fails loudly instead of passing through as text.
    """
    return token[:2] in PREFIXES or bool(DECIMAL.match(token))


def parse_number(token: str) -> int:
    """Parse a literal into a signed 64-bit integer"""
    prefix = token[:2]
    if prefix in PREFIXES:
        base, digits_pattern = PREFIXES[prefix]
        digits = token[2:]
        if not digits_pattern.match(digits):
            raise InvalidLiteral(f"Invalid base-{base} literal '{token}'")
        value = int(digits, base)
        if value >= UINT64_LIMIT:
            raise InvalidLiteral(f"Literal '{token}' does not fit in 64 bits")
        # prefixed literals are raw 64-bit patterns
        if value > INT64_MAX:
            value -= UINT64_LIMIT
        return value

    if not DECIMAL.match(token):
        raise InvalidLiteral(f"Invalid number format '{token}'")
    value = int(token, 10)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidLiteral(f"Literal '{token}' is out of 64-bit range")
    return value


def normalize_number(token: str) -> str:
    return str(parse_number(token))
