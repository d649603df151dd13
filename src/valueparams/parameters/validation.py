"""Validation helpers shared by the parameter types."""

import string
from typing import List

from ..errors import FormatError, RangeError

HEX_DIGITS = frozenset(string.hexdigits)
DECIMAL_DIGITS = frozenset(string.digits)


def has_only(text: str, allowed: frozenset) -> bool:
    """Return True if text is non-empty and every character is allowed."""
    return bool(text) and all(ch in allowed for ch in text)


def contains_any(text: str, chars: str) -> bool:
    """Return True if any character of chars occurs in text."""
    return any(ch in text for ch in chars)


def parse_uint(text: str, what: str, maximum: int, minimum: int = 0) -> int:
    """Parse a strictly decimal unsigned integer within [minimum, maximum].

    Signs, whitespace and empty strings are rejected; Python's int() would
    otherwise accept " +12 " or "1_000".

    Raises:
        FormatError: If text is not made of decimal digits
        RangeError: If the number is outside [minimum, maximum]
    """
    if not has_only(text, DECIMAL_DIGITS):
        raise FormatError(f"Invalid {what}: {text!r} is not a decimal number")
    value = int(text)
    if not (minimum <= value <= maximum):
        raise RangeError(f"Invalid {what}: {value} outside [{minimum}, {maximum}]")
    return value


def split_exact(text: str, separator: str, count: int, what: str) -> List[str]:
    """Split text into exactly count parts or raise FormatError."""
    parts = text.split(separator)
    if len(parts) != count:
        raise FormatError(
            f"Invalid {what}: {text!r} must have {count} parts separated by {separator!r}"
        )
    return parts
