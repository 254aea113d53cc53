"""
Scalar codec for the CyberTipline XML documents.

Turns the primitive values held by document models into wire tokens.
Absent values are never encoded: callers skip ``None`` before reaching here,
so an unset field and an omitted element are the same thing.
"""

import re
from datetime import date, datetime, timezone
from enum import Enum
from typing import TypeVar

from cybertipline.models.exceptions import DecodingException

E = TypeVar("E", bound=Enum)

# Anything outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(
    "[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def format_timestamp(dt: datetime) -> str:
    """
    Format a datetime as an ISO 8601 / xsd:dateTime token.

    Naive datetimes are treated as UTC.

    Args:
        dt: The datetime to format

    Returns:
        ISO 8601 string with offset (e.g., "2024-01-15T10:30:00+00:00")
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def format_date(d: date) -> str:
    """Format a calendar date as ``YYYY-MM-DD``, independent of locale."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def encode_scalar(value: object) -> str:
    """
    Encode a present scalar value into its wire token.

    Raises:
        ValueError: For an enumeration member with an empty token.
        TypeError: For values that have no wire representation.
    """
    # Enum and bool checks come first: str enums are str, bools are ints
    if isinstance(value, Enum):
        token = value.value
        if not isinstance(token, str) or not token:
            raise ValueError(f"{value!r} has no wire token")
        return token
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return format_date(value)
    if isinstance(value, str):
        match = _INVALID_XML_CHARS.search(value)
        if match:
            raise ValueError(
                f"character {match.group()!r} at position {match.start()} "
                "is not allowed in XML"
            )
        return value
    raise TypeError(f"Cannot encode {type(value).__name__} value")


def decode_token(enum_cls: type[E], token: str, operation: str = "decode") -> E:
    """
    Map a wire token back to its enumeration member.

    Unknown tokens fail instead of falling back to a default.
    """
    try:
        return enum_cls(token)
    except ValueError as e:
        raise DecodingException(
            operation, f"unknown {enum_cls.__name__} token {token!r}"
        ) from e
