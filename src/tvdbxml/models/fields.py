"""Field parsers for TVDB XML element text.

Every parser takes the raw text of an element (or None when the element
has no text) and returns the typed value, or None when the text does not
apply to the field. Callers leave the field untouched on None.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=Enum)

# en-US "Number" style: optional sign, digit groups, optional decimals
_NUMBER_PATTERN = re.compile(r"^[+-]?(\d{1,3}(,\d{3})+|\d*)(\.\d*)?$", re.ASCII)
_INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

_DATETIME_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y",
)


def parse_text(text: str | None) -> str | None:
    """Return the text when it is non-empty, None otherwise."""
    if not text:
        return None
    return text


def parse_int(text: str | None) -> int | None:
    """Parse an integer using invariant rules.

    Args:
        text: Element text such as "42" or " -1 ".

    Returns:
        The integer, or None if the text is empty or malformed.
    """
    if not text:
        return None
    value = text.strip()
    if not _INTEGER_PATTERN.fullmatch(value):
        return None
    return int(value)


def parse_float(text: str | None) -> float | None:
    """Parse a decimal number using invariant (en-US) rules.

    Accepts "." as decimal separator and "," as thousands separator.

    Args:
        text: Element text such as "7.9" or "1,234.5".

    Returns:
        The number, or None if the text is empty or malformed.
    """
    if not text:
        return None
    value = text.strip()
    if not value or not _NUMBER_PATTERN.match(value) or not any(c.isdigit() for c in value):
        return None
    try:
        return float(value.replace(",", ""))
    except ValueError:
        return None


def parse_flag(text: str | None) -> bool:
    """Parse an integer flag: any positive integer is True, everything else False."""
    value = parse_int(text)
    return value is not None and value > 0


def parse_bool(text: str | None) -> bool | None:
    """Parse "true"/"false" (any casing)."""
    if not text:
        return None
    value = text.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def parse_datetime(text: str | None) -> datetime | None:
    """Parse a date or date-time string.

    Supports ISO dates ("2009-03-09"), date-times ("2008-10-17 15:05:50")
    and US-style dates ("03/09/2009").

    Args:
        text: Element text.

    Returns:
        Parsed datetime, or None if the text is empty or invalid.
    """
    if not text:
        return None
    value = text.strip()
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def parse_enum(enum_cls: type[E], text: str | None, default: E) -> E:
    """Match text against member names of an enum, ignoring case.

    Args:
        enum_cls: Enum class to search.
        text: Element text such as "fanart".
        default: Member returned when nothing matches.

    Returns:
        The matching member, or default.
    """
    if text:
        wanted = text.strip().lower()
        for member in enum_cls:
            if member.name.lower() == wanted:
                return member
    return default


def prepare_text(text: str | None) -> str | None:
    """Turn a pipe-delimited list into a comma-separated one.

    "|Comedy|Crime|" becomes "Comedy, Crime". Empty text becomes None.
    """
    if not text:
        return None
    if "|" not in text:
        return text
    result = text.replace("|", ", ")
    if result.startswith(", "):
        result = result[1:].strip()
    if result.endswith(","):
        result = result[: result.rindex(",")].strip()
    return result or None


def same_value(current: object, new: object) -> bool:
    """Compare two field values; strings compare case-insensitively."""
    if isinstance(current, str) and isinstance(new, str):
        return current.casefold() == new.casefold()
    return current == new
