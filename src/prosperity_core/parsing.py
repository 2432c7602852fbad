"""Lenient coercion of form and record values.

Analysis and proposal records arrive from the portal's forms, so numbers are
often strings, blanks, or missing entirely. Everything here returns a usable
value and never raises: unparsable input becomes the supplied default.

Strings are read the way the portal's ``parseFloat`` reads them, so a leading
numeric prefix is honoured (``"12.5 per month"`` is 12.5) while text with no
leading number (``"abc"``, ``"$1,000"``) falls back to the default. Magnitudes
beyond the largest double (``"9e999"``) read as infinite, so they fall back
too.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

ZERO = Decimal("0")

# Largest finite IEEE 754 double
MAX_MAGNITUDE = Decimal("1.7976931348623157e308")

_NUMERIC_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def is_blank(value: Any) -> bool:
    """Return True for None and whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _bounded(parsed: Decimal, default: Decimal) -> Decimal:
    if not parsed.is_finite() or abs(parsed) > MAX_MAGNITUDE:
        return default
    return parsed


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """Coerce a record value to a finite Decimal.

    Args:
        value: int, float, Decimal, numeric string, or anything else.
        default: Returned when the value cannot be read as a finite number.

    Returns:
        The parsed Decimal, or ``default``.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, Decimal):
        return _bounded(value, default)

    if isinstance(value, int):
        return _bounded(Decimal(value), default)

    if isinstance(value, float):
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        parsed = Decimal(str(value))
        return _bounded(parsed, default)

    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value.strip())
        if not match:
            return default
        try:
            parsed = Decimal(match.group(0))
        except InvalidOperation:
            return default
        return _bounded(parsed, default)

    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return default
    return _bounded(parsed, default)


def to_int(value: Any, default: int = 0) -> int:
    """Coerce a record value to an int, truncating toward zero."""
    parsed = to_decimal(value, default=Decimal(default))
    return int(parsed)


def to_date(value: Any) -> Optional[date]:
    """Coerce a record value to a date.

    Accepts ``date`` and ``datetime`` objects and ISO-8601 strings, with or
    without a time part (``"2035-01-01"``, ``"2035-01-01T00:00:00Z"``).
    Anything else returns None.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) < 10:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


__all__ = ["ZERO", "MAX_MAGNITUDE", "is_blank", "to_decimal", "to_int", "to_date"]
