"""Display formatting for monetary and percentage values.

Currency is always whole-dollar USD: no cents, thousands separators, and
ties rounded half away from zero.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from .parsing import to_decimal

_WHOLE_DOLLAR = Decimal("1")


def round_dollars(amount: Any) -> Decimal:
    """Round an amount to whole dollars, ties away from zero."""
    return to_decimal(amount).quantize(_WHOLE_DOLLAR, rounding=ROUND_HALF_UP)


def format_currency(amount: Any) -> str:
    """Format an amount as whole-dollar USD.

    >>> format_currency(1234.5)
    '$1,235'
    >>> format_currency("-250.4")
    '-$250'
    >>> format_currency("abc")
    '$0'
    """
    rounded = round_dollars(amount)
    if rounded == 0:
        return "$0"
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def format_percentage(value: Any, digits: Optional[int] = None) -> str:
    """Format a percentage value (6 means 6%).

    Without ``digits`` the value is shown as entered, minus trailing zeros.
    """
    number = to_decimal(value)
    if digits is not None:
        number = number.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
        return f"{number:f}%"
    if number == 0:
        return "0%"
    return f"{number.normalize():f}%"


__all__ = ["round_dollars", "format_currency", "format_percentage"]
