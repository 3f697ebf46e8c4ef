"""Formatting utilities for currency and date display.

Formatting is a presentation concern: the ledger and settlement code return
raw ``Decimal`` values and callers format them at render time.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

CENT = Decimal("0.01")


def round_currency(amount: Union[Decimal, int, float]) -> Decimal:
    """Round an amount to cents using half-up rounding.

    Example:
        >>> round_currency(Decimal("145.21666"))
        Decimal('145.22')
    """

    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(amount: Union[Decimal, int, float], symbol: str = "$") -> str:
    """Format a currency amount with thousands separators.

    Example:
        >>> format_currency(Decimal("1234.5"))
        '$1,234.50'
        >>> format_currency(Decimal("-3"))
        '-$3.00'
    """

    rounded = round_currency(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"


def format_display_date(value: date) -> str:
    """Render a date the way the dashboard lists show it, e.g. ``May 15, 2023``."""

    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_percentage(fraction: Decimal) -> str:
    """Render a fraction such as a savings rate as a whole percentage."""

    return f"{(Decimal(str(fraction)) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP)}%"
