"""Display formatting for money, rates, percentages and dates."""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP

from paydesk.domain.calculator import CENT, quantize_money, to_decimal

PLACEHOLDER = "—"


def format_money(value) -> str:
    """Format an amount with two decimals and thousands separators.

    >>> format_money(Decimal("108000"))
    '108,000.00'
    """
    if value is None:
        return PLACEHOLDER
    return f"{quantize_money(to_decimal(value)):,.2f}"


def format_rate(value) -> str:
    """Format an exchange rate with two decimals and no separators."""
    if value is None:
        return PLACEHOLDER
    return f"{to_decimal(value, 'exchange rate').quantize(CENT, rounding=ROUND_HALF_UP):.2f}"


def format_percentage(value) -> str:
    """Format a percentage without trailing zeros (10.00 -> '10', 12.50 -> '12.5')."""
    pct = to_decimal(value, "percentage")
    if pct == pct.to_integral_value():
        return str(pct.quantize(Decimal("1")))
    return f"{pct.normalize():f}"


def format_long_date(value: date | datetime) -> str:
    """Format a date as 'January 05, 2024'."""
    return value.strftime("%B %d, %Y")
