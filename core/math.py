"""
Math utilities for the tracker.

Balances are Decimal end to end (no float money).
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Iterable, Optional, Union


def safe_decimal(value: Union[str, int, Decimal, None], default: Decimal = Decimal("0")) -> Decimal:
    """
    Safely convert value to Decimal.

    Args:
        value: Value to convert
        default: Default if conversion fails

    Returns:
        Decimal value
    """
    if value is None:
        return default

    try:
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return default


def positive_amount(value: Union[str, int, Decimal, None]) -> Optional[Decimal]:
    """
    Parse a coin amount, keeping it only if it is a finite number > 0.

    Returns None for missing, unparseable, NaN, infinite, zero
    or negative amounts.
    """
    amount = safe_decimal(value, default=Decimal("0"))
    if not amount.is_finite() or amount <= 0:
        return None
    return amount


# Enough digits for any uint256 amount
AMOUNT_PRECISION = 78


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    """Sum Decimal amounts exactly, starting from Decimal 0."""
    with localcontext() as ctx:
        ctx.prec = AMOUNT_PRECISION
        return sum(amounts, Decimal("0"))


def format_amount(amount: Decimal) -> str:
    """
    Render an amount without exponent or trailing zeros.

    Examples:
        Decimal("1500") -> "1500"
        Decimal("1E+3") -> "1000"
        Decimal("2.50") -> "2.5"
    """
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
