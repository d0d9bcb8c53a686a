"""
Money helpers shared by the split and settlement calculators.

Amounts are carried as ``Decimal`` and quantized to the cent whenever they
cross a boundary. Floats are converted through ``str()`` so that ``0.1``
becomes ``Decimal("0.1")`` rather than its binary approximation.
"""
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP
from typing import Any, Union
from tripsplit.core.config import settings
from tripsplit.core.exceptions import ValidationError

Numeric = Union[int, float, str, Decimal]

CENT = Decimal(1).scaleb(-settings.MONEY_DECIMAL_PLACES)
ZERO = Decimal("0")


def to_decimal(value: Any, field: str = "amount") -> Decimal:
    """
    Parse a boundary amount into a Decimal.

    Accepts Decimal, int, float and numeric strings (as returned by decimal
    database columns). ``None`` and blank strings are treated as zero.

    Raises:
        ValidationError: if the value is not numeric or not finite
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        if not value.strip():
            return ZERO
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ValidationError(f"{field} is not a valid number: {value!r}")
    else:
        raise ValidationError(f"{field} must be a number, got {type(value).__name__}")

    if not result.is_finite():
        raise ValidationError(f"{field} must be finite, got {value!r}")
    return result


def _to_cent(amount: Numeric, rounding: str) -> Decimal:
    value = to_decimal(amount)
    try:
        return value.quantize(CENT, rounding=rounding)
    except InvalidOperation:
        raise ValidationError(f"amount is too large to represent in cents: {value}")


def quantize(amount: Numeric) -> Decimal:
    """Round to the cent using ROUND_HALF_UP."""
    return _to_cent(amount, ROUND_HALF_UP)


def floor_to_cent(amount: Numeric) -> Decimal:
    """Truncate toward zero at the cent."""
    return _to_cent(amount, ROUND_DOWN)


def format_amount(amount: Numeric) -> str:
    """Format an amount as a fixed two-decimal string, e.g. ``"12.30"``."""
    return f"{quantize(amount):.{settings.MONEY_DECIMAL_PLACES}f}"


def is_settled(amount: Decimal, tolerance: Decimal) -> bool:
    """True when the amount is within tolerance of zero (inclusive)."""
    return abs(amount) <= tolerance


def require_non_negative(amount: Decimal, field: str = "amount") -> Decimal:
    """Raise ValidationError for negative values; return the value otherwise."""
    if amount < 0:
        raise ValidationError(f"{field} must not be negative, got {amount}")
    return amount
