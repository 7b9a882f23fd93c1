"""Money helpers."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from samplepool.domain.exceptions import ValidationError

CENT = Decimal("0.01")
# numeric(12, 2) columns
MAX_AMOUNT = Decimal("9999999999.99")


def quantize(amount: Decimal | int | float | str) -> Decimal:
    """Round amount to two decimal places.

    Raises ValidationError for non-finite values and amounts the money
    columns cannot hold.
    """
    try:
        value = Decimal(str(amount))
        if not value.is_finite():
            raise ValidationError("Amount must be a finite number")
        value = value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValidationError("Amount is out of range") from e
    if abs(value) > MAX_AMOUNT:
        raise ValidationError("Amount is out of range")
    return value


def to_minor_units(amount: Decimal) -> int:
    """Convert a currency amount to its smallest unit (paise, cents)."""
    return int((quantize(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))
