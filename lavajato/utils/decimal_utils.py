# lavajato/utils/decimal_utils.py
from decimal import Decimal, ROUND_HALF_UP, ROUND_FLOOR

TWOPLACES = Decimal("0.01")
THREEPLACES = Decimal("0.001")


def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    if isinstance(value, Decimal):
        return value.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def to_quantity(value) -> Decimal:
    if value is None:
        return Decimal("0.000")
    return Decimal(str(value)).quantize(THREEPLACES, rounding=ROUND_HALF_UP)


def sum_prices(prices) -> Decimal:
    total = sum((to_decimal(p) for p in prices), Decimal("0.00"))
    return total.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def loyalty_points_for(total, divisor: int) -> int:
    """One point per `divisor` currency units, rounded down."""
    return int((to_decimal(total) / divisor).to_integral_value(rounding=ROUND_FLOOR))
