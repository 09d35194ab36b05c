from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[int, float, Decimal, str]

CENT = Decimal("0.01")


def to_decimal(value: Optional[Number], default: Union[int, str] = 0) -> Decimal:
    """Decimal from an API float (via str, so 0.1 stays 0.1)"""
    if value is None:
        return Decimal(default)
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def safe_divide(numerator: Decimal, denominator: Number) -> Decimal:
    denominator = to_decimal(denominator)
    if denominator == 0:
        return Decimal(0)
    return numerator / denominator
