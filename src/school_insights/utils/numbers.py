"""Rounding helpers shared by the estimator, classifier and composer."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps the shortest repr, so 2.675 stays 2.675 rather than 2.67499...
    return Decimal(str(value))


def round_half_up(value: Number, digits: int = 0) -> float:
    """Round half up (2.5 -> 3), unlike the built-in round()."""
    quantum = Decimal(1).scaleb(-digits)
    return float(_to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: Number, whole: Number, digits: int = 1) -> float:
    """Return part/whole as a percentage, 0.0 when whole is zero."""
    if not whole:
        return 0.0
    return round_half_up(_to_decimal(part) * 100 / _to_decimal(whole), digits)
