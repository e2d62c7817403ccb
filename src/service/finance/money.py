"""
Money Arithmetic for the ERP Finance Gateway.

All amounts are carried as integer cents once they enter the service.
Conversions go through ``decimal.Decimal`` so that values such as 0.1 or
333.335 never pick up binary floating-point drift, and rounding is
always half-up to two decimal places.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, Union

from src.domain.exceptions import InvalidArgumentException

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """
    Convert a currency-like value to Decimal without float drift.

    Floats are converted through their shortest repr, so 0.1 becomes
    Decimal("0.1") rather than 0.1000000000000000055...

    Raises:
        InvalidArgumentException: For booleans, non-finite values, or
            strings that are not numbers
    """
    if isinstance(value, bool):
        raise InvalidArgumentException(f"Not a monetary value: {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidArgumentException(f"Not a finite monetary value: {value!r}")
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidArgumentException(f"Not a monetary value: {value!r}")
    else:
        raise InvalidArgumentException(
            f"Unsupported monetary type: {type(value).__name__}"
        )

    if not result.is_finite():
        raise InvalidArgumentException(f"Not a finite monetary value: {value!r}")

    return result


def round_currency(value: Number) -> Decimal:
    """
    Round to 2 decimal places using half-up rounding.

    Examples:
        round_currency(2.675)  -> Decimal("2.68")
        round_currency("10.005") -> Decimal("10.01")
    """
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(value: Number) -> int:
    """Convert a currency value to integer cents (half-up)."""
    return int(round_currency(value) * 100)


def from_cents(cents: int) -> Decimal:
    """Convert integer cents to a 2-decimal currency value."""
    return (Decimal(cents) / 100).quantize(CENT)


def cents_to_float(cents: int) -> float:
    """Float representation for JSON payloads sent to the entity store."""
    return float(from_cents(cents))


def distribute_evenly(total_cents: int, count: int) -> List[int]:
    """
    Split a total into ``count`` amounts whose sum is exactly the total.

    Every amount is ``floor(total / count)``; the last one also receives
    the remainder.

    Args:
        total_cents: Amount to split, in cents (>= 0)
        count: Number of parts (>= 1)

    Returns:
        List of ``count`` amounts in cents

    Raises:
        InvalidArgumentException: If count <= 0 or total_cents < 0

    Example:
        distribute_evenly(10000, 3) -> [3333, 3333, 3334]
    """
    if count <= 0:
        raise InvalidArgumentException(f"count must be positive, got {count}")
    if total_cents < 0:
        raise InvalidArgumentException(
            f"total must not be negative, got {total_cents} cents"
        )

    base_amount, remainder = divmod(total_cents, count)

    amounts = [base_amount] * count
    amounts[-1] += remainder

    return amounts
