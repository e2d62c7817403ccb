"""
Batch Percentage Allocator for the ERP Finance Gateway.

Applies one percentage to many base values (salaries, typically) and
rounds each result on its own. Only selected recipients produce a
record; unselected ones are left out rather than zero-filled.

There is no cross-recipient reconciliation: the batch total is the sum
of the individually rounded amounts.
"""

from decimal import Decimal
from typing import Iterable

from src.domain.entities import AllocationRecord, BatchAllocation, Recipient
from src.domain.exceptions import InvalidArgumentException

from .money import Number, from_cents, to_cents, to_decimal

MAX_PERCENTAGE = Decimal(100)


def validate_percentage(percentage: Number) -> Decimal:
    """Parse a percentage and ensure it lies in [0, 100]."""
    value = to_decimal(percentage)
    if value < 0 or value > MAX_PERCENTAGE:
        raise InvalidArgumentException(
            f"percentage must be between 0 and 100, got {value}"
        )
    return value


def compute_allocation_cents(base_value_cents: int, percentage: Decimal) -> int:
    """
    Amount in cents for one base value: round(base * pct / 100), half-up.

    Example:
        compute_allocation_cents(150000, Decimal(40)) -> 60000
    """
    if base_value_cents < 0:
        raise InvalidArgumentException(
            f"base value must not be negative, got {base_value_cents} cents"
        )
    return to_cents(from_cents(base_value_cents) * percentage / 100)


def allocate_percentage(
    percentage: Number,
    recipients: Iterable[Recipient],
) -> BatchAllocation:
    """
    Compute an allocation for every selected recipient.

    Args:
        percentage: Share of each base value to allocate (0-100)
        recipients: Candidates; only those flagged ``selected`` are used

    Returns:
        BatchAllocation with one record per selected recipient, in input order

    Raises:
        InvalidArgumentException: If the percentage is out of range
    """
    pct = validate_percentage(percentage)

    records = [
        AllocationRecord(
            recipient_id=recipient.id,
            recipient_name=recipient.name,
            base_value_cents=recipient.base_value_cents,
            amount_cents=compute_allocation_cents(recipient.base_value_cents, pct),
        )
        for recipient in recipients
        if recipient.selected
    ]

    return BatchAllocation(percentage=pct, records=records)
