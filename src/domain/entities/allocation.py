"""Batch allocation entities for percentage-based payroll advances."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List


@dataclass(frozen=True)
class Recipient:
    """An allocation candidate, typically an employee and their salary."""

    id: str
    name: str
    base_value_cents: int = 0
    selected: bool = False


@dataclass(frozen=True)
class AllocationRecord:
    """The amount computed for a single selected recipient."""

    recipient_id: str
    recipient_name: str
    base_value_cents: int
    amount_cents: int

    def to_dict(self) -> dict:
        return {
            "recipient_id": self.recipient_id,
            "recipient_name": self.recipient_name,
            "base_value_cents": self.base_value_cents,
            "amount_cents": self.amount_cents,
        }


@dataclass
class BatchAllocation:
    """Allocations for every selected recipient under one percentage."""

    percentage: Decimal
    records: List[AllocationRecord] = field(default_factory=list)

    @property
    def total_cents(self) -> int:
        """
        Informational total.

        This is the sum of independently rounded amounts and may differ
        by a few cents from rounding the unrounded total.
        """
        return sum(record.amount_cents for record in self.records)

    def to_dict(self) -> dict:
        return {
            "percentage": str(self.percentage),
            "records": [record.to_dict() for record in self.records],
            "total_cents": self.total_cents,
        }
