"""Installment plan domain entities."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class InstallmentStatus(str, Enum):
    PENDING = "pendente"
    PAID = "pago"
    CANCELLED = "cancelado"


@dataclass(frozen=True)
class Installment:
    """A single scheduled partial payment within a plan."""

    sequence_number: int
    due_date: date
    amount_cents: int
    status: InstallmentStatus = InstallmentStatus.PENDING

    @property
    def amount(self) -> float:
        return self.amount_cents / 100

    def to_dict(self) -> dict:
        return {
            "sequence_number": self.sequence_number,
            "due_date": self.due_date.isoformat(),
            "amount_cents": self.amount_cents,
            "status": self.status.value,
        }


@dataclass
class InstallmentPlan:
    """
    An ephemeral, computed split of a total into dated installments.

    Plans are never persisted as such; the ledger writer turns them
    into store records and the plan is discarded.
    """

    total_cents: int
    anchor_date: date
    interval_days: int = 0
    payment_condition_id: Optional[str] = None
    installments: List[Installment] = field(default_factory=list)

    @property
    def installment_count(self) -> int:
        return len(self.installments)

    @property
    def scheduled_cents(self) -> int:
        """Sum of installment amounts; equals ``total_cents`` for generated plans."""
        return sum(inst.amount_cents for inst in self.installments)

    @property
    def first_due_date(self) -> date:
        if not self.installments:
            return self.anchor_date
        return self.installments[0].due_date

    def to_dict(self) -> dict:
        return {
            "total_cents": self.total_cents,
            "anchor_date": self.anchor_date.isoformat(),
            "interval_days": self.interval_days,
            "payment_condition_id": self.payment_condition_id,
            "installments": [inst.to_dict() for inst in self.installments],
        }
