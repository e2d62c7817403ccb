"""Data transfer objects for installment plan operations."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class InstallmentDTO:
    """Single installment within a plan response."""
    sequence_number: int
    due_date: str
    amount_cents: int
    status: str


@dataclass(frozen=True)
class PlanResponse:
    """Response data for a computed installment plan."""

    total_cents: int
    anchor_date: str
    interval_days: int
    payment_condition_id: Optional[str]
    installments: List[InstallmentDTO]

    @classmethod
    def from_entity(cls, plan) -> "PlanResponse":
        installments = [
            InstallmentDTO(
                sequence_number=inst.sequence_number,
                due_date=inst.due_date.isoformat(),
                amount_cents=inst.amount_cents,
                status=inst.status.value,
            )
            for inst in plan.installments
        ]

        return cls(
            total_cents=plan.total_cents,
            anchor_date=plan.anchor_date.isoformat(),
            interval_days=plan.interval_days,
            payment_condition_id=plan.payment_condition_id,
            installments=installments,
        )
