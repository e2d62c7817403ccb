"""Data transfer objects for work order receivable generation."""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from src.domain.entities import InstallmentPlan, PaymentCondition

COMPETENCIA_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def is_valid_competencia(value: Optional[str]) -> bool:
    return bool(value) and COMPETENCIA_PATTERN.match(value) is not None


@dataclass(frozen=True)
class InstallmentInput:
    """A hand-edited installment row sent back by the caller."""
    sequence_number: int
    due_date: Optional[date]
    amount_cents: int


@dataclass(frozen=True)
class GenerateReceivablesRequest:
    """Input data for turning a work order into receivables."""

    work_order_id: str
    bank_account_id: Optional[str]
    chart_of_accounts_id: Optional[str]
    competencia: Optional[str]
    note: Optional[str] = None
    installments: Optional[List[InstallmentInput]] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.bank_account_id:
            errors.append("bank_account_id is required")

        if not self.chart_of_accounts_id:
            errors.append("chart_of_accounts_id is required")

        if not self.competencia:
            errors.append("competencia is required")
        elif not is_valid_competencia(self.competencia):
            errors.append("competencia must be in YYYY-MM format")

        if self.installments is not None:
            if not self.installments:
                errors.append("at least one installment is required")

            for inst in self.installments:
                if inst.due_date is None:
                    errors.append(f"installment {inst.sequence_number} has no due date")
                if inst.amount_cents < 0:
                    errors.append(f"installment {inst.sequence_number} has a negative amount")

            sequence_numbers = [inst.sequence_number for inst in self.installments]
            for number in sorted({n for n in sequence_numbers if sequence_numbers.count(n) > 1}):
                errors.append(f"installment number {number} is used more than once")

        return errors


@dataclass(frozen=True)
class ReceivableOptions:
    """Validated form values applied to every record written for a work order."""

    bank_account_id: str
    chart_of_accounts_id: str
    competencia: str
    note: str


@dataclass
class ReceivablePreview:
    """Computed plan plus form defaults for a work order."""

    work_order_id: str
    work_order_number: str
    total_cents: int
    plan: InstallmentPlan
    payment_condition: Optional[PaymentCondition] = None
    bank_account_id: Optional[str] = None
    chart_of_accounts_id: Optional[str] = None
    competencia: Optional[str] = None
    note: str = ""
    warnings: List[str] = field(default_factory=list)
