"""Data transfer objects for batch payroll advances."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from src.domain.entities import BatchAllocation

from .receivable import is_valid_competencia


@dataclass(frozen=True)
class BatchAdvanceRequest:
    """Input data for a batch of percentage-based advances."""

    percentage: Decimal
    payment_date: Optional[date]
    competencia: Optional[str]
    employee_ids: List[str] = field(default_factory=list)
    description: Optional[str] = None
    chart_of_accounts_id: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if self.payment_date is None:
            errors.append("payment_date is required")

        if not self.competencia:
            errors.append("competencia is required")
        elif not is_valid_competencia(self.competencia):
            errors.append("competencia must be in YYYY-MM format")

        if not self.employee_ids:
            errors.append("select at least one employee")

        return errors


@dataclass
class BatchAdvancePreview:
    """Allocations computed for a batch request, before anything is written."""

    allocation: BatchAllocation
    missing_employee_ids: List[str] = field(default_factory=list)
