"""Domain Entities - Core business objects."""

from .allocation import AllocationRecord, BatchAllocation, Recipient
from .ledger import LedgerWriteResult
from .payment_condition import PaymentCondition, PaymentConditionKind
from .plan import Installment, InstallmentPlan, InstallmentStatus
from .saved_filter import DateRange, SavedFilter
from .work_order import WorkOrder

__all__ = [
    "AllocationRecord",
    "BatchAllocation",
    "Recipient",
    "LedgerWriteResult",
    "PaymentCondition",
    "PaymentConditionKind",
    "Installment",
    "InstallmentPlan",
    "InstallmentStatus",
    "DateRange",
    "SavedFilter",
    "WorkOrder",
]
