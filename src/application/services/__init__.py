"""Application services - use case implementations."""

from .ledger_writer import LedgerWriter
from .plan_service import PlanService
from .receivable_service import ReceivableService
from .advance_service import AdvanceService
from .saved_filter_service import SavedFilterService

__all__ = [
    "LedgerWriter",
    "PlanService",
    "ReceivableService",
    "AdvanceService",
    "SavedFilterService",
]
