"""Pydantic schemas for API request/response validation."""

from .plan import InstallmentSchema, PlanResponseSchema, SimulatePlanRequestSchema
from .receivable import (
    GenerateReceivablesRequestSchema,
    InstallmentInputSchema,
    LedgerWriteResultSchema,
    PaymentConditionSchema,
    ReceivablePreviewSchema,
)
from .advance import (
    AllocationRecordSchema,
    BatchAdvancePreviewSchema,
    BatchAdvanceRequestSchema,
)
from .saved_filter import (
    DateRangeSchema,
    PeriodPresetSchema,
    PeriodResponseSchema,
    SavedFilterCreateSchema,
    SavedFilterListSchema,
    SavedFilterSchema,
)
from .error import ErrorResponseSchema, LedgerWriteErrorSchema

__all__ = [
    "InstallmentSchema",
    "PlanResponseSchema",
    "SimulatePlanRequestSchema",
    "GenerateReceivablesRequestSchema",
    "InstallmentInputSchema",
    "LedgerWriteResultSchema",
    "PaymentConditionSchema",
    "ReceivablePreviewSchema",
    "AllocationRecordSchema",
    "BatchAdvancePreviewSchema",
    "BatchAdvanceRequestSchema",
    "DateRangeSchema",
    "PeriodPresetSchema",
    "PeriodResponseSchema",
    "SavedFilterCreateSchema",
    "SavedFilterListSchema",
    "SavedFilterSchema",
    "ErrorResponseSchema",
    "LedgerWriteErrorSchema",
]
