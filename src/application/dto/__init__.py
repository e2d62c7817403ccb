"""Data Transfer Objects for application layer."""

from .plan import PlanResponse
from .receivable import (
    GenerateReceivablesRequest,
    InstallmentInput,
    ReceivableOptions,
    ReceivablePreview,
)
from .advance import BatchAdvancePreview, BatchAdvanceRequest

__all__ = [
    "PlanResponse",
    "GenerateReceivablesRequest",
    "InstallmentInput",
    "ReceivableOptions",
    "ReceivablePreview",
    "BatchAdvancePreview",
    "BatchAdvanceRequest",
]
