"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .validation import (
    GenerationRefusedException,
    InvalidArgumentException,
)
from .work_order import WorkOrderNotFoundException
from .saved_filter import InvalidSavedFilterException, SavedFilterNotFoundException
from .store import (
    EntityStoreException,
    EntityStoreTimeoutException,
    LedgerWriteException,
)

__all__ = [
    "DomainException",
    "GenerationRefusedException",
    "InvalidArgumentException",
    "WorkOrderNotFoundException",
    "SavedFilterNotFoundException",
    "InvalidSavedFilterException",
    "EntityStoreException",
    "EntityStoreTimeoutException",
    "LedgerWriteException",
]
