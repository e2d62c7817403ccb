"""Entity store and ledger write domain exceptions."""

from typing import List, Optional

from .base import DomainException


class EntityStoreException(DomainException):
    """Raised when the entity store returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="ENTITY_STORE_ERROR",
        )
        self.status_code = status_code


class EntityStoreTimeoutException(EntityStoreException):
    """Raised when the entity store times out."""

    def __init__(self):
        super().__init__(
            message="Entity store request timed out",
            status_code=None,
        )
        self.code = "ENTITY_STORE_TIMEOUT"


class LedgerWriteException(DomainException):
    """
    Raised when a ledger write stops part way through.

    Records already created stay in the store; ``parent_id`` and
    ``created_ids`` describe what was written before the failure.
    """

    def __init__(
        self,
        message: str,
        parent_id: Optional[str] = None,
        created_ids: Optional[List[str]] = None,
        expected_count: int = 0,
    ):
        super().__init__(
            message=message,
            code="LEDGER_WRITE_FAILED",
        )
        self.parent_id = parent_id
        self.created_ids = list(created_ids or [])
        self.expected_count = expected_count
