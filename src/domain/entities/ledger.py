"""Ledger write results."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class LedgerWriteResult:
    """
    Outcome of persisting a plan or a batch to the entity store.

    Attributes:
        parent_id: Identifier of the parent movement, if one was written
        child_ids: Identifiers of the child records, in creation order
        source_id: The originating document (work order) identifier, if any
        total_cents: Sum of the child amounts written
    """

    parent_id: Optional[str] = None
    child_ids: List[str] = field(default_factory=list)
    source_id: Optional[str] = None
    total_cents: int = 0

    @property
    def child_count(self) -> int:
        return len(self.child_ids)

    def to_dict(self) -> dict:
        return {
            "parent_id": self.parent_id,
            "child_ids": list(self.child_ids),
            "source_id": self.source_id,
            "child_count": self.child_count,
            "total_cents": self.total_cents,
        }
