"""External client interfaces."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class EntityStoreClient(ABC):
    """
    Abstract client for the hosted ERP entity store.

    Records are plain JSON objects keyed by the store's own field names.
    The store offers no transactions: every call is independent.
    """

    @abstractmethod
    async def create(self, entity: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a record.

        Args:
            entity: Collection name (e.g. "ContasReceber")
            data: Record fields

        Returns:
            The created record, including its generated "id"

        Raises:
            EntityStoreException: If the store returns an error
            EntityStoreTimeoutException: If the request times out

        Note:
            Implementations must not retry creates; there is no idempotency key.
        """
        ...

    @abstractmethod
    async def update(
        self,
        entity: str,
        record_id: str,
        patch: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Update fields of an existing record.

        Args:
            entity: Collection name
            record_id: Record identifier
            patch: Fields to change

        Returns:
            The updated record
        """
        ...

    @abstractmethod
    async def get(self, entity: str, record_id: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve a record by ID.

        Returns:
            The record if found, None otherwise
        """
        ...

    @abstractmethod
    async def list(
        self,
        entity: str,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        List records of a collection.

        Args:
            entity: Collection name
            sort: Sort key, e.g. "-created_date"
            limit: Maximum number of records to return
        """
        ...

    @abstractmethod
    async def filter(
        self,
        entity: str,
        query: Dict[str, Any],
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        List records matching field equality conditions.

        Args:
            entity: Collection name
            query: Field/value pairs every returned record must match
            sort: Sort key
            limit: Maximum number of records to return
        """
        ...
