"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import SavedFilter


class SavedFilterRepository(ABC):
    """
    Abstract repository for saved list-screen filters.

    Filters are loaded and saved explicitly, per entity name.
    """

    @abstractmethod
    async def load(self, entity_name: str) -> List[SavedFilter]:
        """
        Load every saved filter for an entity.

        Args:
            entity_name: The list screen's entity (e.g. "OrdemServico")

        Returns:
            Filters ordered by created_at ascending
        """
        ...

    @abstractmethod
    async def save(self, saved_filter: SavedFilter) -> SavedFilter:
        """
        Persist a saved filter.

        Args:
            saved_filter: The filter to save

        Returns:
            The saved filter
        """
        ...

    @abstractmethod
    async def delete(self, entity_name: str, filter_id: UUID) -> bool:
        """
        Delete a saved filter.

        Returns:
            True if a filter was deleted, False if none matched
        """
        ...
