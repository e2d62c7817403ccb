"""PostgreSQL implementation of SavedFilterRepository."""

from typing import List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import SavedFilter
from src.domain.interfaces import SavedFilterRepository
from src.infrastructure.database.models import SavedFilterModel


class PostgresSavedFilterRepository(SavedFilterRepository):
    """
    PostgreSQL implementation of the saved filter repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def load(self, entity_name: str) -> List[SavedFilter]:
        """Load every filter saved for an entity, oldest first."""
        stmt = (
            select(SavedFilterModel)
            .where(SavedFilterModel.entity_name == entity_name)
            .order_by(SavedFilterModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def save(self, saved_filter: SavedFilter) -> SavedFilter:
        """Persist a saved filter to the database."""
        model = SavedFilterModel(
            id=str(saved_filter.id),
            entity_name=saved_filter.entity_name,
            name=saved_filter.name,
            config=saved_filter.config,
            created_at=saved_filter.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return saved_filter

    async def delete(self, entity_name: str, filter_id: UUID) -> bool:
        """Delete a saved filter scoped to its entity."""
        stmt = delete(SavedFilterModel).where(
            SavedFilterModel.id == str(filter_id),
            SavedFilterModel.entity_name == entity_name,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()

        return result.rowcount > 0

    def _to_entity(self, model: SavedFilterModel) -> SavedFilter:
        """Convert database model to domain entity."""
        return SavedFilter(
            id=UUID(model.id),
            entity_name=model.entity_name,
            name=model.name,
            config=dict(model.config or {}),
            created_at=model.created_at,
        )
