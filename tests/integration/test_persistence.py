"""
Integration tests for saved filter persistence.

These tests verify:
1. Filters round-trip through the database with their JSON config
2. load() is scoped to an entity and ordered oldest first
3. delete() is scoped to an entity
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import SavedFilter
from src.infrastructure.repositories import PostgresSavedFilterRepository


class TestSavedFilterRepository:

    @pytest.mark.asyncio
    async def test_config_round_trips(self, test_session: AsyncSession):
        repo = PostgresSavedFilterRepository(test_session)
        config = {
            "searchTerm": "cliente",
            "activeFilters": {"status": ["pendente", "pago"]},
            "selectedPeriod": "custom",
            "customDateStart": "2024-01-01",
            "customDateEnd": None,
            "sortConfig": {"key": "valor", "direction": "desc"},
        }
        saved = SavedFilter(entity_name="ContasReceber", name="Clientes", config=config)

        await repo.save(saved)
        loaded = await repo.load("ContasReceber")

        assert len(loaded) == 1
        assert loaded[0].id == saved.id
        assert loaded[0].name == "Clientes"
        assert loaded[0].config == config

    @pytest.mark.asyncio
    async def test_load_is_scoped_and_ordered(self, test_session: AsyncSession):
        repo = PostgresSavedFilterRepository(test_session)
        now = datetime(2024, 5, 1, 12, 0, 0)

        await repo.save(SavedFilter(entity_name="OrdemServico", name="Segundo", created_at=now))
        await repo.save(SavedFilter(
            entity_name="OrdemServico",
            name="Primeiro",
            created_at=now - timedelta(days=1),
        ))
        await repo.save(SavedFilter(entity_name="Adiantamento", name="Outro", created_at=now))

        loaded = await repo.load("OrdemServico")

        assert [f.name for f in loaded] == ["Primeiro", "Segundo"]

    @pytest.mark.asyncio
    async def test_delete_is_scoped_to_entity(self, test_session: AsyncSession):
        repo = PostgresSavedFilterRepository(test_session)
        saved = SavedFilter(entity_name="ContasReceber", name="Meu filtro")
        await repo.save(saved)

        assert await repo.delete("Adiantamento", saved.id) is False
        assert await repo.delete("ContasReceber", saved.id) is True
        assert await repo.load("ContasReceber") == []

    @pytest.mark.asyncio
    async def test_delete_unknown(self, test_session: AsyncSession):
        repo = PostgresSavedFilterRepository(test_session)

        assert await repo.delete("ContasReceber", uuid4()) is False
