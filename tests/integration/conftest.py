"""
Fixtures for integration tests.

Provides:
- In-memory entity store seeded with ERP records
- In-memory database for saved filters
- Test client for FastAPI app with both wired in
"""

import copy
from typing import Any, AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.main import app
from src.core.dependencies import (
    get_entity_store_client,
    get_saved_filter_repository,
)
from src.domain.exceptions import EntityStoreException
from src.domain.interfaces import EntityStoreClient
from src.infrastructure.database import Base
from src.infrastructure.repositories import PostgresSavedFilterRepository


# =============================================================================
# Seed Data
# =============================================================================

SEED_RECORDS: Dict[str, List[Dict[str, Any]]] = {
    "Configuracoes": [
        {"id": "cfg-1", "plano_contas_padrao_receita_os": "plano-receita"},
    ],
    "ContaBancaria": [
        {"id": "conta-1", "nome": "Banco Principal"},
        {"id": "conta-2", "nome": "Caixa"},
    ],
    "CondicaoPagamento": [
        {
            "id": "cond-3x",
            "nome": "3x 30 dias",
            "tipo": "parcelado",
            "num_parcelas": 3,
            "intervalo_dias": 30,
        },
        {
            "id": "cond-avista",
            "nome": "À vista",
            "tipo": "a_vista",
            "num_parcelas": 1,
        },
        {
            "id": "cond-28",
            "nome": "28 dias",
            "tipo": "prazo",
            "num_parcelas": 1,
            "intervalo_dias": 28,
        },
    ],
    "OrdemServico": [
        {
            "id": "os-1",
            "numero_os": "OS-0001",
            "data_abertura": "2024-01-15",
            "valor_total": 1000.00,
            "condicao_pagamento_id": "cond-3x",
            "forma_pagamento_id": "forma-boleto",
            "contato_tipo": "cliente",
            "contato_id": "cli-1",
        },
        {
            "id": "os-2",
            "numero_os": "OS-0002",
            "data_abertura": "2024-03-10",
            "valor_total": 250.5,
            "contato_tipo": "fornecedor",
            "contato_id": "forn-1",
        },
        {
            "id": "os-3",
            "numero_os": "OS-0003",
            "data_abertura": "2024-05-02T10:00:00Z",
            "valor_total": "100.00",
            "condicao_pagamento_id": "cond-removed",
            "contato_tipo": "cliente",
            "contato_id": "cli-2",
        },
        {
            "id": "os-4",
            "numero_os": "OS-0004",
            "data_abertura": "2024-01-31",
            "valor_total": 100.00,
            "condicao_pagamento_id": "cond-28",
            "contato_tipo": "cliente",
            "contato_id": "cli-1",
        },
    ],
    "Funcionario": [
        {"id": "func-1", "nome": "Ana", "salario": 1500},
        {"id": "func-2", "nome": "Bruno", "salario": 2200},
        {"id": "func-3", "nome": "Carla", "salario": None},
        {"id": "func-4", "nome": "Davi", "salario": 3333.33},
    ],
}


# =============================================================================
# Mock Clients
# =============================================================================

class InMemoryEntityStore(EntityStoreClient):
    """Entity store double that keeps records in memory and logs every call."""

    def __init__(self, records: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.records = copy.deepcopy(records or {})
        self.calls: List[tuple] = []
        self.created: Dict[str, List[Dict[str, Any]]] = {}
        self.fail_create_after: Dict[str, int] = {}
        self.fail_updates = False
        self.fail_reads = False
        self.omit_id_for: set = set()
        self._next_id = 0

    async def create(self, entity: str, data: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("create", entity, copy.deepcopy(data)))

        limit = self.fail_create_after.get(entity)
        if limit is not None and len(self.created.get(entity, [])) >= limit:
            raise EntityStoreException(f"{entity} create failed", status_code=500)

        self._next_id += 1
        record = {"id": f"{entity.lower()}-{self._next_id}", **copy.deepcopy(data)}
        self.records.setdefault(entity, []).append(record)
        self.created.setdefault(entity, []).append(record)
        if entity in self.omit_id_for:
            return {key: value for key, value in record.items() if key != "id"}
        return copy.deepcopy(record)

    async def update(
        self,
        entity: str,
        record_id: str,
        patch: Dict[str, Any],
    ) -> Dict[str, Any]:
        self.calls.append(("update", entity, record_id, copy.deepcopy(patch)))

        if self.fail_updates:
            raise EntityStoreException(f"{entity} update failed", status_code=500)

        for record in self.records.get(entity, []):
            if record["id"] == record_id:
                record.update(copy.deepcopy(patch))
                return copy.deepcopy(record)
        raise EntityStoreException(f"{entity} {record_id} not found", status_code=404)

    async def get(self, entity: str, record_id: str) -> Optional[Dict[str, Any]]:
        self.calls.append(("get", entity, record_id))
        self._check_reads(entity)

        for record in self.records.get(entity, []):
            if record["id"] == record_id:
                return copy.deepcopy(record)
        return None

    async def list(
        self,
        entity: str,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        self.calls.append(("list", entity))
        self._check_reads(entity)

        records = copy.deepcopy(self.records.get(entity, []))
        return records[:limit] if limit is not None else records

    async def filter(
        self,
        entity: str,
        query: Dict[str, Any],
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        self.calls.append(("filter", entity, dict(query)))
        self._check_reads(entity)

        matches = [
            copy.deepcopy(record)
            for record in self.records.get(entity, [])
            if all(record.get(key) == value for key, value in query.items())
        ]
        return matches[:limit] if limit is not None else matches

    def writes(self) -> List[tuple]:
        """create/update calls, in the order they were made."""
        return [call for call in self.calls if call[0] in ("create", "update")]

    def _check_reads(self, entity: str) -> None:
        if self.fail_reads:
            raise EntityStoreException(f"{entity} read failed", status_code=500)


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# Mock Client Fixtures
# =============================================================================

@pytest.fixture
def store() -> InMemoryEntityStore:
    """Create an entity store seeded with work orders, conditions and employees."""
    return InMemoryEntityStore(SEED_RECORDS)


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    store: InMemoryEntityStore,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Uses an in-memory SQLite database for saved filters
    - Uses the in-memory entity store (tests may mutate it before calling)
    """
    async def override_get_saved_filter_repository():
        return PostgresSavedFilterRepository(test_session)

    def override_get_entity_store_client():
        return store

    app.dependency_overrides[get_saved_filter_repository] = override_get_saved_filter_repository
    app.dependency_overrides[get_entity_store_client] = override_get_entity_store_client

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
