"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.interfaces import EntityStoreClient, SavedFilterRepository
from src.infrastructure.database import get_db_session
from src.infrastructure.repositories import PostgresSavedFilterRepository
from src.infrastructure.clients import HttpEntityStoreClient
from src.application.services import (
    AdvanceService,
    LedgerWriter,
    PlanService,
    ReceivableService,
    SavedFilterService,
)


# Repository dependencies
async def get_saved_filter_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SavedFilterRepository:
    """Get a SavedFilterRepository instance."""
    return PostgresSavedFilterRepository(session)


# External client dependencies
def get_entity_store_client() -> EntityStoreClient:
    """Get an EntityStoreClient instance."""
    return HttpEntityStoreClient()


# Service dependencies
def get_ledger_writer(
    store: Annotated[EntityStoreClient, Depends(get_entity_store_client)],
) -> LedgerWriter:
    """Get a LedgerWriter bound to the entity store."""
    return LedgerWriter(store)


def get_plan_service() -> PlanService:
    """Get a PlanService instance."""
    return PlanService()


def get_receivable_service(
    store: Annotated[EntityStoreClient, Depends(get_entity_store_client)],
    ledger_writer: Annotated[LedgerWriter, Depends(get_ledger_writer)],
) -> ReceivableService:
    """Get a ReceivableService instance with all dependencies."""
    return ReceivableService(store=store, ledger_writer=ledger_writer)


def get_advance_service(
    store: Annotated[EntityStoreClient, Depends(get_entity_store_client)],
    ledger_writer: Annotated[LedgerWriter, Depends(get_ledger_writer)],
) -> AdvanceService:
    """Get an AdvanceService instance with all dependencies."""
    return AdvanceService(store=store, ledger_writer=ledger_writer)


async def get_saved_filter_service(
    repository: Annotated[SavedFilterRepository, Depends(get_saved_filter_repository)],
) -> SavedFilterService:
    """Get a SavedFilterService instance."""
    return SavedFilterService(repository=repository)
