"""Saved filter endpoints for list screens."""

from datetime import date
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response

from src.application.services import SavedFilterService
from src.core.dependencies import get_saved_filter_service
from src.domain.entities import SavedFilter
from src.presentation.schemas import (
    DateRangeSchema,
    ErrorResponseSchema,
    SavedFilterCreateSchema,
    SavedFilterListSchema,
    SavedFilterSchema,
)

saved_filters_router = APIRouter(prefix="/saved-filters")


def _to_schema(saved_filter: SavedFilter, today: date) -> SavedFilterSchema:
    period = SavedFilterService.period_of(saved_filter, today)
    return SavedFilterSchema(
        id=str(saved_filter.id),
        entity_name=saved_filter.entity_name,
        name=saved_filter.name,
        config=saved_filter.config,
        created_at=saved_filter.created_at,
        period=DateRangeSchema(start=period.start, end=period.end) if period else None,
    )


@saved_filters_router.get(
    "/{entity_name}",
    response_model=SavedFilterListSchema,
    summary="List Saved Filters",
    description="Saved filters for one list screen, oldest first.",
)
async def list_saved_filters(
    entity_name: Annotated[str, Path(min_length=1, max_length=100)],
    saved_filter_service: Annotated[SavedFilterService, Depends(get_saved_filter_service)],
    today: Annotated[
        Optional[date],
        Query(description="Reference date for resolving periods"),
    ] = None,
) -> SavedFilterListSchema:
    filters = await saved_filter_service.list_filters(entity_name)
    reference = today or date.today()

    return SavedFilterListSchema(
        entity_name=entity_name,
        filters=[_to_schema(f, reference) for f in filters],
    )


@saved_filters_router.post(
    "/{entity_name}",
    response_model=SavedFilterSchema,
    status_code=201,
    summary="Save Filter",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Blank name or unresolvable period"},
    },
)
async def create_saved_filter(
    entity_name: Annotated[str, Path(min_length=1, max_length=100)],
    request: SavedFilterCreateSchema,
    saved_filter_service: Annotated[SavedFilterService, Depends(get_saved_filter_service)],
) -> SavedFilterSchema:
    saved_filter = await saved_filter_service.save_filter(
        entity_name, request.name, request.config
    )
    return _to_schema(saved_filter, date.today())


@saved_filters_router.delete(
    "/{entity_name}/{filter_id}",
    status_code=204,
    summary="Delete Saved Filter",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Filter not found"},
    },
)
async def delete_saved_filter(
    entity_name: Annotated[str, Path(min_length=1, max_length=100)],
    filter_id: Annotated[UUID, Path(description="UUID of the filter")],
    saved_filter_service: Annotated[SavedFilterService, Depends(get_saved_filter_service)],
) -> Response:
    await saved_filter_service.delete_filter(entity_name, filter_id)
    return Response(status_code=204)
