"""Date period preset endpoints."""

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Path, Query

from src.service.finance import list_presets, resolve_period
from src.presentation.schemas import (
    DateRangeSchema,
    ErrorResponseSchema,
    PeriodPresetSchema,
    PeriodResponseSchema,
)

periods_router = APIRouter(prefix="/periods")


@periods_router.get(
    "",
    response_model=list[PeriodPresetSchema],
    summary="List Period Presets",
)
async def get_presets() -> list[PeriodPresetSchema]:
    return [PeriodPresetSchema(**preset) for preset in list_presets()]


@periods_router.get(
    "/{preset}",
    response_model=PeriodResponseSchema,
    summary="Resolve Period Preset",
    description="""
    Resolve a preset (this_month, last_7_days, ...) to concrete dates.
    Weeks start on Sunday. "custom" uses the start and end parameters.
    """,
    responses={
        422: {"model": ErrorResponseSchema, "description": "Unknown preset"},
    },
)
async def get_period(
    preset: Annotated[str, Path(description="Preset id")],
    today: Annotated[Optional[date], Query(description="Reference date")] = None,
    start: Annotated[Optional[date], Query(description="Custom start")] = None,
    end: Annotated[Optional[date], Query(description="Custom end")] = None,
) -> PeriodResponseSchema:
    period = resolve_period(preset, today or date.today(), start, end)

    return PeriodResponseSchema(
        preset=preset,
        range=DateRangeSchema(start=period.start, end=period.end) if period else None,
    )
