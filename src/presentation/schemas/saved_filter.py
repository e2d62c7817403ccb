"""Saved filter and period Pydantic schemas."""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class DateRangeSchema(BaseModel):
    start: Optional[date] = None
    end: Optional[date] = None


class SavedFilterCreateSchema(BaseModel):
    """Schema for POST /v1/saved-filters/{entity} request."""

    name: str = Field(
        ...,
        description="Display name of the filter",
        examples=["Em aberto este mês"],
    )
    config: dict[str, Any] = Field(
        default_factory=dict,
        description=(
            "searchTerm, activeFilters, selectedPeriod, customDateStart, "
            "customDateEnd and sortConfig"
        ),
        examples=[{"searchTerm": "", "activeFilters": {"status": "pendente"}, "selectedPeriod": "this_month"}],
    )


class SavedFilterSchema(BaseModel):
    """A saved filter, with its period resolved against today."""

    id: str
    entity_name: str
    name: str
    config: dict[str, Any]
    created_at: datetime
    period: Optional[DateRangeSchema] = Field(
        None,
        description="Date range denoted by config.selectedPeriod, if any",
    )


class SavedFilterListSchema(BaseModel):
    entity_name: str
    filters: list[SavedFilterSchema]


class PeriodPresetSchema(BaseModel):
    id: str
    label: str


class PeriodResponseSchema(BaseModel):
    """Schema for GET /v1/periods/{preset} response."""

    preset: str = Field(..., examples=["this_month"])
    range: Optional[DateRangeSchema] = Field(
        None,
        description="Resolved range; absent for an unbounded custom period",
    )
