"""Batch advance Pydantic schemas."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class BatchAdvanceRequestSchema(BaseModel):
    """Schema for POST /v1/advances/batch and /batch/preview requests."""

    percentage: Decimal = Field(
        ...,
        description="Share of each salary to advance, 0-100",
        examples=[40],
    )
    payment_date: Optional[date] = Field(
        None,
        description="Advance date (data_adiantamento)",
        examples=["2024-01-20"],
    )
    competencia: Optional[str] = Field(
        None,
        description="Accounting period, YYYY-MM",
        examples=["2024-01"],
    )
    employee_ids: list[str] = Field(
        default_factory=list,
        description="Selected employees (Funcionario ids)",
    )
    description: Optional[str] = Field(
        None,
        description="Reason written on every advance",
    )
    chart_of_accounts_id: Optional[str] = Field(
        None,
        description="Chart of accounts; omitted from the records when blank",
    )


class AllocationRecordSchema(BaseModel):
    employee_id: str
    employee_name: str
    salary_cents: int
    amount_cents: int


class BatchAdvancePreviewSchema(BaseModel):
    """Schema for POST /v1/advances/batch/preview response."""

    percentage: float = Field(..., examples=[40.0])
    records: list[AllocationRecordSchema]
    total_cents: int = Field(
        ...,
        description="Sum of the individually rounded amounts",
    )
    missing_employee_ids: list[str] = Field(default_factory=list)
