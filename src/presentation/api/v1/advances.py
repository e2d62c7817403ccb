"""Batch payroll advance endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.dto import BatchAdvanceRequest
from src.application.services import AdvanceService
from src.core.dependencies import get_advance_service
from src.presentation.schemas import (
    AllocationRecordSchema,
    BatchAdvancePreviewSchema,
    BatchAdvanceRequestSchema,
    ErrorResponseSchema,
    LedgerWriteErrorSchema,
    LedgerWriteResultSchema,
)

advances_router = APIRouter(
    prefix="/advances",
    responses={
        422: {"model": ErrorResponseSchema, "description": "Percentage out of range"},
        503: {"model": ErrorResponseSchema, "description": "Entity store unavailable"},
    },
)


def _to_dto(request: BatchAdvanceRequestSchema) -> BatchAdvanceRequest:
    return BatchAdvanceRequest(
        percentage=request.percentage,
        payment_date=request.payment_date,
        competencia=request.competencia,
        employee_ids=list(request.employee_ids),
        description=request.description,
        chart_of_accounts_id=request.chart_of_accounts_id,
    )


@advances_router.post(
    "/batch/preview",
    response_model=BatchAdvancePreviewSchema,
    summary="Preview Batch Advances",
    description="Compute salary * percentage / 100 for every selected employee.",
)
async def preview_batch(
    request: BatchAdvanceRequestSchema,
    advance_service: Annotated[AdvanceService, Depends(get_advance_service)],
) -> BatchAdvancePreviewSchema:
    preview = await advance_service.preview(_to_dto(request))
    allocation = preview.allocation

    return BatchAdvancePreviewSchema(
        percentage=float(allocation.percentage),
        records=[
            AllocationRecordSchema(
                employee_id=record.recipient_id,
                employee_name=record.recipient_name,
                salary_cents=record.base_value_cents,
                amount_cents=record.amount_cents,
            )
            for record in allocation.records
        ],
        total_cents=allocation.total_cents,
        missing_employee_ids=preview.missing_employee_ids,
    )


@advances_router.post(
    "/batch",
    response_model=LedgerWriteResultSchema,
    status_code=201,
    summary="Generate Batch Advances",
    description="Write one Adiantamento per selected employee, sequentially.",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Generation refused"},
        502: {"model": LedgerWriteErrorSchema, "description": "Write stopped part way"},
    },
)
async def generate_batch(
    request: BatchAdvanceRequestSchema,
    advance_service: Annotated[AdvanceService, Depends(get_advance_service)],
) -> LedgerWriteResultSchema:
    result = await advance_service.generate(_to_dto(request))
    return LedgerWriteResultSchema(**result.to_dict())
