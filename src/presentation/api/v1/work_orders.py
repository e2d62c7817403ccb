"""Work order receivable endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from src.application.dto import (
    GenerateReceivablesRequest,
    InstallmentInput,
    PlanResponse,
)
from src.application.services import ReceivableService
from src.core.dependencies import get_receivable_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    GenerateReceivablesRequestSchema,
    LedgerWriteErrorSchema,
    LedgerWriteResultSchema,
    PaymentConditionSchema,
    PlanResponseSchema,
    ReceivablePreviewSchema,
)

work_orders_router = APIRouter(
    prefix="/work-orders",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Work order not found"},
        503: {"model": ErrorResponseSchema, "description": "Entity store unavailable"},
    },
)


@work_orders_router.get(
    "/{work_order_id}/receivables/preview",
    response_model=ReceivablePreviewSchema,
    summary="Preview Work Order Receivables",
    description="""
    Compute the installment plan for a work order from its payment
    condition, together with the form defaults: first bank account,
    configured revenue chart of accounts, competencia from the opening
    date and the default history text.
    """,
)
async def preview_receivables(
    work_order_id: Annotated[str, Path(description="OrdemServico identifier")],
    receivable_service: Annotated[ReceivableService, Depends(get_receivable_service)],
) -> ReceivablePreviewSchema:
    preview = await receivable_service.preview(work_order_id)

    condition = preview.payment_condition
    return ReceivablePreviewSchema(
        work_order_id=preview.work_order_id,
        work_order_number=preview.work_order_number,
        total_cents=preview.total_cents,
        payment_condition=(
            PaymentConditionSchema(
                id=condition.id,
                name=condition.name,
                kind=condition.kind.value,
                installment_count=condition.installment_count,
                interval_days=condition.interval_days,
            )
            if condition
            else None
        ),
        bank_account_id=preview.bank_account_id,
        chart_of_accounts_id=preview.chart_of_accounts_id,
        competencia=preview.competencia,
        note=preview.note,
        plan=PlanResponseSchema.from_dto(PlanResponse.from_entity(preview.plan)),
        warnings=preview.warnings,
    )


@work_orders_router.post(
    "/{work_order_id}/receivables",
    response_model=LedgerWriteResultSchema,
    status_code=201,
    summary="Generate Work Order Receivables",
    description="""
    Write one MovimentacaoFinanceira plus one ContasReceber per
    installment, then mark the work order as financially processed.

    Records are written one at a time and never rolled back. Submitting
    twice writes twice.
    """,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Generation refused"},
        502: {"model": LedgerWriteErrorSchema, "description": "Write stopped part way"},
    },
)
async def generate_receivables(
    work_order_id: Annotated[str, Path(description="OrdemServico identifier")],
    request: GenerateReceivablesRequestSchema,
    receivable_service: Annotated[ReceivableService, Depends(get_receivable_service)],
) -> LedgerWriteResultSchema:
    installments = None
    if request.installments is not None:
        installments = [
            InstallmentInput(
                sequence_number=inst.sequence_number,
                due_date=inst.due_date,
                amount_cents=inst.amount_cents,
            )
            for inst in request.installments
        ]

    dto = GenerateReceivablesRequest(
        work_order_id=work_order_id,
        bank_account_id=request.bank_account_id,
        chart_of_accounts_id=request.chart_of_accounts_id,
        competencia=request.competencia,
        note=request.note,
        installments=installments,
    )

    result = await receivable_service.generate(dto)
    return LedgerWriteResultSchema(**result.to_dict())
