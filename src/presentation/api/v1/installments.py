"""API endpoints for installment plan simulation."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.services import PlanService
from src.core.dependencies import get_plan_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    PlanResponseSchema,
    SimulatePlanRequestSchema,
)

installments_router = APIRouter(prefix="/installments")


@installments_router.post(
    "/simulate",
    response_model=PlanResponseSchema,
    summary="Simulate Installment Plan",
    description="""
    Split an amount into installments for ad-hoc condition parameters.

    Installments are one calendar month apart. Deferred (prazo) and
    installment (parcelado) kinds start interval_days after the anchor;
    a_vista starts on the anchor. The last installment absorbs the
    rounding remainder. Nothing is written.
    """,
    responses={
        200: {"description": "Plan computed"},
        422: {"model": ErrorResponseSchema, "description": "Invalid parameters"},
    },
)
async def simulate_plan(
    request: SimulatePlanRequestSchema,
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
) -> PlanResponseSchema:
    response = plan_service.simulate(
        total_cents=request.total_cents,
        anchor_date=request.anchor_date,
        kind=request.kind,
        installment_count=request.installment_count,
        interval_days=request.interval_days,
    )
    return PlanResponseSchema.from_dto(response)
