"""Installment plan Pydantic schemas."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from src.domain.entities import PaymentConditionKind


class InstallmentSchema(BaseModel):
    """Schema for an installment in a plan response."""

    sequence_number: int = Field(
        ...,
        ge=1,
        description="1-based position of the installment",
        examples=[1],
    )
    due_date: date = Field(
        ...,
        description="Due date in ISO 8601 format (YYYY-MM-DD)",
        examples=["2024-02-14"],
    )
    amount_cents: int = Field(
        ...,
        ge=0,
        description="Installment amount in cents",
        examples=[33333],
    )
    status: str = Field(
        ...,
        description="Installment status",
        examples=["pendente"],
    )


class PlanResponseSchema(BaseModel):
    """Schema for a computed installment plan."""

    total_cents: int = Field(
        ...,
        ge=0,
        description="Total split across the installments, in cents",
        examples=[100000],
    )
    anchor_date: date = Field(
        ...,
        description="Reference date the schedule was computed from",
    )
    interval_days: int = Field(
        ...,
        description="Days from the anchor to the first installment",
        examples=[30],
    )
    payment_condition_id: Optional[str] = Field(
        None,
        description="Payment condition the plan was built from",
    )
    installments: list[InstallmentSchema] = Field(
        ...,
        description="Installments in sequence order",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "total_cents": 100000,
                    "anchor_date": "2024-01-15",
                    "interval_days": 30,
                    "payment_condition_id": None,
                    "installments": [
                        {"sequence_number": 1, "due_date": "2024-02-14", "amount_cents": 33333, "status": "pendente"},
                        {"sequence_number": 2, "due_date": "2024-03-14", "amount_cents": 33333, "status": "pendente"},
                        {"sequence_number": 3, "due_date": "2024-04-14", "amount_cents": 33334, "status": "pendente"},
                    ],
                }
            ]
        }
    }

    @classmethod
    def from_dto(cls, response) -> "PlanResponseSchema":
        return cls(
            total_cents=response.total_cents,
            anchor_date=response.anchor_date,
            interval_days=response.interval_days,
            payment_condition_id=response.payment_condition_id,
            installments=[
                InstallmentSchema(
                    sequence_number=inst.sequence_number,
                    due_date=inst.due_date,
                    amount_cents=inst.amount_cents,
                    status=inst.status,
                )
                for inst in response.installments
            ],
        )


# Ten years
MAX_INTERVAL_DAYS = 3650


class SimulatePlanRequestSchema(BaseModel):
    """Schema for POST /v1/installments/simulate request."""

    total_cents: int = Field(
        ...,
        description="Amount to split, in cents",
        examples=[100000],
    )
    anchor_date: date = Field(
        ...,
        description="Reference date (e.g. the document date)",
        examples=["2024-01-15"],
    )
    kind: PaymentConditionKind = Field(
        PaymentConditionKind.INSTALLMENT_PLAN,
        description="Payment condition kind: a_vista, prazo or parcelado",
    )
    installment_count: Optional[int] = Field(
        None,
        description="Number of installments; configured default when omitted",
        examples=[3],
    )
    interval_days: Optional[int] = Field(
        None,
        le=MAX_INTERVAL_DAYS,
        description="Days from anchor to first installment; configured default when omitted",
        examples=[30],
    )
