"""Work order receivable Pydantic schemas."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from .plan import PlanResponseSchema


class PaymentConditionSchema(BaseModel):
    id: str
    name: str
    kind: str
    installment_count: int
    interval_days: int


class ReceivablePreviewSchema(BaseModel):
    """Schema for GET /v1/work-orders/{id}/receivables/preview response."""

    work_order_id: str = Field(..., description="Work order identifier")
    work_order_number: str = Field(..., description="Work order number (numero_os)")
    total_cents: int = Field(..., description="Work order total in cents")
    payment_condition: Optional[PaymentConditionSchema] = Field(
        None,
        description="Resolved payment condition, absent when none applies",
    )
    bank_account_id: Optional[str] = Field(
        None,
        description="Default bank account (first registered)",
    )
    chart_of_accounts_id: Optional[str] = Field(
        None,
        description="Configured default revenue chart of accounts",
    )
    competencia: Optional[str] = Field(
        None,
        description="Accounting period (YYYY-MM) from the opening date",
        examples=["2024-01"],
    )
    note: str = Field(..., description="Default movement history text")
    plan: PlanResponseSchema
    warnings: list[str] = Field(default_factory=list)


class InstallmentInputSchema(BaseModel):
    """A hand-edited installment row."""

    sequence_number: int = Field(..., ge=1, examples=[1])
    due_date: Optional[date] = Field(None, examples=["2024-02-14"])
    amount_cents: int = Field(..., examples=[33333])


class GenerateReceivablesRequestSchema(BaseModel):
    """Schema for POST /v1/work-orders/{id}/receivables request."""

    bank_account_id: Optional[str] = Field(
        None,
        description="Bank account credited by the movement",
        examples=["conta-1"],
    )
    chart_of_accounts_id: Optional[str] = Field(
        None,
        description="Revenue chart of accounts",
        examples=["plano-receita"],
    )
    competencia: Optional[str] = Field(
        None,
        description="Accounting period, YYYY-MM",
        examples=["2024-01"],
    )
    note: Optional[str] = Field(
        None,
        description="History text; defaults to 'Receita da OS {numero}'",
    )
    installments: Optional[list[InstallmentInputSchema]] = Field(
        None,
        description="Edited installments; the computed plan is used when omitted",
    )


class LedgerWriteResultSchema(BaseModel):
    """Schema for records written to the entity store."""

    parent_id: Optional[str] = Field(
        None,
        description="MovimentacaoFinanceira identifier (absent for advances)",
    )
    child_ids: list[str] = Field(..., description="Created child record ids, in order")
    source_id: Optional[str] = Field(None, description="Originating work order id")
    child_count: int = Field(..., ge=0)
    total_cents: int = Field(..., ge=0, description="Sum of the amounts written")
