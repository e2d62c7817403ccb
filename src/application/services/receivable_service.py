"""Receivable service - work order to accounts receivable use cases."""

import asyncio
from datetime import date
from typing import Any, Callable, Dict, List, Optional

import structlog

from src.core.metrics import record_plan_generated, track_generation_latency
from src.domain.entities import Installment, LedgerWriteResult, PaymentCondition, WorkOrder
from src.domain.exceptions import GenerationRefusedException, WorkOrderNotFoundException
from src.domain.interfaces import EntityStoreClient
from src.application.dto import (
    GenerateReceivablesRequest,
    ReceivableOptions,
    ReceivablePreview,
)
from src.application.records import parse_payment_condition, parse_work_order
from src.application.services.ledger_writer import LedgerWriter, WORK_ORDER_ENTITY
from src.service.finance import build_installment_plan
from src.service.finance.settings import FinanceSettings, finance_settings

logger = structlog.get_logger(__name__)


class ReceivableService:
    """
    Application service for turning a work order into receivables.

    Preview computes the installment plan and the form defaults; generate
    validates the caller's choices and hands the installments to the
    LedgerWriter.
    """

    def __init__(
        self,
        store: EntityStoreClient,
        ledger_writer: LedgerWriter,
        settings: FinanceSettings = finance_settings,
        today: Callable[[], date] = date.today,
    ):
        self._store = store
        self._ledger_writer = ledger_writer
        self._settings = settings
        self._today = today

    async def preview(self, work_order_id: str) -> ReceivablePreview:
        """
        Compute the plan and defaults for a work order.

        Args:
            work_order_id: OrdemServico identifier in the entity store

        Returns:
            ReceivablePreview with the plan, bank account, chart of
            accounts, competencia and note defaults

        Raises:
            WorkOrderNotFoundException: If the work order does not exist
        """
        with track_generation_latency("receivables_preview"):
            work_order = await self._load_work_order(work_order_id)
            preview = await self._build_preview(work_order)

        logger.info(
            "receivables_previewed",
            work_order_id=work_order.id,
            installment_count=preview.plan.installment_count,
            total_cents=preview.plan.total_cents,
            payment_condition_id=preview.plan.payment_condition_id,
        )

        return preview

    async def generate(self, request: GenerateReceivablesRequest) -> LedgerWriteResult:
        """
        Validate and write the receivables for a work order.

        Uses the caller's edited installments when given, otherwise the
        computed plan.

        Raises:
            GenerationRefusedException: If the request fails validation
            WorkOrderNotFoundException: If the work order does not exist
            LedgerWriteException: If the write stopped part way
        """
        errors = request.validate()
        if errors:
            logger.warning(
                "receivables_refused",
                work_order_id=request.work_order_id,
                errors=errors,
            )
            raise GenerationRefusedException(errors)

        with track_generation_latency("receivables_generate"):
            work_order = await self._load_work_order(request.work_order_id)

            if request.installments is not None:
                installments = [
                    Installment(
                        sequence_number=inst.sequence_number,
                        due_date=inst.due_date,
                        amount_cents=inst.amount_cents,
                    )
                    for inst in request.installments
                ]
            else:
                preview = await self._build_preview(work_order)
                installments = list(preview.plan.installments)

            options = ReceivableOptions(
                bank_account_id=request.bank_account_id,
                chart_of_accounts_id=request.chart_of_accounts_id,
                competencia=request.competencia,
                note=request.note or self._default_note(work_order),
            )

            result = await self._ledger_writer.write_work_order_receivables(
                work_order, installments, options
            )

        logger.info(
            "receivables_generated",
            work_order_id=work_order.id,
            movement_id=result.parent_id,
            receivable_count=result.child_count,
            total_cents=result.total_cents,
            edited=request.installments is not None,
        )

        return result

    async def _load_work_order(self, work_order_id: str) -> WorkOrder:
        record = await self._store.get(WORK_ORDER_ENTITY, work_order_id)
        if record is None:
            logger.warning("work_order_not_found", work_order_id=work_order_id)
            raise WorkOrderNotFoundException(work_order_id)
        return parse_work_order(record)

    async def _build_preview(self, work_order: WorkOrder) -> ReceivablePreview:
        configs, bank_accounts, conditions = await asyncio.gather(
            self._store.list("Configuracoes"),
            self._store.list("ContaBancaria"),
            self._store.list("CondicaoPagamento"),
        )

        warnings: List[str] = []
        anchor = work_order.opening_date
        if anchor is None:
            anchor = self._today()
            warnings.append("work order has no opening date; anchored on today")

        condition = self._resolve_condition(work_order, conditions)
        if work_order.payment_condition_id and condition is None:
            warnings.append(
                f"payment condition {work_order.payment_condition_id} not found; "
                "using a single installment"
            )

        plan = build_installment_plan(work_order.total_cents, anchor, condition)
        record_plan_generated("work_order")

        config = configs[0] if configs else {}
        return ReceivablePreview(
            work_order_id=work_order.id,
            work_order_number=work_order.number,
            total_cents=work_order.total_cents,
            plan=plan,
            payment_condition=condition,
            bank_account_id=bank_accounts[0].get("id") if bank_accounts else None,
            chart_of_accounts_id=config.get(self._settings.revenue_account_setting_key) or None,
            competencia=work_order.competencia or anchor.strftime("%Y-%m"),
            note=self._default_note(work_order),
            warnings=warnings,
        )

    def _resolve_condition(
        self,
        work_order: WorkOrder,
        conditions: List[Dict[str, Any]],
    ) -> Optional[PaymentCondition]:
        if not work_order.payment_condition_id:
            return None

        for record in conditions:
            if str(record.get("id")) == work_order.payment_condition_id:
                return parse_payment_condition(record, self._settings)
        return None

    def _default_note(self, work_order: WorkOrder) -> str:
        return self._settings.work_order_note_template.format(number=work_order.number)
