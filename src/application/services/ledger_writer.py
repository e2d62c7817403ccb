"""Ledger writer - persists generated plans and batches to the entity store."""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import structlog

from src.core.metrics import (
    record_advances_written,
    record_installments_written,
    record_ledger_write_failure,
)
from src.domain.entities import (
    BatchAllocation,
    Installment,
    LedgerWriteResult,
    WorkOrder,
)
from src.domain.exceptions import EntityStoreException, LedgerWriteException
from src.domain.interfaces import EntityStoreClient
from src.application.dto import ReceivableOptions
from src.service.finance import cents_to_float

logger = structlog.get_logger(__name__)

MOVEMENT_ENTITY = "MovimentacaoFinanceira"
RECEIVABLE_ENTITY = "ContasReceber"
WORK_ORDER_ENTITY = "OrdemServico"
ADVANCE_ENTITY = "Adiantamento"

PENDING = "pendente"


def _record_id(record: Any, entity: str) -> str:
    record_id = record.get("id") if isinstance(record, dict) else None
    if not record_id:
        logger.error("ledger_record_without_id", entity=entity, response=record)
        raise EntityStoreException(f"{entity} create returned no id")
    return str(record_id)


class LedgerWriter:
    """
    Writes parent and child financial records, one store call at a time.

    The store has no transactions. Writes are never retried and records
    already created are never rolled back: a failure after the first
    write raises LedgerWriteException describing what exists.
    """

    def __init__(self, store: EntityStoreClient):
        self._store = store

    async def write_work_order_receivables(
        self,
        work_order: WorkOrder,
        installments: Sequence[Installment],
        options: ReceivableOptions,
    ) -> LedgerWriteResult:
        """
        Persist a work order's installments as receivables.

        Creates the MovimentacaoFinanceira first, then one ContasReceber
        per installment in sequence order, then marks the work order as
        financially processed.

        Args:
            work_order: The originating work order
            installments: Installments to write (generated or hand-edited)
            options: Bank account, chart of accounts, competencia and note

        Returns:
            LedgerWriteResult with the movement id and receivable ids

        Raises:
            EntityStoreException: If the movement itself could not be created
            LedgerWriteException: If a later write failed
        """
        ordered = sorted(installments, key=lambda inst: inst.sequence_number)
        total_cents = sum(inst.amount_cents for inst in ordered)

        log = logger.bind(
            work_order_id=work_order.id,
            work_order_number=work_order.number,
            installment_count=len(ordered),
            total_cents=total_cents,
        )

        movement = await self._store.create(
            MOVEMENT_ENTITY,
            self._movement_payload(work_order, ordered, total_cents, options),
        )
        try:
            movement_id = _record_id(movement, MOVEMENT_ENTITY)
        except EntityStoreException as e:
            record_ledger_write_failure("movement")
            raise LedgerWriteException(
                message=f"{MOVEMENT_ENTITY} was created but the store returned no id",
                expected_count=len(ordered),
            ) from e
        log = log.bind(movement_id=movement_id)
        log.info("ledger_movement_created")

        created_ids: List[str] = []
        for inst in ordered:
            payload = self._receivable_payload(
                work_order, inst, len(ordered), options, movement_id
            )
            try:
                record = await self._store.create(RECEIVABLE_ENTITY, payload)
                created_ids.append(_record_id(record, RECEIVABLE_ENTITY))
            except EntityStoreException as e:
                record_ledger_write_failure("receivable")
                log.error(
                    "ledger_child_failed",
                    sequence_number=inst.sequence_number,
                    created_ids=created_ids,
                    error=e.message,
                )
                raise LedgerWriteException(
                    message=(
                        f"Failed writing installment {inst.sequence_number}/{len(ordered)}: "
                        f"{e.message}"
                    ),
                    parent_id=movement_id,
                    created_ids=created_ids,
                    expected_count=len(ordered),
                ) from e

        try:
            await self._store.update(
                WORK_ORDER_ENTITY,
                work_order.id,
                {
                    "financeiro_gerado": True,
                    "movimentacao_financeira_id": movement_id,
                },
            )
        except EntityStoreException as e:
            record_ledger_write_failure("source_update")
            log.error(
                "ledger_source_update_failed",
                created_ids=created_ids,
                error=e.message,
            )
            raise LedgerWriteException(
                message=f"Receivables written but work order not updated: {e.message}",
                parent_id=movement_id,
                created_ids=created_ids,
                expected_count=len(ordered),
            ) from e

        record_installments_written(len(created_ids), total_cents)
        log.info("ledger_receivables_written", receivable_ids=created_ids)

        return LedgerWriteResult(
            parent_id=movement_id,
            child_ids=created_ids,
            source_id=work_order.id,
            total_cents=total_cents,
        )

    async def write_advances(
        self,
        allocation: BatchAllocation,
        payment_date: date,
        competencia: str,
        reason: str,
        chart_of_accounts_id: Optional[str] = None,
    ) -> LedgerWriteResult:
        """
        Persist one Adiantamento per allocation record, in order.

        Raises:
            EntityStoreException: If the first advance could not be created
            LedgerWriteException: If a later advance failed
        """
        log = logger.bind(
            advance_count=len(allocation.records),
            percentage=str(allocation.percentage),
            competencia=competencia,
        )

        created_ids: List[str] = []
        for record in allocation.records:
            payload: Dict[str, Any] = {
                "funcionario_id": record.recipient_id,
                "competencia": competencia,
                "data_adiantamento": payment_date.isoformat(),
                "valor": cents_to_float(record.amount_cents),
                "motivo": reason,
                "status": PENDING,
            }
            if chart_of_accounts_id:
                payload["plano_contas_id"] = chart_of_accounts_id

            created = None
            try:
                created = await self._store.create(ADVANCE_ENTITY, payload)
                created_ids.append(_record_id(created, ADVANCE_ENTITY))
            except EntityStoreException as e:
                record_ledger_write_failure("advance")
                log.error(
                    "ledger_advance_failed",
                    employee_id=record.recipient_id,
                    created_ids=created_ids,
                    error=e.message,
                )
                if created is None and not created_ids:
                    raise
                raise LedgerWriteException(
                    message=f"Failed writing advance for employee {record.recipient_id}: {e.message}",
                    created_ids=created_ids,
                    expected_count=len(allocation.records),
                ) from e

        record_advances_written(len(created_ids), allocation.total_cents)
        log.info("ledger_advances_written", advance_ids=created_ids)

        return LedgerWriteResult(
            child_ids=created_ids,
            total_cents=allocation.total_cents,
        )

    def _movement_payload(
        self,
        work_order: WorkOrder,
        installments: Sequence[Installment],
        total_cents: int,
        options: ReceivableOptions,
    ) -> Dict[str, Any]:
        opening = work_order.opening_date.isoformat() if work_order.opening_date else None
        first_due = installments[0].due_date.isoformat() if installments else opening
        total = cents_to_float(total_cents)

        return {
            "tipo_movimentacao": "credito",
            "numero_documento": work_order.number,
            "contato_tipo": work_order.contact_type,
            "contato_id": work_order.contact_id,
            "data_faturamento": opening,
            "data_vencimento": first_due,
            "competencia": options.competencia,
            "historico": options.note,
            "forma_pagamento_id": work_order.payment_method_id,
            "condicao_pagamento_id": work_order.payment_condition_id,
            "conta_bancaria_id": options.bank_account_id,
            "origem": "os",
            "os_id": work_order.id,
            "valor_total": total,
            "status": PENDING,
            "parcelas": [
                {
                    "numero_parcela": inst.sequence_number,
                    "data_vencimento": inst.due_date.isoformat(),
                    "valor": cents_to_float(inst.amount_cents),
                    "status": PENDING,
                }
                for inst in installments
            ],
            "planos_contas": [
                {
                    "plano_contas_id": options.chart_of_accounts_id,
                    "valor": total,
                    "tipo": "credito",
                    "observacao": "",
                }
            ],
        }

    def _receivable_payload(
        self,
        work_order: WorkOrder,
        installment: Installment,
        installment_count: int,
        options: ReceivableOptions,
        movement_id: str,
    ) -> Dict[str, Any]:
        return {
            "descricao": (
                f"{work_order.number} - Parcela "
                f"{installment.sequence_number}/{installment_count}"
            ),
            "numero_documento": work_order.number,
            "data_vencimento": installment.due_date.isoformat(),
            "valor_original": cents_to_float(installment.amount_cents),
            "status": PENDING,
            "cliente_id": work_order.contact_id if work_order.is_customer else None,
            "competencia": options.competencia,
            "plano_contas_id": options.chart_of_accounts_id,
            "observacoes": f"Gerado da OS {work_order.number}\n{options.note}",
            "movimentacao_financeira_id": movement_id,
        }
