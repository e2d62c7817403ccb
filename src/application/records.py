"""
Parsing of raw entity store records into domain entities.

Store records are loosely typed JSON objects; every default and
coercion the services rely on is applied here and nowhere else.
"""

from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional

import structlog

from src.domain.entities import (
    PaymentCondition,
    PaymentConditionKind,
    Recipient,
    WorkOrder,
)
from src.service.finance import to_cents
from src.service.finance.settings import FinanceSettings, finance_settings

logger = structlog.get_logger(__name__)


def parse_date(value: Any) -> Optional[date]:
    """Parse "YYYY-MM-DD" or an ISO 8601 timestamp; blanks give None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value)
    if "T" in text:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return datetime.strptime(text[:10], "%Y-%m-%d").date()


def parse_cents(value: Any) -> int:
    """Parse a currency field (number or numeric string) to cents; blanks give 0."""
    if value is None or value == "":
        return 0
    return to_cents(value)


def parse_int(value: Any, default: int) -> int:
    """Parse an integer field, falling back to ``default`` when blank."""
    if value is None or value == "":
        return default
    return int(value)


def parse_payment_condition(
    record: Dict[str, Any],
    settings: FinanceSettings = finance_settings,
) -> PaymentCondition:
    """
    Build a PaymentCondition from a CondicaoPagamento record.

    Blank counts and intervals take the configured defaults; an unknown
    ``tipo`` is treated as immediate, which never shifts the anchor.
    """
    raw_kind = record.get("tipo") or PaymentConditionKind.IMMEDIATE.value
    try:
        kind = PaymentConditionKind(raw_kind)
    except ValueError:
        logger.warning(
            "unknown_payment_condition_kind",
            condition_id=record.get("id"),
            kind=raw_kind,
        )
        kind = PaymentConditionKind.IMMEDIATE

    return PaymentCondition(
        id=str(record.get("id", "")),
        name=record.get("nome") or "",
        kind=kind,
        installment_count=parse_int(
            record.get("num_parcelas"), settings.default_installment_count
        ),
        interval_days=parse_int(
            record.get("intervalo_dias"), settings.default_interval_days
        ),
    )


def parse_work_order(record: Dict[str, Any]) -> WorkOrder:
    """Build a WorkOrder from an OrdemServico record."""
    return WorkOrder(
        id=str(record["id"]),
        number=str(record.get("numero_os") or record["id"]),
        opening_date=parse_date(record.get("data_abertura")),
        total_cents=parse_cents(record.get("valor_total")),
        payment_condition_id=record.get("condicao_pagamento_id") or None,
        payment_method_id=record.get("forma_pagamento_id") or None,
        contact_type=record.get("contato_tipo") or "cliente",
        contact_id=record.get("contato_id") or None,
    )


def parse_recipient(record: Dict[str, Any], selected_ids: Iterable[str]) -> Recipient:
    """Build a Recipient from a Funcionario record; a missing salary counts as 0."""
    recipient_id = str(record["id"])
    return Recipient(
        id=recipient_id,
        name=record.get("nome") or "",
        base_value_cents=parse_cents(record.get("salario")),
        selected=recipient_id in set(selected_ids),
    )
