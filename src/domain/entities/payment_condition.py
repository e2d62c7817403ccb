"""Payment condition entity describing how a total is split."""

from dataclasses import dataclass
from enum import Enum


class PaymentConditionKind(str, Enum):
    """How the first installment is positioned relative to the anchor date."""

    IMMEDIATE = "a_vista"
    DEFERRED = "prazo"
    INSTALLMENT_PLAN = "parcelado"

    @property
    def shifts_anchor(self) -> bool:
        """Deferred and installment plans start ``interval_days`` after the anchor."""
        return self in (PaymentConditionKind.DEFERRED, PaymentConditionKind.INSTALLMENT_PLAN)


@dataclass(frozen=True)
class PaymentCondition:
    """
    A reusable rule for splitting a total into installments.

    Attributes:
        id: Identifier in the entity store
        name: Display name (e.g. "30/60/90")
        kind: Immediate, deferred or installment plan
        installment_count: Number of installments
        interval_days: Days between the anchor date and the first installment
    """

    id: str
    name: str
    kind: PaymentConditionKind
    installment_count: int = 1
    interval_days: int = 30

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nome": self.name,
            "tipo": self.kind.value,
            "num_parcelas": self.installment_count,
            "intervalo_dias": self.interval_days,
        }
