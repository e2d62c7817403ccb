"""Work order entity (ordem de serviço) as read from the entity store."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class WorkOrder:
    """
    The fields of a work order that financial generation depends on.

    Attributes:
        id: Identifier in the entity store
        number: Human-facing work order number (numero_os)
        opening_date: Date the work order was opened; anchors the plan
        total_cents: Work order total in cents
        payment_condition_id: Optional payment condition reference
        payment_method_id: Optional payment method reference
        contact_type: Kind of contact billed ("cliente", "fornecedor", ...)
        contact_id: Billed contact identifier
    """

    id: str
    number: str
    opening_date: Optional[date]
    total_cents: int
    payment_condition_id: Optional[str] = None
    payment_method_id: Optional[str] = None
    contact_type: str = "cliente"
    contact_id: Optional[str] = None

    @property
    def competencia(self) -> Optional[str]:
        """Accounting period (YYYY-MM) derived from the opening date."""
        if self.opening_date is None:
            return None
        return self.opening_date.strftime("%Y-%m")

    @property
    def is_customer(self) -> bool:
        return self.contact_type == "cliente"
