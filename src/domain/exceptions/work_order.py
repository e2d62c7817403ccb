"""Work order-related domain exceptions."""

from .base import DomainException


class WorkOrderNotFoundException(DomainException):
    """Raised when a work order cannot be found in the entity store."""

    def __init__(self, work_order_id: str):
        super().__init__(
            message=f"Work order not found: {work_order_id}",
            code="WORK_ORDER_NOT_FOUND",
        )
        self.work_order_id = work_order_id
