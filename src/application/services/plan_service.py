"""Plan service - installment plan simulation use cases."""

from datetime import date
from typing import Optional

import structlog

from src.core.metrics import record_plan_generated
from src.domain.entities import PaymentConditionKind
from src.domain.exceptions import InvalidArgumentException
from src.application.dto import PlanResponse
from src.service.finance import schedule_installments
from src.service.finance.settings import FinanceSettings, finance_settings

logger = structlog.get_logger(__name__)


class PlanService:
    """
    Application service for installment plan simulation.

    Runs the scheduler on explicit condition parameters; nothing is
    read from or written to the entity store.
    """

    def __init__(self, settings: FinanceSettings = finance_settings):
        self._settings = settings

    def simulate(
        self,
        total_cents: int,
        anchor_date: date,
        kind: PaymentConditionKind,
        installment_count: Optional[int] = None,
        interval_days: Optional[int] = None,
    ) -> PlanResponse:
        """
        Compute a plan for ad-hoc condition parameters.

        Args:
            total_cents: Amount to split, in cents
            anchor_date: Reference date
            kind: Payment condition kind
            installment_count: Number of installments (configured default if None)
            interval_days: Days to the first installment (configured default if None)

        Returns:
            PlanResponse with the computed installments

        Raises:
            InvalidArgumentException: If the parameters are out of range
        """
        if installment_count is None:
            installment_count = self._settings.default_installment_count
        if interval_days is None:
            interval_days = self._settings.default_interval_days

        if installment_count > self._settings.max_installments:
            raise InvalidArgumentException(
                f"installment_count must be at most {self._settings.max_installments}, "
                f"got {installment_count}"
            )

        plan = schedule_installments(
            total_cents=total_cents,
            anchor_date=anchor_date,
            installment_count=installment_count,
            interval_days=interval_days,
            kind=kind,
        )
        record_plan_generated("simulation")

        logger.info(
            "plan_simulated",
            total_cents=total_cents,
            installment_count=installment_count,
            interval_days=interval_days,
            kind=kind.value,
        )

        return PlanResponse.from_entity(plan)
