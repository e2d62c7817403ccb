"""Advance service - batch payroll advance use cases."""

import structlog

from src.core.metrics import track_generation_latency
from src.domain.entities import LedgerWriteResult
from src.domain.exceptions import GenerationRefusedException
from src.domain.interfaces import EntityStoreClient
from src.application.dto import BatchAdvancePreview, BatchAdvanceRequest
from src.application.records import parse_recipient
from src.application.services.ledger_writer import LedgerWriter
from src.service.finance import allocate_percentage
from src.service.finance.settings import FinanceSettings, finance_settings

logger = structlog.get_logger(__name__)

EMPLOYEE_ENTITY = "Funcionario"


class AdvanceService:
    """
    Application service for percentage-based payroll advances.

    Every selected employee gets ``salary * percentage / 100``, rounded
    on its own, written as one Adiantamento each.
    """

    def __init__(
        self,
        store: EntityStoreClient,
        ledger_writer: LedgerWriter,
        settings: FinanceSettings = finance_settings,
    ):
        self._store = store
        self._ledger_writer = ledger_writer
        self._settings = settings

    async def preview(self, request: BatchAdvanceRequest) -> BatchAdvancePreview:
        """
        Compute allocations for the selected employees without writing.

        Employee ids that match no Funcionario record are reported in
        ``missing_employee_ids`` and left out of the allocation.

        Raises:
            InvalidArgumentException: If the percentage is outside [0, 100]
        """
        records = await self._store.list(EMPLOYEE_ENTITY)
        recipients = [parse_recipient(record, request.employee_ids) for record in records]

        known_ids = {recipient.id for recipient in recipients}
        missing = [emp_id for emp_id in request.employee_ids if emp_id not in known_ids]

        allocation = allocate_percentage(request.percentage, recipients)

        logger.info(
            "advances_previewed",
            percentage=str(allocation.percentage),
            selected=len(allocation.records),
            missing=len(missing),
            total_cents=allocation.total_cents,
        )

        return BatchAdvancePreview(allocation=allocation, missing_employee_ids=missing)

    async def generate(self, request: BatchAdvanceRequest) -> LedgerWriteResult:
        """
        Validate the batch and write one advance per selected employee.

        Raises:
            GenerationRefusedException: If validation fails or no selected
                employee exists in the store
            InvalidArgumentException: If the percentage is outside [0, 100]
            LedgerWriteException: If the write stopped part way
        """
        errors = request.validate()
        if errors:
            logger.warning("advances_refused", errors=errors)
            raise GenerationRefusedException(errors)

        with track_generation_latency("advances_generate"):
            preview = await self.preview(request)

            if not preview.allocation.records:
                logger.warning(
                    "advances_refused",
                    errors=["no selected employee found"],
                    missing_employee_ids=preview.missing_employee_ids,
                )
                raise GenerationRefusedException(["select at least one employee"])

            result = await self._ledger_writer.write_advances(
                preview.allocation,
                payment_date=request.payment_date,
                competencia=request.competencia,
                reason=request.description or self._settings.advance_default_reason,
                chart_of_accounts_id=request.chart_of_accounts_id,
            )

        logger.info(
            "advances_generated",
            advance_count=result.child_count,
            total_cents=result.total_cents,
            competencia=request.competencia,
        )

        return result
