"""
Installment Scheduler for the ERP Finance Gateway.

Turns a total amount and a payment condition into dated installments.

Rules:
- No payment condition: one installment for the full amount, due on the
  anchor date.
- Deferred ("prazo") and installment ("parcelado") conditions move the
  first due date ``interval_days`` after the anchor; immediate ("a_vista")
  conditions start on the anchor itself.
- Installments are always one calendar month apart. ``interval_days``
  only positions the first one.
- Every installment gets ``floor(total / count)`` cents and the last one
  absorbs the remainder, so the amounts always sum to the total.

The scheduler is pure: identical inputs give identical plans, and it
never looks at the current date.
"""

from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from src.domain.entities import (
    Installment,
    InstallmentPlan,
    PaymentCondition,
    PaymentConditionKind,
)
from src.domain.exceptions import InvalidArgumentException

from .money import distribute_evenly


def add_months(value: date, months: int) -> date:
    """
    Add calendar months, clamping to the last day of shorter months.

    Example:
        add_months(date(2024, 1, 31), 1) -> date(2024, 2, 29)
    """
    return value + relativedelta(months=months)


def first_due_date(
    anchor_date: date,
    interval_days: int,
    kind: PaymentConditionKind,
) -> date:
    """Due date of the first installment for a given condition kind."""
    if kind.shifts_anchor:
        return anchor_date + timedelta(days=interval_days)
    return anchor_date


def schedule_installments(
    total_cents: int,
    anchor_date: date,
    installment_count: int,
    interval_days: int,
    kind: PaymentConditionKind,
    payment_condition_id: Optional[str] = None,
) -> InstallmentPlan:
    """
    Build a plan from explicit condition parameters.

    Args:
        total_cents: Total to split, in cents (>= 0)
        anchor_date: Reference date of the originating document
        installment_count: Number of installments (>= 1)
        interval_days: Days from anchor to first installment (>= 0)
        kind: Payment condition kind
        payment_condition_id: Condition reference kept on the plan

    Returns:
        InstallmentPlan with ``installment_count`` installments

    Raises:
        InvalidArgumentException: On negative totals, non-positive counts,
            negative intervals or due dates past the end of the calendar
    """
    if installment_count <= 0:
        raise InvalidArgumentException(
            f"installment_count must be positive, got {installment_count}"
        )
    if total_cents < 0:
        raise InvalidArgumentException(
            f"total must not be negative, got {total_cents} cents"
        )
    if interval_days < 0:
        raise InvalidArgumentException(
            f"interval_days must not be negative, got {interval_days}"
        )

    amounts = distribute_evenly(total_cents, installment_count)

    try:
        start = first_due_date(anchor_date, interval_days, kind)
        due_dates = [add_months(start, i) for i in range(installment_count)]
    except (OverflowError, ValueError):
        raise InvalidArgumentException(
            f"due dates for {installment_count} installments {interval_days} days "
            f"after {anchor_date.isoformat()} fall past {date.max.isoformat()}"
        )

    installments = [
        Installment(
            sequence_number=i + 1,
            due_date=due_date,
            amount_cents=amount,
        )
        for i, (due_date, amount) in enumerate(zip(due_dates, amounts))
    ]

    return InstallmentPlan(
        total_cents=total_cents,
        anchor_date=anchor_date,
        interval_days=interval_days,
        payment_condition_id=payment_condition_id,
        installments=installments,
    )


def build_installment_plan(
    total_cents: int,
    anchor_date: date,
    payment_condition: Optional[PaymentCondition] = None,
) -> InstallmentPlan:
    """
    Build the installment plan for a document.

    Args:
        total_cents: Document total in cents (>= 0)
        anchor_date: Document reference date (e.g. work order opening date)
        payment_condition: Resolved condition, or None when the document
            has none or it could not be found

    Returns:
        InstallmentPlan whose amounts sum to ``total_cents``
    """
    if total_cents < 0:
        raise InvalidArgumentException(
            f"total must not be negative, got {total_cents} cents"
        )

    if payment_condition is None:
        return InstallmentPlan(
            total_cents=total_cents,
            anchor_date=anchor_date,
            installments=[
                Installment(
                    sequence_number=1,
                    due_date=anchor_date,
                    amount_cents=total_cents,
                )
            ],
        )

    return schedule_installments(
        total_cents=total_cents,
        anchor_date=anchor_date,
        installment_count=payment_condition.installment_count,
        interval_days=payment_condition.interval_days,
        kind=payment_condition.kind,
        payment_condition_id=payment_condition.id,
    )
