"""
Installment, allocation and period computations for the ERP Finance Gateway.
"""

from .settings import FinanceSettings, finance_settings
from .money import (
    round_currency,
    to_cents,
    from_cents,
    cents_to_float,
    distribute_evenly,
)
from .scheduler import (
    add_months,
    first_due_date,
    schedule_installments,
    build_installment_plan,
)
from .allocator import (
    validate_percentage,
    compute_allocation_cents,
    allocate_percentage,
)
from .periods import list_presets, resolve_period

__all__ = [
    # Settings
    "FinanceSettings",
    "finance_settings",
    # Money
    "round_currency",
    "to_cents",
    "from_cents",
    "cents_to_float",
    "distribute_evenly",
    # Scheduler
    "add_months",
    "first_due_date",
    "schedule_installments",
    "build_installment_plan",
    # Allocator
    "validate_percentage",
    "compute_allocation_cents",
    "allocate_percentage",
    # Periods
    "list_presets",
    "resolve_period",
]
