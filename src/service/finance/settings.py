"""
Finance Settings for the ERP Finance Gateway.

Business defaults used when payment conditions or advance requests leave
a field blank. They can be adjusted via environment variables with the
FINANCE_ prefix:
    FINANCE_DEFAULT_INTERVAL_DAYS=30
    FINANCE_DEFAULT_INSTALLMENT_COUNT=1

Usage:
    from src.service.finance.settings import finance_settings

    interval = finance_settings.default_interval_days

    # Or create custom settings for testing
    custom = FinanceSettings(default_interval_days=15)
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FinanceSettings(BaseSettings):
    """
    Configurable defaults for installment and advance generation.

    All settings can be overridden via environment variables with FINANCE_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Payment Condition Defaults ===
    default_installment_count: int = Field(
        default=1,
        ge=1,
        description="Installment count used when a payment condition leaves it blank",
    )
    default_interval_days: int = Field(
        default=30,
        ge=0,
        description="Days before the first installment when a condition leaves it blank",
    )
    max_installments: int = Field(
        default=120,
        ge=1,
        description="Upper bound on installments accepted by plan simulation",
    )

    # === Work Order Receivables ===
    revenue_account_setting_key: str = Field(
        default="plano_contas_padrao_receita_os",
        description="Configuration field holding the default revenue chart of accounts",
    )
    work_order_note_template: str = Field(
        default="Receita da OS {number}",
        description="Default history/note text for work order movements",
    )

    # === Payroll Advances ===
    advance_default_reason: str = Field(
        default="Adiantamento em lote",
        description="Reason written on batch advances when none is given",
    )


@lru_cache
def get_finance_settings() -> FinanceSettings:
    """Get cached finance settings instance."""
    return FinanceSettings()


finance_settings = get_finance_settings()
