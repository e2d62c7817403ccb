"""
Date range presets used by list screens and saved filters.

Weeks start on Sunday. Ranges that run "to date" end on ``today``.
Every function takes ``today`` explicitly so results are reproducible.
"""

from datetime import date, timedelta
from typing import Callable, Dict, Optional

from dateutil.relativedelta import relativedelta

from src.domain.entities import DateRange
from src.domain.exceptions import InvalidArgumentException

CUSTOM = "custom"


def _start_of_week(today: date) -> date:
    days_since_sunday = (today.weekday() + 1) % 7
    return today - timedelta(days=days_since_sunday)


def _start_of_quarter(today: date) -> date:
    return date(today.year, (today.month - 1) // 3 * 3 + 1, 1)


def _today(today: date) -> DateRange:
    return DateRange(today, today)


def _yesterday(today: date) -> DateRange:
    yesterday = today - timedelta(days=1)
    return DateRange(yesterday, yesterday)


def _this_week(today: date) -> DateRange:
    return DateRange(_start_of_week(today), today)


def _last_week(today: date) -> DateRange:
    start = _start_of_week(today) - timedelta(days=7)
    return DateRange(start, start + timedelta(days=6))


def _this_month(today: date) -> DateRange:
    return DateRange(today.replace(day=1), today)


def _last_month(today: date) -> DateRange:
    end = today.replace(day=1) - timedelta(days=1)
    return DateRange(end.replace(day=1), end)


def _this_quarter(today: date) -> DateRange:
    return DateRange(_start_of_quarter(today), today)


def _last_quarter(today: date) -> DateRange:
    this_start = _start_of_quarter(today)
    return DateRange(this_start - relativedelta(months=3), this_start - timedelta(days=1))


def _this_year(today: date) -> DateRange:
    return DateRange(date(today.year, 1, 1), today)


def _last_days(days: int) -> Callable[[date], DateRange]:
    def resolve(today: date) -> DateRange:
        return DateRange(today - timedelta(days=days), today)

    return resolve


PERIOD_PRESETS: Dict[str, tuple[str, Callable[[date], DateRange]]] = {
    "today": ("Hoje", _today),
    "yesterday": ("Ontem", _yesterday),
    "this_week": ("Esta semana", _this_week),
    "last_week": ("Semana passada", _last_week),
    "this_month": ("Este mês", _this_month),
    "last_month": ("Mês passado", _last_month),
    "this_quarter": ("Este trimestre", _this_quarter),
    "last_quarter": ("Último trimestre", _last_quarter),
    "this_year": ("Este ano", _this_year),
    "last_7_days": ("Últimos 7 dias", _last_days(7)),
    "last_30_days": ("Últimos 30 dias", _last_days(30)),
    "last_90_days": ("Últimos 90 dias", _last_days(90)),
}


def list_presets() -> list[dict]:
    """Preset ids and labels, custom last."""
    presets = [{"id": key, "label": label} for key, (label, _) in PERIOD_PRESETS.items()]
    presets.append({"id": CUSTOM, "label": "Personalizado"})
    return presets


def resolve_period(
    preset: str,
    today: date,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> Optional[DateRange]:
    """
    Resolve a preset id to a concrete date range.

    Args:
        preset: One of the ids in PERIOD_PRESETS, or "custom"
        today: Reference date
        custom_start: Start bound for "custom"
        custom_end: End bound for "custom"

    Returns:
        The DateRange, or None for "custom" without any bound

    Raises:
        InvalidArgumentException: For unknown presets or inverted custom bounds
    """
    if preset == CUSTOM:
        if custom_start is None and custom_end is None:
            return None
        if custom_start and custom_end and custom_start > custom_end:
            raise InvalidArgumentException(
                f"custom period starts after it ends: {custom_start} > {custom_end}"
            )
        return DateRange(custom_start, custom_end)

    entry = PERIOD_PRESETS.get(preset)
    if entry is None:
        raise InvalidArgumentException(f"Unknown period preset: {preset}")

    _, resolver = entry
    return resolver(today)
