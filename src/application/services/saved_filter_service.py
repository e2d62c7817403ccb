"""Saved filter service - named list-screen filters and period resolution."""

from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog

from src.domain.entities import DateRange, SavedFilter
from src.domain.exceptions import (
    InvalidArgumentException,
    InvalidSavedFilterException,
    SavedFilterNotFoundException,
)
from src.domain.interfaces import SavedFilterRepository
from src.service.finance import resolve_period
from src.service.finance.periods import CUSTOM, PERIOD_PRESETS

logger = structlog.get_logger(__name__)

PERIOD_KEY = "selectedPeriod"
CUSTOM_START_KEY = "customDateStart"
CUSTOM_END_KEY = "customDateEnd"


class SavedFilterService:
    """
    Application service for saved filters.

    Filters are scoped to an entity name (the list screen they belong to).
    """

    def __init__(self, repository: SavedFilterRepository):
        self._repo = repository

    async def list_filters(self, entity_name: str) -> List[SavedFilter]:
        filters = await self._repo.load(entity_name)
        logger.info("saved_filters_loaded", entity_name=entity_name, count=len(filters))
        return filters

    async def save_filter(
        self,
        entity_name: str,
        name: Optional[str],
        config: Optional[Dict[str, Any]] = None,
    ) -> SavedFilter:
        """
        Save a named filter.

        The name and the period selection are checked before anything is
        stored.

        Raises:
            InvalidSavedFilterException: If the name is blank or the period
                selection cannot be resolved
        """
        config = dict(config or {})

        errors = []
        if not name or not name.strip():
            errors.append("filter name is required")
        errors.extend(period_errors(config))

        if errors:
            logger.info("saved_filter_refused", entity_name=entity_name, errors=errors)
            raise InvalidSavedFilterException(errors)

        saved_filter = SavedFilter(
            entity_name=entity_name,
            name=name.strip(),
            config=config,
        )
        await self._repo.save(saved_filter)

        logger.info(
            "saved_filter_created",
            entity_name=entity_name,
            filter_id=str(saved_filter.id),
            name=saved_filter.name,
        )
        return saved_filter

    async def delete_filter(self, entity_name: str, filter_id: UUID) -> None:
        """
        Delete a saved filter.

        Raises:
            SavedFilterNotFoundException: If no such filter exists for the entity
        """
        deleted = await self._repo.delete(entity_name, filter_id)
        if not deleted:
            logger.warning(
                "saved_filter_not_found",
                entity_name=entity_name,
                filter_id=str(filter_id),
            )
            raise SavedFilterNotFoundException(str(filter_id))

        logger.info("saved_filter_deleted", entity_name=entity_name, filter_id=str(filter_id))

    @staticmethod
    def period_of(saved_filter: SavedFilter, today: date) -> Optional[DateRange]:
        """
        Resolve the date range a saved filter's period selection denotes.

        Filters whose period no longer resolves (for example rows stored
        before the selection was checked) get no range instead of failing
        the whole listing.
        """
        try:
            return _resolve_config_period(saved_filter.config, today)
        except InvalidArgumentException as e:
            logger.warning(
                "saved_filter_period_unresolved",
                entity_name=saved_filter.entity_name,
                filter_id=str(saved_filter.id),
                reason=e.message,
            )
            return None


def period_errors(config: Dict[str, Any]) -> List[str]:
    """Problems with a filter config's period selection, empty when it resolves."""
    errors = []

    preset = config.get(PERIOD_KEY)
    if preset and not (isinstance(preset, str) and (preset == CUSTOM or preset in PERIOD_PRESETS)):
        errors.append(f"unknown period preset: {preset}")

    bounds = {}
    for key in (CUSTOM_START_KEY, CUSTOM_END_KEY):
        try:
            bounds[key] = _parse_optional_date(config.get(key))
        except InvalidArgumentException:
            errors.append(f"{key} must be a date in YYYY-MM-DD format")

    start, end = bounds.get(CUSTOM_START_KEY), bounds.get(CUSTOM_END_KEY)
    if preset == CUSTOM and start and end and start > end:
        errors.append(f"{CUSTOM_START_KEY} must not be after {CUSTOM_END_KEY}")

    return errors


def _resolve_config_period(config: Dict[str, Any], today: date) -> Optional[DateRange]:
    preset = config.get(PERIOD_KEY)
    if not preset:
        return None
    if not isinstance(preset, str):
        raise InvalidArgumentException(f"Unknown period preset: {preset}")

    return resolve_period(
        preset,
        today,
        custom_start=_parse_optional_date(config.get(CUSTOM_START_KEY)),
        custom_end=_parse_optional_date(config.get(CUSTOM_END_KEY)),
    )


def _parse_optional_date(value: Any) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise InvalidArgumentException(f"Not a date: {value!r}")
