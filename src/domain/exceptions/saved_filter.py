"""Saved filter-related domain exceptions."""

from typing import List

from .base import DomainException


class SavedFilterNotFoundException(DomainException):
    """Raised when a saved filter cannot be found."""

    def __init__(self, filter_id: str):
        super().__init__(
            message=f"Saved filter not found: {filter_id}",
            code="SAVED_FILTER_NOT_FOUND",
        )
        self.filter_id = filter_id


class InvalidSavedFilterException(DomainException):
    """
    Raised when a filter cannot be saved as submitted.

    Carries every problem found so the caller can show them all at once.
    """

    def __init__(self, errors: List[str]):
        super().__init__(
            message="; ".join(errors),
            code="INVALID_SAVED_FILTER",
        )
        self.errors = list(errors)
