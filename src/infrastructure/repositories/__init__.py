"""Repository implementations."""

from .saved_filter_repository import PostgresSavedFilterRepository

__all__ = [
    "PostgresSavedFilterRepository",
]
