"""
Domain Interfaces (Ports)
"""

from .repositories import SavedFilterRepository
from .clients import EntityStoreClient

__all__ = [
    "SavedFilterRepository",
    "EntityStoreClient",
]
