"""External API client implementations."""

from .entity_store_client import HttpEntityStoreClient

__all__ = [
    "HttpEntityStoreClient",
]
