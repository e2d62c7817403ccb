"""HTTP implementation of EntityStoreClient."""

import asyncio
import json
from typing import Any, Dict, List, Optional

import httpx
import structlog

from src.core.config import settings
from src.core.metrics import (
    track_store_latency,
    record_store_success,
    record_store_failure,
)
from src.domain.exceptions import (
    EntityStoreException,
    EntityStoreTimeoutException,
)
from src.domain.interfaces import EntityStoreClient

logger = structlog.get_logger(__name__)


class HttpEntityStoreClient(EntityStoreClient):
    """
    HTTP client for the hosted entity store.

    Reads are retried with exponential backoff on timeouts and transport
    errors. Writes are sent exactly once: the store has no idempotency
    key, so a retried create could duplicate a financial record.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.store_api_url).rstrip("/")
        self._api_key = api_key if api_key is not None else settings.store_api_key
        self._timeout = timeout or settings.store_timeout
        self._max_retries = max_retries or settings.store_max_retries
        self._transport = transport

    async def create(self, entity: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._write("POST", self._url(entity), data, "create", entity)

    async def update(
        self,
        entity: str,
        record_id: str,
        patch: Dict[str, Any],
    ) -> Dict[str, Any]:
        return await self._write(
            "PUT", self._url(entity, record_id), patch, "update", entity
        )

    async def get(self, entity: str, record_id: str) -> Optional[Dict[str, Any]]:
        return await self._read(
            self._url(entity, record_id), None, "get", entity, allow_missing=True
        )

    async def list(
        self,
        entity: str,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        params = self._list_params(sort, limit)
        data = await self._read(self._url(entity), params, "list", entity)
        return self._as_records(data)

    async def filter(
        self,
        entity: str,
        query: Dict[str, Any],
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        params = self._list_params(sort, limit)
        params["q"] = json.dumps(query)
        data = await self._read(self._url(entity), params, "filter", entity)
        return self._as_records(data)

    def _url(self, entity: str, record_id: str | None = None) -> str:
        url = f"{self._base_url}/entities/{entity}"
        if record_id is not None:
            url = f"{url}/{record_id}"
        return url

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["api_key"] = self._api_key
        return headers

    def _list_params(self, sort: Optional[str], limit: Optional[int]) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if sort:
            params["sort"] = sort
        if limit is not None:
            params["limit"] = limit
        return params

    def _as_records(self, data: Any) -> List[Dict[str, Any]]:
        """Accept both a bare JSON array and an envelope with "items"."""
        if data is None:
            return []
        if isinstance(data, dict):
            return list(data.get("items", []))
        return list(data)

    def _raise_for_status(
        self,
        response: httpx.Response,
        operation: str,
        entity: str,
    ) -> None:
        if response.status_code >= 400:
            record_store_failure(operation, "error")
            raise EntityStoreException(
                message=f"Entity store error on {operation} {entity}: {response.text[:200]}",
                status_code=response.status_code,
            )

    async def _read(
        self,
        url: str,
        params: Optional[Dict[str, Any]],
        operation: str,
        entity: str,
        allow_missing: bool = False,
    ) -> Any:
        """
        Send a GET with retry logic.

        Uses exponential backoff: 0.1s, 0.2s, 0.4s, ...
        """
        last_exception = None

        for attempt in range(self._max_retries):
            try:
                with track_store_latency(operation):
                    async with httpx.AsyncClient(
                        timeout=self._timeout,
                        transport=self._transport,
                    ) as client:
                        response = await client.get(
                            url,
                            params=params,
                            headers=self._headers(),
                        )

                        if allow_missing and response.status_code == 404:
                            record_store_success(operation)
                            return None

                        self._raise_for_status(response, operation, entity)

                        record_store_success(operation)
                        return response.json()

            except httpx.TimeoutException:
                record_store_failure(operation, "timeout")
                last_exception = EntityStoreTimeoutException()
                logger.warning(
                    "store_timeout",
                    operation=operation,
                    entity=entity,
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except EntityStoreException:
                raise
            except httpx.HTTPError as e:
                record_store_failure(operation, "error")
                last_exception = EntityStoreException(
                    message=f"Unexpected error: {str(e)}",
                )
                logger.error(
                    "store_error",
                    operation=operation,
                    entity=entity,
                    attempt=attempt + 1,
                    error=str(e),
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or EntityStoreException(f"Failed to {operation} {entity}")

    async def _write(
        self,
        method: str,
        url: str,
        payload: Dict[str, Any],
        operation: str,
        entity: str,
    ) -> Dict[str, Any]:
        """Send a single, non-retried write."""
        try:
            with track_store_latency(operation):
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await client.request(
                        method,
                        url,
                        json=payload,
                        headers=self._headers(),
                    )

                    self._raise_for_status(response, operation, entity)

                    record_store_success(operation)
                    logger.debug(
                        "store_write",
                        operation=operation,
                        entity=entity,
                        status_code=response.status_code,
                    )
                    return response.json()

        except httpx.TimeoutException:
            record_store_failure(operation, "timeout")
            logger.warning("store_timeout", operation=operation, entity=entity)
            raise EntityStoreTimeoutException()
        except httpx.HTTPError as e:
            record_store_failure(operation, "error")
            logger.error(
                "store_error",
                operation=operation,
                entity=entity,
                error=str(e),
            )
            raise EntityStoreException(message=f"Unexpected error: {str(e)}")
