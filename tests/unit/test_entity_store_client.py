"""
Unit Tests for the HTTP entity store client.

These tests verify:
1. URLs, query parameters and auth header
2. Reads retry on transport errors and timeouts
3. Writes are sent exactly once
4. Store errors map to domain exceptions
"""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from src.domain.exceptions import EntityStoreException, EntityStoreTimeoutException
from src.infrastructure.clients import HttpEntityStoreClient


BASE_URL = "http://store.test/api/apps/erp"


def make_client(handler, **kwargs) -> HttpEntityStoreClient:
    return HttpEntityStoreClient(
        base_url=BASE_URL,
        api_key=kwargs.pop("api_key", "secret"),
        timeout=1.0,
        max_retries=kwargs.pop("max_retries", 3),
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture(autouse=True)
def no_backoff():
    with patch(
        "src.infrastructure.clients.entity_store_client.asyncio.sleep",
        new=AsyncMock(),
    ) as sleep:
        yield sleep


# =============================================================================
# Request Shape Tests
# =============================================================================

class TestRequests:

    @pytest.mark.asyncio
    async def test_create_posts_json(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            body = json.loads(request.content)
            return httpx.Response(201, json={"id": "rec-1", **body})

        client = make_client(handler)
        record = await client.create("ContasReceber", {"valor_original": 333.33})

        assert record == {"id": "rec-1", "valor_original": 333.33}
        assert seen[0].method == "POST"
        assert str(seen[0].url) == f"{BASE_URL}/entities/ContasReceber"
        assert seen[0].headers["api_key"] == "secret"

    @pytest.mark.asyncio
    async def test_update_puts_to_record_url(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "os-1", "financeiro_gerado": True})

        client = make_client(handler)
        await client.update("OrdemServico", "os-1", {"financeiro_gerado": True})

        assert seen[0].method == "PUT"
        assert seen[0].url.path.endswith("/entities/OrdemServico/os-1")

    @pytest.mark.asyncio
    async def test_filter_sends_query_sort_and_limit(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": "a"}])

        client = make_client(handler)
        records = await client.filter("Funcionario", {"ativo": True}, sort="-created_date", limit=5)

        assert records == [{"id": "a"}]
        params = seen[0].url.params
        assert json.loads(params["q"]) == {"ativo": True}
        assert params["sort"] == "-created_date"
        assert params["limit"] == "5"

    @pytest.mark.asyncio
    async def test_list_accepts_items_envelope(self):
        client = make_client(lambda request: httpx.Response(200, json={"items": [{"id": "x"}]}))

        assert await client.list("ContaBancaria") == [{"id": "x"}]

    @pytest.mark.asyncio
    async def test_no_api_key_header_when_unset(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        client = make_client(handler, api_key="")
        await client.list("ContaBancaria")

        assert "api_key" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_get_missing_record_returns_none(self):
        client = make_client(lambda request: httpx.Response(404, json={"detail": "not found"}))

        assert await client.get("OrdemServico", "nope") is None


# =============================================================================
# Retry Tests
# =============================================================================

class TestRetries:

    @pytest.mark.asyncio
    async def test_read_retries_transport_errors(self, no_backoff):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            if len(attempts) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=[{"id": "a"}])

        client = make_client(handler)
        records = await client.list("CondicaoPagamento")

        assert records == [{"id": "a"}]
        assert len(attempts) == 3
        assert [call.args[0] for call in no_backoff.await_args_list] == [0.1, 0.2]

    @pytest.mark.asyncio
    async def test_read_timeout_after_retries(self):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(EntityStoreTimeoutException):
            await client.list("CondicaoPagamento")
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_read_error_status_is_not_retried(self):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            return httpx.Response(500, text="boom")

        client = make_client(handler)

        with pytest.raises(EntityStoreException) as exc_info:
            await client.list("Funcionario")
        assert exc_info.value.status_code == 500
        assert len(attempts) == 1

    @pytest.mark.asyncio
    async def test_write_is_sent_once(self):
        attempts = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(request)
            raise httpx.ConnectError("connection reset", request=request)

        client = make_client(handler)

        with pytest.raises(EntityStoreException):
            await client.create("ContasReceber", {"valor_original": 10.0})
        assert len(attempts) == 1

    @pytest.mark.asyncio
    async def test_write_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.WriteTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(EntityStoreTimeoutException):
            await client.create("Adiantamento", {"valor": 600.0})

    @pytest.mark.asyncio
    async def test_write_error_status(self):
        client = make_client(lambda request: httpx.Response(422, text="invalid"))

        with pytest.raises(EntityStoreException) as exc_info:
            await client.create("Adiantamento", {"valor": 600.0})
        assert exc_info.value.status_code == 422
