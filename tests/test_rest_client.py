"""
Tests for the REST client: retries, status handling and query rendering.
"""

import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest

from gte_sdk.errors import JsonDecodeError, TransportError
from gte_sdk.http import RestClient

BASE_URL = "https://mock.gte/v1"


def _client(handler, **kwargs) -> RestClient:
    kwargs.setdefault("retry_delay_ms", 0)
    return RestClient(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_get_builds_url_and_drops_empty_query_values():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"ok": True}])

    async with _client(handler) as rest:
        payload = await rest.get("/markets", {"limit": 5, "marketType": None, "newlyGraduated": True})

    assert payload == [{"ok": True}]
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/v1/markets"
    assert dict(seen[0].url.params) == {"limit": "5", "newlyGraduated": "true"}
    assert seen[0].headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_no_content_returns_none():
    async with _client(lambda request: httpx.Response(204)) as rest:
        assert await rest.get("/empty") is None


@pytest.mark.asyncio
async def test_error_status_is_retried_then_raised():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, json={"error": "boom"})

    async with _client(handler, max_retries=2) as rest:
        with pytest.raises(TransportError) as excinfo:
            await rest.get("/markets")

    assert len(calls) == 3
    err = excinfo.value
    assert err.method == "GET"
    assert err.path == "/markets"
    assert err.status_code == 500
    assert err.body == {"error": "boom"}
    assert "GET /markets failed with 500" in str(err)


@pytest.mark.asyncio
async def test_raw_error_body_is_kept_when_not_json():
    async with _client(lambda request: httpx.Response(404, text="Not Found"), max_retries=0) as rest:
        with pytest.raises(TransportError) as excinfo:
            await rest.get("/missing")

    assert excinfo.value.status_code == 404
    assert excinfo.value.body == "Not Found"


@pytest.mark.asyncio
async def test_transient_failure_recovers():
    responses = iter([
        httpx.Response(503),
        httpx.Response(200, json={"value": 1}),
    ])

    async with _client(lambda request: next(responses), max_retries=3) as rest:
        assert await rest.get("/tokens") == {"value": 1}


@pytest.mark.asyncio
async def test_network_errors_become_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler, max_retries=1) as rest:
        with pytest.raises(TransportError) as excinfo:
            await rest.get("/markets")

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_retry_backoff_is_linear(monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr("gte_sdk.http.asyncio.sleep", fake_sleep)

    async with _client(lambda request: httpx.Response(500), max_retries=3, retry_delay_ms=100) as rest:
        with pytest.raises(TransportError):
            await rest.get("/markets")

    assert delays == [0.1, 0.2, 0.3]


@pytest.mark.asyncio
async def test_malformed_json_is_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, text="{not json")

    async with _client(handler, max_retries=3) as rest:
        with pytest.raises(JsonDecodeError):
            await rest.get("/markets")

    assert len(calls) == 1


@pytest.mark.asyncio
async def test_rate_limit_spaces_requests(monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr("gte_sdk.http.asyncio.sleep", fake_sleep)

    async with _client(lambda request: httpx.Response(200, json={}), rate_limit_ms=1000) as rest:
        await rest.get("/a")
        await rest.get("/b")

    assert len(delays) == 1
    assert 0 < delays[0] <= 1.0


@pytest.mark.asyncio
async def test_first_request_is_never_delayed_by_rate_limit(monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr("gte_sdk.http.asyncio.sleep", fake_sleep)
    # a freshly booted host can report a monotonic clock below the interval
    monkeypatch.setattr("gte_sdk.http.time", SimpleNamespace(monotonic=lambda: 0.2))

    async with _client(lambda request: httpx.Response(200, json={}), rate_limit_ms=1000) as rest:
        await rest.get("/a")

    assert delays == []


@pytest.mark.asyncio
async def test_cancellation_aborts_in_flight_request():
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(10)
        return httpx.Response(200, json={})

    rest = _client(handler)
    task = asyncio.create_task(rest.get("/slow"))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    await rest.aclose()


def test_requires_base_url():
    with pytest.raises(ValueError):
        RestClient("")
