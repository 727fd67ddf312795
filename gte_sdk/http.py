"""Async REST client for the GTE API with retries and simple rate limiting."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from .config import settings
from .errors import JsonDecodeError, TransportError

logger = logging.getLogger(__name__)

QueryValue = Union[str, int, float, bool, None]


def _render_query(query: Optional[Mapping[str, QueryValue]]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for key, value in (query or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params


def _parse_json(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError as exc:
        raise JsonDecodeError(f"Failed to parse JSON: {exc}") from exc


class RestClient:
    """
    Thin JSON-over-HTTP client.

    Example usage:
        async with RestClient(base_url="https://api-testnet.gte.xyz/v1") as rest:
            markets = await rest.get("/markets", {"limit": 10})

    Failed requests (network errors and non-2xx responses) are retried up to
    ``max_retries`` times, waiting ``attempt * retry_delay_ms`` between tries.
    Cancelling the awaiting task aborts the in-flight request.
    """

    def __init__(
        self,
        base_url: str,
        *,
        max_retries: Optional[int] = None,
        retry_delay_ms: Optional[int] = None,
        rate_limit_ms: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip("/")
        self.max_retries = settings.rest_max_retries if max_retries is None else max_retries
        self.retry_delay_ms = settings.rest_retry_delay_ms if retry_delay_ms is None else retry_delay_ms
        self.rate_limit_ms = settings.rest_rate_limit_ms if rate_limit_ms is None else rate_limit_ms
        self.timeout = settings.rest_timeout_seconds if timeout_seconds is None else timeout_seconds
        self._headers = {"Content-Type": "application/json", **(headers or {})}
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._last_request_at: Optional[float] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RestClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _rate_limit(self) -> None:
        if not self.rate_limit_ms:
            return
        if self._last_request_at is not None:
            elapsed_ms = (time.monotonic() - self._last_request_at) * 1000
            if elapsed_ms < self.rate_limit_ms:
                await asyncio.sleep((self.rate_limit_ms - elapsed_ms) / 1000)
        self._last_request_at = time.monotonic()

    def _build_url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _send_once(
        self,
        method: str,
        path: str,
        params: Dict[str, str],
        body: Any,
    ) -> Any:
        client = await self._get_client()
        try:
            response = await client.request(
                method,
                self._build_url(path),
                params=params or None,
                json=body,
            )
        except httpx.RequestError as exc:
            raise TransportError(method, path, message=f"GTE API {method} {path} failed: {exc}") from exc

        if not response.is_success:
            try:
                error_body = _parse_json(response.text)
            except JsonDecodeError:
                error_body = response.text
            raise TransportError(method, path, status_code=response.status_code, body=error_body)

        if response.status_code == 204:
            return None
        return _parse_json(response.text)

    async def request(
        self,
        method: str,
        path: str,
        *,
        query: Optional[Mapping[str, QueryValue]] = None,
        body: Any = None,
    ) -> Any:
        await self._rate_limit()
        params = _render_query(query)
        attempt = 0

        while True:
            try:
                logger.debug("GTE API %s %s params=%s attempt=%d", method, path, params, attempt)
                return await self._send_once(method, path, params, body)
            except TransportError as exc:
                attempt += 1
                # Only idempotent requests are retried
                if method != "GET" or attempt > self.max_retries:
                    raise
                delay_ms = self.retry_delay_ms * attempt
                logger.warning(
                    "GTE API %s %s failed (status=%s), retry %d/%d in %dms",
                    method,
                    path,
                    exc.status_code,
                    attempt,
                    self.max_retries,
                    delay_ms,
                )
                await asyncio.sleep(delay_ms / 1000)

    async def get(self, path: str, query: Optional[Mapping[str, QueryValue]] = None) -> Any:
        return await self.request("GET", path, query=query)
