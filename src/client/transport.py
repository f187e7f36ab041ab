"""HTTP transport layer with retry logic and connection pooling."""

import asyncio
import random
from typing import Any

import httpx

from .exceptions import TransportError


class Transport:
    def __init__(self, base_url: str, timeout: float = 10.0, max_retries: int = 3,
                 transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "Transport":
        self._client = httpx.AsyncClient(base_url=self._base_url, timeout=httpx.Timeout(self._timeout),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10), transport=self._transport)
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Any, exc_tb: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    def _backoff(self, attempt: int) -> float:
        delay = min(0.5 * (2 ** attempt), 10.0)
        return max(0.05, delay + delay * 0.25 * (2 * random.random() - 1))

    def _retryable(self, code: int) -> bool:
        return code in (408, 429, 500, 502, 503, 504)

    async def post(self, path: str, data: dict | None = None) -> tuple[int, dict | None]:
        # Creating a session is not idempotent, never retried.
        if not self._client:
            raise TransportError("Transport not initialized")
        return await self._request("POST", path, data, retry=False)

    async def get(self, path: str, retry: bool = True) -> tuple[int, dict | None]:
        if not self._client:
            raise TransportError("Transport not initialized")
        return await self._request("GET", path, None, retry)

    async def _request(self, method: str, path: str, data: dict | None, retry: bool) -> tuple[int, dict | None]:
        last_err: Exception | None = None
        attempts = self._max_retries if retry else 1
        for i in range(attempts):
            try:
                resp = await (self._client.post(path, json=data, headers=self._headers()) if method == "POST"
                              else self._client.get(path, headers=self._headers()))
                if self._retryable(resp.status_code) and i < attempts - 1:
                    await asyncio.sleep(self._backoff(i))
                    continue
                try:
                    return resp.status_code, resp.json() if resp.content else None
                except ValueError:
                    return resp.status_code, None
            except (httpx.TimeoutException, httpx.RequestError) as e:
                last_err = e
                if i < attempts - 1:
                    await asyncio.sleep(self._backoff(i))
        raise TransportError(f"Request failed after {attempts} attempts: {last_err}")
