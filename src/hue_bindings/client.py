from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from hue_bindings.config import BridgeConfig
from hue_bindings.errors import DecodeError, TransportError


logger = logging.getLogger("hue_bindings")

METHODS = frozenset({"GET", "PUT", "POST", "DELETE"})


class BridgeClient:
    """Issues JSON requests against ``http://<host>/api/<username>/...``."""

    def __init__(
        self,
        *,
        bridge_host: str | None,
        username: str | None,
        timeout_seconds: float = 10.0,
        connect_timeout_seconds: float = 3.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._bridge_host = bridge_host
        self._username = username
        self._timeout = httpx.Timeout(timeout_seconds, connect=connect_timeout_seconds)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls, config: BridgeConfig, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> "BridgeClient":
        return cls(
            bridge_host=config.bridge_host,
            username=config.username,
            timeout_seconds=config.timeout_seconds,
            connect_timeout_seconds=config.connect_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "BridgeClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def bridge_host(self) -> str | None:
        return self._bridge_host

    @property
    def username(self) -> str | None:
        return self._username

    def _base_url(self) -> str:
        if not self._bridge_host:
            raise TransportError("bridge_host not configured")
        return f"http://{self._bridge_host}"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client:
            return self._client
        self._client = httpx.AsyncClient(
            base_url=self._base_url(),
            timeout=self._timeout,
            transport=self._transport,
        )
        return self._client

    def api_path(self, path: str) -> str:
        if not self._username:
            raise TransportError("username not configured")
        path = path.lstrip("/")
        if not path:
            return f"/api/{self._username}"
        return f"/api/{self._username}/{path}"

    async def send(
        self,
        method: str,
        path: str,
        body: Any | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Send one request below the username-scoped API root and return the decoded JSON."""
        return await self._request(method, self.api_path(path), body, timeout=timeout)

    async def send_unscoped(
        self,
        method: str,
        path: str,
        body: Any | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        return await self._request(method, path, body, timeout=timeout)

    async def _request(self, method: str, url_path: str, body: Any | None, *, timeout: float | None) -> Any:
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported method: {method}")

        client = self._get_client()
        kwargs: dict[str, Any] = {}
        if body is not None:
            kwargs["json"] = body
        if timeout is not None:
            kwargs["timeout"] = timeout

        start = time.perf_counter()
        try:
            resp = await client.request(method, url_path, **kwargs)
        except httpx.TransportError as exc:
            logger.debug("%s %s failed: %s", method, url_path, exc)
            raise TransportError(exc) from exc
        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug("%s %s -> %s (%.1fms)", method, url_path, resp.status_code, duration_ms)

        if resp.status_code >= 400:
            raise TransportError(
                f"HTTP {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            return resp.json()
        except ValueError as exc:
            logger.warning("%s %s returned a non-JSON body (%d bytes)", method, url_path, len(resp.content))
            raise DecodeError(exc, resp.content) from exc
