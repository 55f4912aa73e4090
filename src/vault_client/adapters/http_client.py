"""httpx-backed transport.

Why a wrapper:
- `build_async_client` centralizes timeouts, TLS verification and default
  headers so every command behaves the same.
- `HttpxTransport` implements `core.interfaces.Transport`; tests swap the
  underlying client for one built on `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from vault_client import __version__
from vault_client.core.commands import RequestInit
from vault_client.core.config import VaultSettings


def build_async_client(
    settings: VaultSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the client-wide defaults."""

    settings = settings or VaultSettings()
    headers: dict[str, str] = {
        "User-Agent": f"vault-client/{__version__}",
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.client_timeout),
        verify=not settings.skip_verify,
        headers=headers,
        transport=transport,
    )


def decode_body(response: httpx.Response) -> Any:
    """Decode a Vault response body; empty bodies (204) decode to `{}`."""

    if response.status_code == httpx.codes.NO_CONTENT or not response.content:
        return {}
    return response.json()


class HttpxTransport:
    """Sends each `RequestInit` with one `httpx.AsyncClient` request.

    HTTP error statuses raise `httpx.HTTPStatusError` and network failures
    raise `httpx.TransportError`; neither is retried or rewrapped.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, settings: VaultSettings | None = None) -> None:
        self._owns_client = client is None
        self._client = client or build_async_client(settings)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, init: RequestInit) -> Any:
        kwargs: dict[str, Any] = {
            "headers": init.headers,
            "params": init.params or None,
        }
        if init.json is not None:
            kwargs["json"] = init.json
        if init.timeout is not None:
            kwargs["timeout"] = init.timeout

        response = await self._client.request(init.method, init.url, **kwargs)
        if response.is_error:
            logger.debug(
                "Vault responded {} for {} {}: {}",
                response.status_code,
                init.method,
                init.url,
                _vault_errors(response),
            )
        response.raise_for_status()
        return decode_body(response)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _vault_errors(response: httpx.Response) -> list[str]:
    try:
        payload = response.json()
    except ValueError:
        return [response.text] if response.text else []
    if isinstance(payload, dict) and isinstance(payload.get("errors"), list):
        return [str(err) for err in payload["errors"]]
    return []
