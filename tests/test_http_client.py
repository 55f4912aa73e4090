from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from vault_client import VaultSettings
from vault_client.adapters.http_client import HttpxTransport, build_async_client, decode_body
from vault_client.core.commands import RequestInit


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_build_async_client_applies_settings() -> None:
    settings = VaultSettings(_env_file=None, client_timeout=7.5)

    client = build_async_client(settings, extra_headers={"X-Extra": "1"})

    assert client.timeout.read == 7.5
    assert client.headers["Accept"] == "application/json"
    assert client.headers["X-Extra"] == "1"
    assert client.headers["User-Agent"].startswith("vault-client/")
    asyncio.run(client.aclose())


def test_send_forwards_method_params_headers_and_json() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    init = RequestInit(
        method="POST",
        url="http://vault.test/v1/transit/encrypt/orders",
        headers={"X-Vault-Token": "t", "Content-Type": "application/json"},
        params={"stale": "true"},
        json={"plaintext": "aGk="},
    )

    result = asyncio.run(_transport(handler).send(init))

    assert result == {"ok": True}
    assert seen[0].method == "POST"
    assert seen[0].url.params["stale"] == "true"
    assert seen[0].headers["X-Vault-Token"] == "t"
    assert json.loads(seen[0].content) == {"plaintext": "aGk="}


def test_send_without_json_sends_empty_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    result = asyncio.run(_transport(handler).send(RequestInit(method="DELETE", url="http://vault.test/v1/kv/a")))

    assert result == {}
    assert seen[0].content == b""


def test_http_error_status_is_raised_unchanged() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"errors": ["Vault is sealed"]})

    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        asyncio.run(_transport(handler).send(RequestInit(method="GET", url="http://vault.test/v1/kv/a")))

    assert exc_info.value.response.status_code == 503
    assert exc_info.value.response.json() == {"errors": ["Vault is sealed"]}


def test_network_error_is_raised_unchanged() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        asyncio.run(_transport(handler).send(RequestInit(method="GET", url="http://vault.test/v1/sys/init")))


def test_decode_body() -> None:
    request = httpx.Request("GET", "http://vault.test")

    assert decode_body(httpx.Response(204, request=request)) == {}
    assert decode_body(httpx.Response(200, content=b"", request=request)) == {}
    assert decode_body(httpx.Response(200, json={"a": 1}, request=request)) == {"a": 1}


def test_aclose_leaves_injected_client_open() -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    transport = HttpxTransport(client)

    asyncio.run(transport.aclose())

    assert not client.is_closed
