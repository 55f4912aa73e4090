"""Shared fixtures: an in-memory Vault stand-in served through httpx.MockTransport."""

from __future__ import annotations

import base64
import json
from typing import Any, Callable

import httpx
import pytest

from vault_client import Client, VaultSettings
from vault_client.adapters.http_client import HttpxTransport
from vault_client.core.commands import RequestInit

VAULT_URL = "http://vault.test:8200"


class FakeVault:
    """Handles the subset of the Vault API the tests exercise."""

    def __init__(self) -> None:
        self.initialized = False
        self.sealed = True
        self.threshold = 1
        self.shares = 1
        self.keys: list[str] = []
        self.progress = 0
        self.root_token = "hvs.root-token"
        self.kv: dict[str, dict[str, Any]] = {}
        self.mounts: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []

    def seal_status(self) -> dict[str, Any]:
        return {
            "type": "shamir",
            "initialized": self.initialized,
            "sealed": self.sealed,
            "t": self.threshold,
            "n": self.shares,
            "progress": self.progress,
            "nonce": "",
            "version": "1.15.2",
            "build_date": "2023-11-06T11:33:28Z",
            "migration": False,
            "recovery_seal": False,
            "storage_type": "inmem",
            # Not declared by the client; must be tolerated.
            "ha_enabled": False,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1/")
        body = json.loads(request.content) if request.content else {}
        method = request.method

        if path == "sys/seal-status" and method == "GET":
            return httpx.Response(200, json=self.seal_status())
        if path == "sys/init" and method == "GET":
            return httpx.Response(200, json={"initialized": self.initialized})
        if path == "sys/init" and method == "POST":
            return self._init(body)
        if path == "sys/unseal" and method == "POST":
            return self._unseal(body)
        if path == "sys/seal" and method == "POST":
            self.sealed = True
            return httpx.Response(204)

        if request.headers.get("X-Vault-Token") != self.root_token:
            return httpx.Response(403, json={"errors": ["permission denied"]})

        if path == "auth/token/lookup-self" and method == "GET":
            return httpx.Response(200, json={"data": {"policies": ["root"], "display_name": "root"}})

        if path.startswith("sys/mounts/"):
            mount_path = path.removeprefix("sys/mounts/")
            if method == "POST":
                self.mounts[mount_path] = body
                return httpx.Response(204)
            if method == "DELETE":
                self.mounts.pop(mount_path, None)
                return httpx.Response(204)
        if path == "sys/mounts" and method == "GET":
            return httpx.Response(200, json={"data": {f"{name}/": cfg for name, cfg in self.mounts.items()}})

        return self._kv2(method, path, body, request)

    def _init(self, body: dict[str, Any]) -> httpx.Response:
        if self.initialized:
            return httpx.Response(400, json={"errors": ["Vault is already initialized"]})
        self.initialized = True
        self.shares = body["secret_shares"]
        self.threshold = body["secret_threshold"]
        self.keys = [f"{index:064x}" for index in range(1, self.shares + 1)]
        return httpx.Response(
            200,
            json={
                "keys": self.keys,
                "keys_base64": [base64.b64encode(bytes.fromhex(key)).decode() for key in self.keys],
                "root_token": self.root_token,
            },
        )

    def _unseal(self, body: dict[str, Any]) -> httpx.Response:
        if body.get("reset"):
            self.progress = 0
        elif body.get("key") in self.keys:
            self.progress += 1
            if self.progress >= self.threshold:
                self.sealed = False
                self.progress = 0
        common = {"t": self.threshold, "n": self.shares, "progress": self.progress, "version": "1.15.2"}
        if self.sealed:
            return httpx.Response(200, json={"sealed": True, **common})
        return httpx.Response(
            200,
            json={"sealed": False, **common, "cluster_name": "vault-cluster-test", "cluster_id": "c0ffee"},
        )

    def _kv2(self, method: str, path: str, body: dict[str, Any], request: httpx.Request) -> httpx.Response:
        if method == "LIST":
            prefix = path.rstrip("/") + "/"
            keys = sorted(key.removeprefix(prefix) for key in self.kv if key.startswith(prefix))
            if not keys:
                return httpx.Response(404, json={"errors": []})
            return httpx.Response(200, json={"data": {"keys": keys}})
        if method == "POST":
            version = self.kv.get(path, {}).get("version", 0) + 1
            self.kv[path] = {"data": body.get("data"), "version": version}
            return httpx.Response(200, json={"data": self._metadata(version)})
        if method == "GET":
            entry = self.kv.get(path)
            if entry is None:
                return httpx.Response(404, json={"errors": []})
            return httpx.Response(
                200,
                json={
                    "request_id": "8a3c5e0d-6d5f-4e07-a3e6-1b2f4e2f7f10",
                    "lease_id": "",
                    "renewable": False,
                    "lease_duration": 0,
                    "data": {"data": entry["data"], "metadata": self._metadata(entry["version"])},
                    "wrap_info": None,
                    "warnings": None,
                    "auth": None,
                },
            )
        if method == "DELETE":
            self.kv.pop(path, None)
            return httpx.Response(204)
        return httpx.Response(405, json={"errors": [f"unsupported operation {method} {path}"]})

    @staticmethod
    def _metadata(version: int) -> dict[str, Any]:
        return {
            "created_time": "2024-01-01T00:00:00.000000Z",
            "custom_metadata": None,
            "deletion_time": "",
            "destroyed": False,
            "version": version,
        }


class RecordingTransport:
    """Returns a canned payload and records every request it is given."""

    def __init__(self, payload: Any = None) -> None:
        self.payload = {} if payload is None else payload
        self.sent: list[RequestInit] = []

    async def send(self, init: RequestInit) -> Any:
        self.sent.append(init)
        return self.payload

    async def aclose(self) -> None:
        return None


@pytest.fixture(autouse=True)
def _clean_vault_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("VAULT_ADDR", "VAULT_TOKEN", "VAULT_NAMESPACE", "VAULT_CLIENT_TIMEOUT", "VAULT_SKIP_VERIFY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> VaultSettings:
    return VaultSettings(_env_file=None)


@pytest.fixture
def fake_vault() -> FakeVault:
    return FakeVault()


@pytest.fixture
def make_client(fake_vault: FakeVault, settings: VaultSettings) -> Callable[..., Client]:
    def _make(**options: Any) -> Client:
        options.setdefault("endpoint", VAULT_URL)
        transport = HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(fake_vault.handler)))
        return Client(options, transport=transport, settings=settings)

    return _make


@pytest.fixture
def recording() -> RecordingTransport:
    return RecordingTransport()
