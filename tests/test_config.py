from __future__ import annotations

import pytest
from pydantic import ValidationError

from vault_client import ClientOptions, RequestOptions, VaultSettings


def test_settings_read_vault_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VAULT_ADDR", "https://vault.example:8200")
    monkeypatch.setenv("VAULT_TOKEN", "hvs.abc")
    monkeypatch.setenv("VAULT_NAMESPACE", "admin/team")
    monkeypatch.setenv("VAULT_CLIENT_TIMEOUT", "12.5")
    monkeypatch.setenv("VAULT_SKIP_VERIFY", "true")

    settings = VaultSettings(_env_file=None)

    assert settings.addr == "https://vault.example:8200"
    assert settings.token == "hvs.abc"
    assert settings.namespace == "admin/team"
    assert settings.client_timeout == 12.5
    assert settings.skip_verify is True


def test_settings_defaults() -> None:
    settings = VaultSettings(_env_file=None)

    assert settings.addr is None
    assert settings.token is None
    assert settings.client_timeout == 60.0
    assert settings.skip_verify is False


def test_settings_read_dotenv(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("VAULT_ADDR=http://10.0.0.5:8200\nVAULT_TOKEN=hvs.dotenv\n", encoding="utf-8")

    settings = VaultSettings(_env_file=env_file)

    assert settings.addr == "http://10.0.0.5:8200"
    assert settings.token == "hvs.dotenv"


def test_settings_reject_non_positive_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VAULT_CLIENT_TIMEOUT", "0")

    with pytest.raises(ValidationError):
        VaultSettings(_env_file=None)


def test_request_options_overrides_use_wire_names() -> None:
    options = RequestOptions(json={"a": 1}, headers={"X-Trace": "1"})

    assert options.as_overrides() == {"json": {"a": 1}, "headers": {"X-Trace": "1"}}


def test_client_options_accept_nested_request_defaults() -> None:
    options = ClientOptions.model_validate({"endpoint": "http://v:8200", "request": {"timeout": 3}})

    assert options.request is not None
    assert options.request.timeout == 3


def test_client_options_forbid_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        ClientOptions.model_validate({"adress": "http://v:8200"})
