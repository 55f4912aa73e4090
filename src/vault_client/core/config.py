"""Client configuration.

Resolution order for every connection field:
- explicit constructor option,
- environment (`VAULT_ADDR`, `VAULT_TOKEN`, `VAULT_NAMESPACE`) read through
  pydantic-settings, optionally from a local `.env`,
- hardcoded defaults below.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT = "http://127.0.0.1:8200"
DEFAULT_API_VERSION = "v1"
DEFAULT_PATH_PREFIX = ""


class VaultSettings(BaseSettings):
    """Environment-derived defaults, named after the variables the Vault CLI reads."""

    model_config = SettingsConfigDict(
        env_prefix="VAULT_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    addr: str | None = Field(
        default=None,
        description="Vault server address (VAULT_ADDR).",
    )
    token: str | None = Field(
        default=None,
        description="Authentication token sent as X-Vault-Token (VAULT_TOKEN).",
    )
    namespace: str | None = Field(
        default=None,
        description="Enterprise namespace sent as X-Vault-Namespace (VAULT_NAMESPACE).",
    )
    client_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Per-request timeout in seconds (VAULT_CLIENT_TIMEOUT).",
    )
    skip_verify: bool = Field(
        default=False,
        description="Disable TLS certificate verification (VAULT_SKIP_VERIFY).",
    )


class RequestOptions(BaseModel):
    """Overrides applied to the outgoing request.

    Set at client level as defaults and per call; both are merged into the
    request built by a command (mappings merged key by key, scalars replaced).
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    method: str | None = None
    headers: dict[str, str] | None = None
    params: dict[str, Any] | None = None
    json_body: Any = Field(default=None, alias="json")
    timeout: float | None = Field(default=None, gt=0)

    def as_overrides(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ClientOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    endpoint: str | None = None
    api_version: str | None = None
    path_prefix: str | None = None
    token: str | None = None
    namespace: str | None = None
    request: RequestOptions | None = None
