"""Wire models for the Vault HTTP API (Pydantic v2).

Request models describe the path/query/body arguments a command accepts.
Response models check every declared field and keep surplus fields, so a
newer server adding keys does not break older clients.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Discriminator, Field, Tag
from pydantic.config import ConfigDict


class VaultResponse(BaseModel):
    """Base for response payloads: declared fields validated, extras kept."""

    model_config = ConfigDict(extra="allow")


class AnyPayload(BaseModel):
    """Arbitrary keyed payload (generic write bodies)."""

    model_config = ConfigDict(extra="allow")


class PathArgs(BaseModel):
    path: str = Field(
        ...,
        min_length=1,
        description="Logical path, e.g. `secret/data/app`; slashes are kept as separators.",
    )


class MountPathArgs(BaseModel):
    mount_path: str = Field(
        ...,
        min_length=1,
        description="Path the secrets engine is (or will be) mounted at.",
    )


# sys/seal-status


class SealStatus(VaultResponse):
    type: str
    initialized: bool
    sealed: bool
    t: int
    n: int
    progress: int
    nonce: str
    version: str
    build_date: str
    migration: bool
    recovery_seal: bool
    storage_type: str


# sys/init


class InitStatus(VaultResponse):
    initialized: bool


class InitRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pgp_keys: list[str] | None = Field(
        default=None,
        description="PGP public keys used to encrypt the generated unseal keys.",
    )
    root_token_pgp_key: str | None = Field(
        default="",
        description="PGP public key used to encrypt the initial root token.",
    )
    secret_shares: int = Field(..., description="Number of key shares to split the root key into.")
    secret_threshold: int = Field(..., description="Number of shares required to reconstruct the root key.")
    stored_shares: int | None = Field(
        default=None,
        description="Shares to store within the HSM/auto-unseal device.",
    )
    recovery_shares: int | None = Field(default=0, description="Recovery key shares (auto-unseal only).")
    recovery_threshold: int | None = Field(default=0, description="Recovery shares required (auto-unseal only).")
    recovery_pgp_keys: list[str] | None = Field(
        default=None,
        description="PGP public keys used to encrypt the recovery keys.",
    )


class InitResponse(VaultResponse):
    keys: list[str]
    keys_base64: list[str]
    root_token: str


# sys/unseal


class UnsealRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    key: str = Field(..., min_length=1, description="A single unseal key share.")
    reset: bool | None = Field(default=False, description="Discard previously submitted shares.")
    migrate: bool | None = Field(default=False, description="Use the key for seal migration.")


class UnsealSealedResponse(VaultResponse):
    sealed: Literal[True]
    t: int
    n: int
    progress: int
    version: str


class UnsealUnsealedResponse(VaultResponse):
    sealed: Literal[False]
    t: int
    n: int
    progress: int
    version: str
    cluster_name: str
    cluster_id: str


def _seal_state(value: Any) -> str | None:
    sealed = value.get("sealed") if isinstance(value, dict) else getattr(value, "sealed", None)
    if sealed is True:
        return "sealed"
    if sealed is False:
        return "unsealed"
    return None


UnsealResponse = Annotated[
    Union[
        Annotated[UnsealSealedResponse, Tag("sealed")],
        Annotated[UnsealUnsealedResponse, Tag("unsealed")],
    ],
    Discriminator(_seal_state),
]


# sys/mounts


class MountConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    default_lease_ttl: str | None = None
    max_lease_ttl: str | None = None
    force_no_cache: bool | None = None
    audit_non_hmac_request_keys: list[str] | None = None
    audit_non_hmac_response_keys: list[str] | None = None
    listing_visibility: Literal["unauth", "hidden"] | None = None
    passthrough_request_headers: list[str] | None = None
    allowed_response_headers: list[str] | None = None


class MountRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: str = Field(..., min_length=1, description="Secrets engine type, e.g. `kv`, `transit`.")
    description: str | None = None
    config: MountConfig | None = None
    options: dict[str, Any] | None = Field(
        default=None,
        description="Engine-specific options, e.g. `{'version': '2'}` for KV v2.",
    )
    local: bool | None = None
    seal_wrap: bool | None = None
    external_entropy_access: bool | None = None
    plugin_version: str | None = None


# Secrets engines (read)


class KvReadResponse(VaultResponse):
    """KV v1 read: the secret's key/value pairs sit directly under `data`."""

    request_id: str | None = None
    lease_id: str | None = None
    renewable: bool | None = None
    lease_duration: int | None = None
    data: dict[str, Any]


class Kv2Metadata(VaultResponse):
    created_time: str
    deletion_time: str
    destroyed: bool
    version: int
    custom_metadata: dict[str, Any] | None = None


class Kv2SecretData(VaultResponse):
    data: dict[str, Any] | None
    metadata: Kv2Metadata


class Kv2ReadResponse(VaultResponse):
    """KV v2 read: key/value pairs under `data.data`, version info under `data.metadata`."""

    request_id: str | None = None
    lease_id: str | None = None
    renewable: bool | None = None
    lease_duration: int | None = None
    data: Kv2SecretData


class Kv2ReadQuery(BaseModel):
    version: int | None = Field(
        default=None,
        ge=0,
        description="Version to read; latest when omitted.",
    )
