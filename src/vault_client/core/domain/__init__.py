"""Wire models for requests and responses exchanged with Vault."""

from vault_client.core.domain.models import (
    AnyPayload,
    InitRequest,
    InitResponse,
    InitStatus,
    Kv2ReadQuery,
    Kv2ReadResponse,
    KvReadResponse,
    MountPathArgs,
    MountRequest,
    PathArgs,
    SealStatus,
    UnsealRequest,
    UnsealResponse,
    UnsealSealedResponse,
    UnsealUnsealedResponse,
    VaultResponse,
)

__all__ = [
    "AnyPayload",
    "InitRequest",
    "InitResponse",
    "InitStatus",
    "Kv2ReadQuery",
    "Kv2ReadResponse",
    "KvReadResponse",
    "MountPathArgs",
    "MountRequest",
    "PathArgs",
    "SealStatus",
    "UnsealRequest",
    "UnsealResponse",
    "UnsealSealedResponse",
    "UnsealUnsealedResponse",
    "VaultResponse",
]
