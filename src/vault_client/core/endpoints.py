"""Endpoint definitions bound by `Client`.

Each record is data only: method, path template and shapes. Docs:
https://developer.hashicorp.com/vault/api-docs
"""

from __future__ import annotations

from typing import Any

from vault_client.core.commands import CommandDefinition, RequestSchema
from vault_client.core.domain.models import (
    AnyPayload,
    InitRequest,
    InitResponse,
    InitStatus,
    MountPathArgs,
    MountRequest,
    PathArgs,
    SealStatus,
    UnsealRequest,
    UnsealResponse,
)

AnyResponse = dict[str, Any]

# system/seal-status#seal-status
STATUS = CommandDefinition(
    method="GET",
    path="/sys/seal-status",
    schema=RequestSchema(response=SealStatus),
)

# system/init#read-initialization-status
INITIALIZED = CommandDefinition(
    method="GET",
    path="/sys/init",
    schema=RequestSchema(response=InitStatus),
)

# system/init#start-initialization
INIT = CommandDefinition(
    method="POST",
    path="/sys/init",
    schema=RequestSchema(body=InitRequest, response=InitResponse),
)

# system/unseal#submit-unseal-key
UNSEAL = CommandDefinition(
    method="POST",
    path="/sys/unseal",
    schema=RequestSchema(body=UnsealRequest, response=UnsealResponse),
)

# system/seal#seal
SEAL = CommandDefinition(
    method="POST",
    path="/sys/seal",
    schema=RequestSchema(response=AnyResponse),
)

WRITE = CommandDefinition(
    method="POST",
    path="/{{path}}",
    schema=RequestSchema(path=PathArgs, body=AnyPayload, response=AnyResponse),
)

DELETE = CommandDefinition(
    method="DELETE",
    path="/{{path}}",
    schema=RequestSchema(path=PathArgs, response=AnyResponse),
)

# LIST is a Vault-specific verb, equivalent to GET with `?list=true`.
LIST = CommandDefinition(
    method="LIST",
    path="/{{path}}",
    schema=RequestSchema(path=PathArgs, response=AnyResponse),
)

# system/mounts#list-mounted-secrets-engines
MOUNTS = CommandDefinition(
    method="GET",
    path="/sys/mounts",
    schema=RequestSchema(response=AnyResponse),
)

# system/mounts#enable-secrets-engine
MOUNT = CommandDefinition(
    method="POST",
    path="/sys/mounts/{{mount_path}}",
    schema=RequestSchema(path=MountPathArgs, body=MountRequest, response=AnyResponse),
    strict=True,
)

# system/mounts#disable-secrets-engine
UNMOUNT = CommandDefinition(
    method="DELETE",
    path="/sys/mounts/{{mount_path}}",
    schema=RequestSchema(path=MountPathArgs, response=AnyResponse),
    strict=True,
)
