"""Typed asynchronous client for the HashiCorp Vault HTTP API."""

__version__ = "0.1.0"

from vault_client.client import Client
from vault_client.core.commands import (
    Command,
    CommandDefinition,
    RequestInit,
    RequestSchema,
    generate_command,
    generate_command_request_init,
)
from vault_client.core.config import ClientOptions, RequestOptions, VaultSettings
from vault_client.core.engines import EngineName
from vault_client.core.errors import (
    CommandValidationError,
    PathTemplateError,
    ResponseValidationError,
    VaultError,
    VaultValidationError,
)

__all__ = [
    "Client",
    "ClientOptions",
    "Command",
    "CommandDefinition",
    "CommandValidationError",
    "EngineName",
    "PathTemplateError",
    "RequestInit",
    "RequestOptions",
    "RequestSchema",
    "ResponseValidationError",
    "VaultError",
    "VaultSettings",
    "VaultValidationError",
    "generate_command",
    "generate_command_request_init",
]
