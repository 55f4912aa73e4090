"""Contracts the core depends on; concrete implementations live in `adapters`."""

from vault_client.core.interfaces.transport import Transport

__all__ = ["Transport"]
