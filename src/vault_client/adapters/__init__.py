"""Concrete implementations of the core interfaces."""

from vault_client.adapters.http_client import HttpxTransport, build_async_client

__all__ = ["HttpxTransport", "build_async_client"]
