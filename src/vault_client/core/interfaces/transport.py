"""Transport contract.

Why a Protocol:
- The command layer only needs "send this request, give me the decoded body";
  any object with `send` and `aclose` qualifies, no base class required.
- Pooling, TLS and retries stay in the implementation, so tests can hand the
  client an in-memory stand-in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from vault_client.core.commands import RequestInit


@runtime_checkable
class Transport(Protocol):
    """Minimal HTTP capability used by commands.

    - `send` issues exactly one request and returns the decoded JSON body.
    - HTTP error statuses and network failures are raised, not returned.
    """

    async def send(self, init: RequestInit) -> Any:
        ...

    async def aclose(self) -> None:
        ...
