"""Doctor command for environment diagnostics.

What it checks:
- The resolved address, token, namespace and timeout, from the root flags
  or the `VAULT_*` environment.
- That `sys/seal-status` answers and, when a token is set, that it can
  look itself up.
"""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from vault_client.client import Client
from vault_client.core.config import VaultSettings
from vault_client.core.errors import VaultValidationError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_status(client: Client) -> tuple[bool, str]:
    try:
        status = await client.status()
    except (httpx.HTTPError, VaultValidationError) as exc:
        return False, str(exc)
    state = "sealed" if status.sealed else "unsealed"
    return True, f"Vault {status.version}, {state}"


async def _check_token(client: Client) -> tuple[bool, str]:
    try:
        result = await client.read(path="auth/token/lookup-self")
    except (httpx.HTTPError, VaultValidationError) as exc:
        return False, str(exc)
    policies = (result.get("data") or {}).get("policies") or []
    return True, f"policies: {', '.join(policies) or 'none'}"


async def _diagnose(client: Client) -> list[tuple[str, bool, str]]:
    async with client:
        rows = [("Connectivity", *await _check_status(client))]
        if client.token:
            rows.append(("Token lookup", *await _check_token(client)))
    return rows


@app.command()
def run(ctx: typer.Context) -> None:
    """Show the resolved configuration and check the server is reachable.

    Honours the root `--address`, `--token` and `--namespace` flags, falling
    back to the `VAULT_*` environment like every other command.
    """

    settings = VaultSettings()
    client = Client({k: v for k, v in (ctx.obj or {}).items() if v}, settings=settings)

    table = Table(title="vault-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Address", "OK", client.endpoint)
    table.add_row("API version", "OK", client.api_version)
    if client.token:
        table.add_row("Token", "OK", "set")
    else:
        table.add_row("Token", "OPTIONAL", "No token -> only unauthenticated sys endpoints work")
    table.add_row("Namespace", "OK" if client.namespace else "OPTIONAL", client.namespace or "root")
    table.add_row("Timeout", "OK", f"{settings.client_timeout:g}s")
    if settings.skip_verify:
        table.add_row("TLS verify", "WARN", "VAULT_SKIP_VERIFY is set")

    # Connectivity (best-effort)
    for check, ok, detail in asyncio.run(_diagnose(client)):
        table.add_row(check, "OK" if ok else "FAIL", detail)

    _console.print(table)
