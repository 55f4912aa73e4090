"""`vault-client` command line.

Thin layer over `Client`: parses flags, runs one command, renders the
result. Connection flags default to the same environment variables the
library reads.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

import httpx
import typer
from rich.console import Console

from vault_client.cli import doctor
from vault_client.cli.ui_components import build_init_panel, build_seal_status_table, print_payload
from vault_client.client import Client
from vault_client.core.errors import VaultValidationError

app = typer.Typer(no_args_is_help=True, help="Typed client for the HashiCorp Vault HTTP API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    ctx: typer.Context,
    address: Optional[str] = typer.Option(None, "--address", envvar="VAULT_ADDR", help="Vault server address."),
    token: Optional[str] = typer.Option(None, "--token", envvar="VAULT_TOKEN", help="Vault token."),
    namespace: Optional[str] = typer.Option(None, "--namespace", envvar="VAULT_NAMESPACE", help="Vault namespace."),
) -> None:
    ctx.obj = {"endpoint": address, "token": token, "namespace": namespace}


def _run(ctx: typer.Context, call: Callable[[Client], Awaitable[Any]]) -> Any:
    async def _go() -> Any:
        async with Client({k: v for k, v in (ctx.obj or {}).items() if v}) as client:
            return await call(client)

    try:
        return asyncio.run(_go())
    except VaultValidationError as exc:
        _err_console.print(f"[red]Invalid input or response:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    except httpx.HTTPStatusError as exc:
        _err_console.print(f"[red]Vault returned {exc.response.status_code}:[/red] {exc.response.text.strip()}")
        raise typer.Exit(code=1) from exc
    except httpx.TransportError as exc:
        _err_console.print(f"[red]Could not reach Vault:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def parse_pairs(pairs: list[str]) -> dict[str, str]:
    """Parse `key=value` arguments."""

    data: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise typer.BadParameter(f"expected key=value, got {pair!r}")
        key, value = pair.split("=", 1)
        if not key:
            raise typer.BadParameter(f"empty key in {pair!r}")
        data[key] = value
    return data


@app.command()
def status(ctx: typer.Context) -> None:
    """Show the seal status."""

    result = _run(ctx, lambda client: client.status())
    _console.print(build_seal_status_table(result))


@app.command()
def init(
    ctx: typer.Context,
    key_shares: int = typer.Option(5, "--key-shares", min=1, help="Number of unseal key shares."),
    key_threshold: int = typer.Option(3, "--key-threshold", min=1, help="Shares required to unseal."),
) -> None:
    """Initialize a new Vault server."""

    if key_threshold > key_shares:
        raise typer.BadParameter("--key-threshold cannot exceed --key-shares")
    result = _run(ctx, lambda client: client.init(secret_shares=key_shares, secret_threshold=key_threshold))
    _console.print(build_init_panel(result))


@app.command()
def unseal(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="One unseal key share."),
    reset: bool = typer.Option(False, "--reset", help="Discard previously submitted shares."),
) -> None:
    """Submit one unseal key share."""

    result = _run(ctx, lambda client: client.unseal(key=key, reset=reset))
    if result.sealed:
        _console.print(f"[yellow]Sealed[/yellow]: progress {result.progress}/{result.t}")
    else:
        _console.print(f"[green]Unsealed[/green]: cluster {result.cluster_name} ({result.cluster_id})")


@app.command()
def seal(ctx: typer.Context) -> None:
    """Seal the Vault server."""

    _run(ctx, lambda client: client.seal())
    _console.print("[green]Vault sealed.[/green]")


@app.command()
def read(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Path to read, e.g. secret/data/app."),
    engine: Optional[str] = typer.Option(None, "--engine", help="Secrets engine (kv, kv2) for typed validation."),
) -> None:
    """Read a secret or configuration path."""

    result = _run(ctx, lambda client: client.read(path=path, engine=engine))
    print_payload(_console, result)


@app.command()
def write(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Path to write."),
    pairs: list[str] = typer.Argument(None, help="Data as key=value pairs."),
    kv2: bool = typer.Option(False, "--kv2", help="Wrap the pairs under `data` as KV v2 expects."),
) -> None:
    """Write data to a path."""

    data: dict[str, Any] = parse_pairs(pairs or [])
    if kv2:
        data = {"data": data}
    result = _run(ctx, lambda client: client.write(data, path=path))
    print_payload(_console, result)


@app.command()
def delete(ctx: typer.Context, path: str = typer.Argument(..., help="Path to delete.")) -> None:
    """Delete a path."""

    result = _run(ctx, lambda client: client.delete(path=path))
    print_payload(_console, result)


@app.command(name="list")
def list_(ctx: typer.Context, path: str = typer.Argument(..., help="Path to list.")) -> None:
    """List keys under a path."""

    result = _run(ctx, lambda client: client.list(path=path))
    keys = (result.get("data") or {}).get("keys") or []
    for key in keys:
        _console.print(key)


@app.command()
def mount(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Mount path."),
    engine_type: str = typer.Option(..., "--type", help="Secrets engine type, e.g. kv."),
    description: Optional[str] = typer.Option(None, "--description"),
    version: Optional[str] = typer.Option(None, "--version", help="Engine version option (e.g. 2 for KV v2)."),
) -> None:
    """Enable a secrets engine at a path."""

    args: dict[str, Any] = {"mount_path": path, "type": engine_type, "description": description}
    if version:
        args["options"] = {"version": version}
    _run(ctx, lambda client: client.mount(args))
    _console.print(f"[green]Enabled the {engine_type} secrets engine at:[/green] {path}/")


def run() -> None:
    app()
