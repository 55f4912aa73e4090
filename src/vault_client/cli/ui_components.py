"""Rich rendering helpers for CLI output."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from vault_client.core.domain.models import InitResponse, SealStatus


def to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


def build_seal_status_table(status: SealStatus) -> Table:
    table = Table(title="Seal Status")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Seal Type", status.type)
    table.add_row("Initialized", str(status.initialized).lower())
    table.add_row("Sealed", Text(str(status.sealed).lower(), style="red" if status.sealed else "green"))
    table.add_row("Total Shares", str(status.n))
    table.add_row("Threshold", str(status.t))
    table.add_row("Unseal Progress", f"{status.progress}/{status.t}")
    table.add_row("Unseal Nonce", status.nonce or "n/a")
    table.add_row("Version", status.version)
    table.add_row("Build Date", status.build_date)
    table.add_row("Storage Type", status.storage_type)
    return table


def build_init_panel(result: InitResponse) -> Panel:
    """Unseal keys and root token; shown once, the server does not keep them."""

    body = Text()
    for index, key in enumerate(result.keys_base64, start=1):
        body.append(f"Unseal Key {index}: ", style="bold")
        body.append(f"{key}\n")
    body.append("\nInitial Root Token: ", style="bold")
    body.append(result.root_token, style="yellow")
    return Panel(body, title=Text("Vault initialized", style="bold green"), border_style="green")


def print_payload(console: Console, payload: Any) -> None:
    data = to_jsonable(payload)
    if data in ({}, None):
        console.print("[green]Success![/green]")
        return
    console.print_json(data=data)
