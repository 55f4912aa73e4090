"""Entry point for `python -m vault_client`."""

from __future__ import annotations

from vault_client.cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
