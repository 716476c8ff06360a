"""Builtin CLI command registration."""

from __future__ import annotations

import typer

from minisol.cli.commands import address, airdrop, balance, create, send


def register_builtin_commands(app: typer.Typer) -> None:
    """Attach all builtin commands to the Typer app."""

    create.register(app)
    address.register(app)
    balance.register(app)
    airdrop.register(app)
    send.register(app)


__all__ = ["register_builtin_commands"]
