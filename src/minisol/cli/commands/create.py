"""Keypair generation command for MiniSol CLI."""

from __future__ import annotations

from pathlib import Path

import typer
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from minisol.cli.types import CLIState, get_state, run_handler
from minisol.solana.wallet import DEFAULT_KEYPAIR_PATH, write_keypair_file


def create_keypair(state: CLIState, outfile: Path) -> Pubkey:
    """Generate a keypair, store it at `outfile` and report its public key."""
    keypair = Keypair()
    path = write_keypair_file(keypair, outfile)
    state.echo(f"Wrote new keypair to {path}", style="minisol.success")
    state.echo(f"Pubkey: {keypair.pubkey()}")
    return keypair.pubkey()


def register(app: typer.Typer) -> None:
    """Register the `create` command."""

    @app.command("create")
    def create(
        ctx: typer.Context,
        outfile: Path = typer.Option(DEFAULT_KEYPAIR_PATH, "--outfile", "-o", help="Where to write the keypair"),  # noqa: B008
    ) -> None:
        """Generate a new keypair file (overwrites an existing file)."""
        run_handler(get_state(ctx), create_keypair, outfile)


__all__ = ["create_keypair", "register"]
