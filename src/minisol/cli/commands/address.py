"""Address lookup command for MiniSol CLI."""

from __future__ import annotations

import typer
from solders.pubkey import Pubkey

from minisol.cli.types import CLIState, get_state, run_handler
from minisol.solana.wallet import DEFAULT_KEYPAIR_PATH, resolve_identity


def show_address(state: CLIState, key: str) -> Pubkey:
    pubkey = resolve_identity(key)
    state.echo(str(pubkey))
    return pubkey


def register(app: typer.Typer) -> None:
    """Register the `address` command."""

    @app.command("address")
    def address(
        ctx: typer.Context,
        key: str = typer.Option(str(DEFAULT_KEYPAIR_PATH), "--key", "-k", help="Keypair file or public key"),  # noqa: B008
    ) -> None:
        """Print the public key of a keypair file or address."""
        run_handler(get_state(ctx), show_address, key)


__all__ = ["show_address", "register"]
