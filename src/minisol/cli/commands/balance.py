"""Balance command for MiniSol CLI."""

from __future__ import annotations

import logging

import typer

from minisol.cli.types import CLIState, get_state, run_handler
from minisol.solana.units import format_sol
from minisol.solana.wallet import DEFAULT_KEYPAIR_PATH, resolve_identity

logger = logging.getLogger(__name__)


async def show_balance(state: CLIState, key: str) -> int:
    """Print the balance of `key` and return it in lamports."""
    pubkey = resolve_identity(key)
    lamports = await state.rpc_client.get_balance(pubkey)
    logger.debug("Balance of %s on %s: %d lamports", pubkey, state.config.cluster.value, lamports)
    state.echo(f"Balance: {format_sol(lamports)}")
    return lamports


def register(app: typer.Typer) -> None:
    """Register the `balance` command."""

    @app.command("balance")
    def balance(
        ctx: typer.Context,
        key: str = typer.Option(str(DEFAULT_KEYPAIR_PATH), "--key", "-k", help="Keypair file or public key"),  # noqa: B008
    ) -> None:
        """Show the SOL balance of an account."""
        run_handler(get_state(ctx), show_balance, key)


__all__ = ["show_balance", "register"]
