"""Faucet airdrop command for MiniSol CLI."""

from __future__ import annotations

import logging

import typer
from solders.signature import Signature

from minisol.cli.types import CLIState, CommandError, get_state, run_handler
from minisol.solana.cluster import FAUCET_CLUSTERS
from minisol.solana.units import format_sol, sol_to_lamports
from minisol.solana.wallet import resolve_identity

logger = logging.getLogger(__name__)


class AirdropNotConfirmedError(CommandError):
    """Raised when the cluster does not confirm an airdrop signature."""


async def request_airdrop(state: CLIState, key: str, amount: float) -> Signature:
    """Request `amount` SOL from the faucet and report the new balance.

    Confirmation is checked once; an unconfirmed signature is an error and the
    request is not repeated.
    """
    pubkey = resolve_identity(key)
    lamports = sol_to_lamports(amount)
    if state.config.cluster not in FAUCET_CLUSTERS:
        logger.warning(
            "%s does not run a faucet; the airdrop request will most likely be rejected.",
            state.config.cluster.value,
        )

    rpc = state.rpc_client
    signature = await rpc.request_airdrop(pubkey, lamports)
    state.echo(f"Airdrop signature: {signature}")

    if not await rpc.confirm_transaction(signature):
        raise AirdropNotConfirmedError(f"Airdrop {signature} is not confirmed yet.")
    state.echo("Airdrop confirmed", style="minisol.success")

    balance = await rpc.get_balance(pubkey)
    state.echo(f"Balance: {format_sol(balance)}")
    return signature


def register(app: typer.Typer) -> None:
    """Register the `airdrop` command."""

    @app.command("airdrop")
    def airdrop(
        ctx: typer.Context,
        key: str = typer.Option(..., "--key", "-k", help="Keypair file or public key to fund"),  # noqa: B008
        amount: float = typer.Option(..., "--amount", "-a", help="Amount in SOL"),  # noqa: B008
    ) -> None:
        """Request test SOL from the cluster faucet."""
        run_handler(get_state(ctx), request_airdrop, key, amount)


__all__ = ["AirdropNotConfirmedError", "request_airdrop", "register"]
