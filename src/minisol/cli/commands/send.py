"""SOL transfer command for MiniSol CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from minisol.cli.types import CLIState, get_state, run_handler
from minisol.solana.units import sol_to_lamports
from minisol.solana.wallet import DEFAULT_KEYPAIR_PATH, read_keypair_file, resolve_identity

logger = logging.getLogger(__name__)


async def send_sol(state: CLIState, sender_path: Path, recipient: str, amount: float) -> Signature:
    """Transfer `amount` SOL from the keypair at `sender_path` to `recipient`.

    The blockhash is fetched right before signing and the transaction is
    submitted exactly once.
    """
    sender = read_keypair_file(sender_path)
    logger.debug("Transfer: key loaded (%s)", sender.pubkey())
    destination = resolve_identity(recipient)
    logger.debug("Transfer: recipient resolved (%s)", destination)
    lamports = sol_to_lamports(amount)

    instruction = transfer(
        TransferParams(
            from_pubkey=sender.pubkey(),
            to_pubkey=destination,
            lamports=lamports,
        )
    )
    latest = await state.rpc_client.get_latest_blockhash()
    transaction = Transaction.new_signed_with_payer(
        instructions=[instruction],
        payer=sender.pubkey(),
        signing_keypairs=[sender],
        recent_blockhash=latest.blockhash,
    )
    logger.debug("Transfer: built and signed with blockhash %s", latest.blockhash)

    signature = await state.rpc_client.send_and_confirm_transaction(transaction)
    logger.debug("Transfer: confirmed %s", signature)
    state.echo(f"Transfer complete: {signature}", style="minisol.success")
    state.echo(f"Sent {amount} SOL ({lamports} lamports) to {destination}")
    return signature


def register(app: typer.Typer) -> None:
    """Register the `send` command."""

    @app.command("send")
    def send(
        ctx: typer.Context,
        sender: Path = typer.Option(DEFAULT_KEYPAIR_PATH, "--from", "-f", help="Sender keypair file"),  # noqa: B008
        recipient: str = typer.Option(..., "--to", "-t", help="Recipient keypair file or public key"),  # noqa: B008
        amount: float = typer.Option(..., "--amount", "-a", help="Amount in SOL"),  # noqa: B008
    ) -> None:
        """Transfer SOL to another account."""
        run_handler(get_state(ctx), send_sol, sender, recipient, amount)


__all__ = ["send_sol", "register"]
