"""Shared CLI types and command helpers."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import typer
from rich.console import Console
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from minisol.core.config import ConfigurationError, MiniSolConfig
from minisol.solana.rpc import LatestBlockhash, SolanaRPCError
from minisol.solana.units import AmountError
from minisol.solana.wallet import WalletError

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """Raised by command handlers for failures outside the wallet and RPC layers."""


HANDLED_ERRORS: tuple[type[Exception], ...] = (
    WalletError,
    AmountError,
    SolanaRPCError,
    ConfigurationError,
    CommandError,
)


class RPCBackend(Protocol):
    """Subset of the RPC client the command handlers rely on."""

    async def get_balance(self, public_key: Pubkey) -> int:
        ...

    async def request_airdrop(self, public_key: Pubkey, lamports: int) -> Signature:
        ...

    async def confirm_transaction(self, signature: Signature) -> bool:
        ...

    async def get_latest_blockhash(self) -> LatestBlockhash:
        ...

    async def send_and_confirm_transaction(self, transaction: Transaction) -> Signature:
        ...


@dataclass
class CLIState:
    """Everything a command needs for one invocation."""

    config: MiniSolConfig
    rpc_client: RPCBackend
    console: Console
    error_console: Console

    def echo(self, message: str = "", *, style: str | None = None) -> None:
        self.console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)

    def fail(self, message: str) -> None:
        self.error_console.print(
            f"❌ {message}", style="minisol.error", markup=False, highlight=False, soft_wrap=True
        )


def get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise RuntimeError("CLI state was not initialised; commands must run through the main app.")
    return state


def run_handler(state: CLIState, handler: Callable[..., Any], *args: Any) -> Any:
    """Run a sync or async handler, turning domain errors into exit code 1."""
    try:
        result = handler(state, *args)
        if inspect.iscoroutine(result):
            result = asyncio.run(result)
    except HANDLED_ERRORS as exc:
        logger.debug("Command %s failed", getattr(handler, "__name__", handler), exc_info=True)
        state.fail(str(exc))
        raise typer.Exit(code=1) from exc
    return result


__all__ = ["CLIState", "CommandError", "HANDLED_ERRORS", "RPCBackend", "get_state", "run_handler"]
