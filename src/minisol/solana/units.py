"""Conversions between SOL and lamports."""

from __future__ import annotations

import math

LAMPORTS_PER_SOL = 1_000_000_000
MAX_LAMPORTS = 2**64 - 1


class AmountError(ValueError):
    """Raised when a SOL amount cannot be converted to lamports."""


class InvalidAmountError(AmountError):
    """Raised for negative or non-finite amounts."""


class AmountOverflowError(AmountError):
    """Raised when an amount does not fit in an unsigned 64-bit lamport count."""


def sol_to_lamports(amount: float) -> int:
    """Convert `amount` SOL to lamports, truncating toward zero.

    Only nine fractional digits survive the conversion; anything finer is
    dropped by the truncation.
    """
    if not math.isfinite(amount):
        raise InvalidAmountError(f"Amount must be a finite number, got {amount}.")
    if amount < 0:
        raise InvalidAmountError(f"Amount must not be negative, got {amount}.")
    scaled = amount * LAMPORTS_PER_SOL
    if scaled > MAX_LAMPORTS:
        raise AmountOverflowError(f"Amount {amount} SOL exceeds the maximum lamport value.")
    return int(scaled)


def lamports_to_sol(lamports: int) -> float:
    return lamports / LAMPORTS_PER_SOL


def format_sol(lamports: int) -> str:
    """Render a lamport count as SOL with four decimal places."""
    return f"{lamports_to_sol(lamports):.4f} SOL"


__all__ = [
    "LAMPORTS_PER_SOL",
    "MAX_LAMPORTS",
    "AmountError",
    "InvalidAmountError",
    "AmountOverflowError",
    "sol_to_lamports",
    "lamports_to_sol",
    "format_sol",
]
