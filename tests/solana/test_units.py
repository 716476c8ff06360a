from __future__ import annotations

import math

import pytest

from minisol.solana.units import (
    LAMPORTS_PER_SOL,
    AmountOverflowError,
    InvalidAmountError,
    format_sol,
    lamports_to_sol,
    sol_to_lamports,
)


def test_whole_and_fractional_amounts() -> None:
    assert sol_to_lamports(1.0) == LAMPORTS_PER_SOL
    assert sol_to_lamports(0.5) == 500_000_000
    assert sol_to_lamports(0.0) == 0
    assert sol_to_lamports(2.5) == 2_500_000_000


def test_sub_lamport_digits_are_truncated() -> None:
    assert sol_to_lamports(0.0000000019) == 1
    assert sol_to_lamports(0.0000000001) == 0


@pytest.mark.parametrize("amount", [0.1, 0.25, 1.5, 3.123456789, 42.0001])
def test_round_trip_within_display_precision(amount: float) -> None:
    lamports = sol_to_lamports(amount)

    assert f"{lamports_to_sol(lamports):.4f}" == f"{amount:.4f}"


@pytest.mark.parametrize("amount", [-0.5, -1e-12, math.nan, math.inf, -math.inf])
def test_rejects_negative_and_non_finite(amount: float) -> None:
    with pytest.raises(InvalidAmountError):
        sol_to_lamports(amount)


def test_rejects_amounts_beyond_u64() -> None:
    with pytest.raises(AmountOverflowError):
        sol_to_lamports(2e10)

    assert sol_to_lamports(18_000_000_000.0) == 18_000_000_000 * LAMPORTS_PER_SOL


def test_format_sol_uses_four_decimals() -> None:
    assert format_sol(2_500_000_000) == "2.5000 SOL"
    assert format_sol(0) == "0.0000 SOL"
    assert format_sol(123_456_789) == "0.1235 SOL"
