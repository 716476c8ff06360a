"""MiniSol: a small command-line client for Solana clusters."""

__all__: list[str] = []
