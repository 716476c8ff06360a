"""Solana-focused utilities for MiniSol."""

from .cluster import Cluster, cluster_url
from .rpc import SolanaRPCClient, SolanaRPCError
from .units import AmountError, format_sol, sol_to_lamports
from .wallet import WalletError, read_keypair_file, resolve_identity, write_keypair_file

__all__ = [
    "Cluster",
    "cluster_url",
    "SolanaRPCClient",
    "SolanaRPCError",
    "AmountError",
    "format_sol",
    "sol_to_lamports",
    "WalletError",
    "read_keypair_file",
    "resolve_identity",
    "write_keypair_file",
]
