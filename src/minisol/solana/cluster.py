"""Known Solana clusters and their public RPC endpoints."""

from __future__ import annotations

from enum import Enum


class Cluster(str, Enum):
    """Clusters selectable from the command line."""

    DEVNET = "devnet"
    LOCALNET = "localnet"
    MAINNET = "mainnet"

    @property
    def url(self) -> str:
        return CLUSTER_URLS[self]


CLUSTER_URLS: dict[Cluster, str] = {
    Cluster.DEVNET: "https://api.devnet.solana.com",
    Cluster.LOCALNET: "http://localhost:8899",
    Cluster.MAINNET: "https://api.mainnet-beta.solana.com",
}

FAUCET_CLUSTERS = frozenset({Cluster.DEVNET, Cluster.LOCALNET})


def cluster_url(cluster: Cluster) -> str:
    """Return the RPC endpoint for `cluster`."""
    return CLUSTER_URLS[cluster]


__all__ = ["Cluster", "CLUSTER_URLS", "FAUCET_CLUSTERS", "cluster_url"]
