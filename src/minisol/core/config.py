"""Per-invocation runtime settings for MiniSol."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from minisol.solana.cluster import Cluster, cluster_url
from minisol.solana.rpc import DEFAULT_TIMEOUT, Commitment, SolanaRPCClient


class ConfigurationError(RuntimeError):
    """Raised when runtime settings are invalid."""


class MiniSolConfig(BaseModel):
    """Settings fixed for the lifetime of one CLI invocation."""

    model_config = ConfigDict(frozen=True)

    cluster: Cluster = Cluster.DEVNET
    rpc_url: str = cluster_url(Cluster.DEVNET)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    commitment: Commitment = "confirmed"
    confirm_poll_interval: float = Field(default=0.5, ge=0)
    confirm_timeout: float = Field(default=60.0, gt=0)

    @classmethod
    def for_cluster(cls, cluster: Cluster, **overrides: object) -> MiniSolConfig:
        """Build settings for `cluster`, pointing at its public endpoint."""
        try:
            return cls(cluster=cluster, rpc_url=cluster_url(cluster), **overrides)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid settings: {exc}") from exc

    def rpc_client(self) -> SolanaRPCClient:
        return SolanaRPCClient(
            endpoint=self.rpc_url,
            timeout=self.timeout,
            commitment=self.commitment,
            poll_interval=self.confirm_poll_interval,
            confirm_timeout=self.confirm_timeout,
        )


__all__ = ["ConfigurationError", "MiniSolConfig"]
