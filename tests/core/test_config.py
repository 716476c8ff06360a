import pytest
from pydantic import ValidationError

from minisol.core.config import ConfigurationError, MiniSolConfig
from minisol.solana.cluster import Cluster
from minisol.solana.rpc import SolanaRPCClient


def test_defaults_target_devnet() -> None:
    config = MiniSolConfig()

    assert config.cluster is Cluster.DEVNET
    assert config.rpc_url == "https://api.devnet.solana.com"
    assert config.timeout == 60.0
    assert config.commitment == "confirmed"


def test_for_cluster_uses_cluster_endpoint() -> None:
    config = MiniSolConfig.for_cluster(Cluster.LOCALNET)

    assert config.rpc_url == "http://localhost:8899"


def test_config_is_immutable() -> None:
    config = MiniSolConfig.for_cluster(Cluster.MAINNET)

    with pytest.raises(ValidationError):
        config.rpc_url = "http://elsewhere"  # type: ignore[misc]


@pytest.mark.parametrize("overrides", [{"timeout": 0}, {"commitment": "eventually"}, {"confirm_poll_interval": -1}])
def test_invalid_overrides_raise_configuration_error(overrides: dict[str, object]) -> None:
    with pytest.raises(ConfigurationError):
        MiniSolConfig.for_cluster(Cluster.DEVNET, **overrides)


def test_rpc_client_carries_settings() -> None:
    config = MiniSolConfig.for_cluster(Cluster.LOCALNET, commitment="finalized", confirm_timeout=5.0)

    client = config.rpc_client()

    assert isinstance(client, SolanaRPCClient)
    assert client.endpoint == "http://localhost:8899"
    assert client.timeout == 60.0
    assert client.commitment == "finalized"
    assert client.confirm_timeout == 5.0
