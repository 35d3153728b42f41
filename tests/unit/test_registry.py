"""Unit tests for NetworkRegistry with a fake provider builder."""

import pytest
from eth_account import Account

from deploy_networks import load_networks
from deploy_networks.exceptions import (
    ConfigurationError,
    MalformedCredentialError,
    MissingCredentialError,
)
from deploy_networks.registry import NetworkRegistry
from deploy_networks.settings import load_settings
from deploy_networks.types import EnvironmentName


@pytest.fixture
def registry(sample_environ, recording_builder) -> NetworkRegistry:
    return NetworkRegistry(
        load_settings(environ=sample_environ), provider_builder=recording_builder
    )


class TestLookup:
    """Test looking up environments by name."""

    @pytest.mark.parametrize("name", ["local", "testnet", "mainnet"])
    def test_known_names_return_factory(self, registry, name):
        """Test that every known environment yields a callable factory."""
        entry = registry.network(name)

        assert entry is not None
        assert entry.provider is not None
        assert callable(entry.provider)

    def test_unknown_name_raises(self, registry):
        """Test that unknown environments raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            registry.network("development")

        with pytest.raises(ConfigurationError):
            registry.provider_factory("rinkeby")

    def test_getitem_and_contains(self, registry):
        """Test mapping-style access."""
        assert registry["mainnet"].network_id == "1"
        assert "testnet" in registry
        assert "staging" not in registry
        assert 42 not in registry

    def test_accepts_enum_members(self, registry):
        assert registry.network(EnvironmentName.LOCAL).network_id == "2"

    def test_names_in_declaration_order(self, registry):
        assert registry.names() == ["local", "testnet", "mainnet"]
        assert list(registry) == ["local", "testnet", "mainnet"]
        assert len(registry) == 3

    def test_has_network(self, registry):
        assert registry.has_network("local")
        assert registry.has_network(" LOCAL ")
        assert not registry.has_network("devnet")


class TestFixedIdentifiers:
    """Test that ids never depend on the environment variables."""

    @pytest.mark.parametrize(
        "environ",
        [
            {},
            {"MAINNET_URL": "http://localhost:9500", "LOCAL_URL": "https://api.s0.t.hmny.io"},
            {"MAINNET_PRIVATE_KEY": "0x" + "22" * 32, "GAS_LIMIT": "1"},
        ],
    )
    def test_network_ids(self, environ, recording_builder):
        registry = NetworkRegistry(
            load_settings(environ=environ), provider_builder=recording_builder
        )

        assert registry.network("mainnet").network_id == "1"
        assert registry.network("local").network_id == "2"
        assert registry.network("testnet").network_id == "2"

    def test_shard_and_chain_ids(self, registry):
        assert (registry.config("local").shard_id, registry.config("local").chain_id) == (0, 2)
        assert (registry.config("testnet").shard_id, registry.config("testnet").chain_id) == (0, 2)
        assert (registry.config("mainnet").shard_id, registry.config("mainnet").chain_id) == (0, 1)

    def test_config_carries_environment_values(self, registry):
        config = registry.config("local")

        assert config.rpc_url == "http://localhost:9500"
        assert config.gas_limit == "6721900"
        assert config.gas_price == "1000000000"
        assert config.mnemonic is not None


class TestProviderFactory:
    """Test invoking provider factories."""

    def test_local_factory_binds_signer(self, registry, test_address, test_private_key):
        """Test that the local factory builds a provider with the key's signer."""
        provider = registry.network("local").provider()

        assert provider.shard_id == 0
        assert provider.chain_id == 2
        assert provider.rpc_url == "http://localhost:9500"
        assert provider.signer == test_address
        assert provider.added_keys == [test_private_key]

    def test_testnet_factory_uses_testnet_key(self, registry, sample_environ):
        provider = registry.network("testnet").provider()

        expected = Account.from_key(sample_environ["TESTNET_PRIVATE_KEY"]).address
        assert provider.signer == expected

    def test_mnemonic_is_not_used_for_signing(self, registry, test_private_key):
        """Test that only the private key reaches the provider."""
        provider = registry.network("local").provider()

        assert provider.added_keys == [test_private_key]

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_key_raises_before_building(self, sample_environ, recording_builder, value):
        """Test that a missing key fails before any provider is built."""
        if value is None:
            del sample_environ["MAINNET_PRIVATE_KEY"]
        else:
            sample_environ["MAINNET_PRIVATE_KEY"] = value
        registry = NetworkRegistry(
            load_settings(environ=sample_environ), provider_builder=recording_builder
        )

        factory = registry.network("mainnet").provider

        with pytest.raises(MissingCredentialError, match="MAINNET_PRIVATE_KEY"):
            factory()
        assert recording_builder.built == []

    def test_successive_calls_return_distinct_providers(self, registry, recording_builder):
        """Test that factories do not cache providers."""
        factory = registry.network("local").provider

        first = factory()
        second = factory()

        assert first is not second
        assert (first.rpc_url, first.shard_id, first.chain_id, first.signer) == (
            second.rpc_url,
            second.shard_id,
            second.chain_id,
            second.signer,
        )
        assert len(recording_builder.built) == 2
        assert recording_builder.built[0] == recording_builder.built[1]

    def test_builder_errors_propagate(self, sample_environ):
        """Test that errors from the provider surface unchanged."""

        def rejecting_builder(config):
            raise MalformedCredentialError("bad key")

        registry = load_networks(environ=sample_environ, provider_builder=rejecting_builder)

        with pytest.raises(MalformedCredentialError):
            registry.network("local").provider()


class TestTruffleConfig:
    """Test the Truffle-shaped manifest."""

    def test_manifest_shape(self, registry):
        config = registry.as_truffle_config()

        assert set(config) == {"networks"}
        assert set(config["networks"]) == {"local", "testnet", "mainnet"}
        for name, network in config["networks"].items():
            assert set(network) == {"network_id", "provider"}
            assert callable(network["provider"])

    def test_manifest_network_ids(self, registry):
        networks = registry.as_truffle_config()["networks"]

        assert networks["local"]["network_id"] == "2"
        assert networks["testnet"]["network_id"] == "2"
        assert networks["mainnet"]["network_id"] == "1"

    def test_manifest_provider_builds(self, registry, test_address):
        provider = registry.as_truffle_config()["networks"]["mainnet"]["provider"]()

        assert provider.chain_id == 1
        assert provider.signer == test_address
