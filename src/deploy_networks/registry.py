"""Main API for deploy-networks library."""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from .constants import NETWORK_CONFIG
from .exceptions import MissingCredentialError
from .parsers import normalize_environment_name
from .providers import Provider, ProviderBuilder, build_signing_provider
from .settings import Settings, load_settings
from .types import EnvironmentName, NetworkConfig, NetworkEntry, ProviderFactory

logger = logging.getLogger(__name__)


class NetworkRegistry:
    """Maps deployment environment names to provider factories."""

    def __init__(
        self,
        settings: Settings,
        provider_builder: ProviderBuilder = build_signing_provider,
    ):
        """
        Initialize the registry.

        Args:
            settings: Values read from the process environment at startup
            provider_builder: Constructs a provider for a NetworkConfig.
                              Substitute a fake in tests.
        """
        self._provider_builder = provider_builder
        self._configs: Dict[EnvironmentName, NetworkConfig] = {}

        for name in EnvironmentName:
            fixed = NETWORK_CONFIG[name.value]
            env_settings = settings.for_environment(name.value)
            self._configs[name] = NetworkConfig(
                name=name,
                network_id=fixed["network_id"],
                shard_id=fixed["shard_id"],
                chain_id=fixed["chain_id"],
                rpc_url=env_settings.url,
                mnemonic=env_settings.mnemonic,
                private_key=env_settings.private_key,
                gas_limit=settings.gas_limit,
                gas_price=settings.gas_price,
            )

    def names(self) -> List[str]:
        """
        Get list of supported environment names.

        Returns:
            Names in declaration order (["local", "testnet", "mainnet"])
        """
        return [name.value for name in self._configs]

    def has_network(self, name: Union[str, EnvironmentName]) -> bool:
        """
        Check if an environment is known.

        Args:
            name: Environment name to check

        Returns:
            True if the registry has the environment, False otherwise
        """
        try:
            normalize_environment_name(name)
        except ValueError:
            return False
        return True

    def config(self, name: Union[str, EnvironmentName]) -> NetworkConfig:
        """
        Get connection parameters for an environment.

        Args:
            name: Environment name ("local", "testnet" or "mainnet")

        Returns:
            NetworkConfig for the environment

        Raises:
            ConfigurationError: If the environment is unknown
        """
        return self._configs[normalize_environment_name(name)]

    def provider_factory(self, name: Union[str, EnvironmentName]) -> ProviderFactory:
        """
        Get the provider factory for an environment.

        The factory builds a new provider on every call.

        Raises:
            ConfigurationError: If the environment is unknown
        """
        config = self.config(name)
        builder = self._provider_builder

        def provider() -> Provider:
            return _construct_provider(config, builder)

        return provider

    def network(self, name: Union[str, EnvironmentName]) -> NetworkEntry:
        """
        Get the entry the deployment tool consumes for an environment.

        Args:
            name: Environment name ("local", "testnet" or "mainnet")

        Returns:
            NetworkEntry with network_id and provider factory

        Raises:
            ConfigurationError: If the environment is unknown
        """
        config = self.config(name)
        return NetworkEntry(
            network_id=config.network_id,
            provider=self.provider_factory(config.name),
        )

    def __getitem__(self, name: Union[str, EnvironmentName]) -> NetworkEntry:
        return self.network(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, (str, EnvironmentName)) and self.has_network(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._configs)

    def as_truffle_config(self) -> Dict[str, Any]:
        """
        Build the networks manifest in the shape Truffle expects.

        Returns:
            {"networks": {name: {"network_id": str, "provider": factory}}}
        """
        networks: Dict[str, Dict[str, Any]] = {}
        for name in self.names():
            entry = self.network(name)
            networks[name] = {
                "network_id": entry.network_id,
                "provider": entry.provider,
            }
        return {"networks": networks}


def _construct_provider(config: NetworkConfig, builder: ProviderBuilder) -> Provider:
    """
    Build a provider and make the environment's key its signer.

    Raises:
        MissingCredentialError: If no private key is configured
        MalformedCredentialError: If the private key is invalid
        ProviderConstructionError: If the URL or network parameters are rejected
    """
    if config.private_key is None or not config.private_key.reveal().strip():
        prefix = NETWORK_CONFIG[config.name.value]["env_prefix"]
        raise MissingCredentialError(
            f"No private key for '{config.name.value}': set {prefix}_PRIVATE_KEY"
        )

    logger.info(
        "Constructing provider for %s (shard %d, chain %d)",
        config.name.value,
        config.shard_id,
        config.chain_id,
    )
    provider = builder(config)
    account = provider.add_by_private_key(config.private_key.reveal())
    provider.set_signer(account)
    return provider


def load_networks(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Union[Path, str]] = None,
    provider_builder: ProviderBuilder = build_signing_provider,
) -> NetworkRegistry:
    """
    Read settings once and build the network registry.

    Args:
        environ: Variables to read from (defaults to os.environ)
        env_file: Optional .env file filling in missing variables
        provider_builder: Constructs a provider for a NetworkConfig

    Returns:
        NetworkRegistry for local, testnet and mainnet
    """
    settings = load_settings(environ=environ, env_file=env_file)
    return NetworkRegistry(settings, provider_builder=provider_builder)
