"""
deploy-networks: Python library for resolving contract deployment networks
"""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    ConfigurationError,
    CredentialError,
    EnvFileNotFoundError,
    MalformedCredentialError,
    MissingCredentialError,
    NetworkConfigError,
    ProviderConstructionError,
)
from .providers import Provider, SigningProvider, build_signing_provider
from .registry import NetworkRegistry, load_networks
from .settings import Settings, load_settings
from .types import EnvironmentName, NetworkConfig, NetworkEntry, Secret

try:
    __version__ = version("deploy-networks")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "NetworkRegistry",
    "load_networks",
    "load_settings",
    "Settings",
    "Provider",
    "SigningProvider",
    "build_signing_provider",
    "EnvironmentName",
    "NetworkConfig",
    "NetworkEntry",
    "Secret",
    "NetworkConfigError",
    "ConfigurationError",
    "CredentialError",
    "EnvFileNotFoundError",
    "MissingCredentialError",
    "MalformedCredentialError",
    "ProviderConstructionError",
]
