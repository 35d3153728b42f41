"""Process environment loading for deploy-networks library."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

from .constants import (
    GAS_LIMIT_ENV,
    GAS_PRICE_ENV,
    MNEMONIC_SUFFIX,
    NETWORK_CONFIG,
    PRIVATE_KEY_SUFFIX,
    URL_SUFFIX,
)
from .exceptions import EnvFileNotFoundError
from .types import Secret

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnvironmentSettings:
    """Values read for one environment (e.g., LOCAL_URL, LOCAL_PRIVATE_KEY)."""

    url: Optional[str] = None
    mnemonic: Optional[Secret] = None
    private_key: Optional[Secret] = None


@dataclass(frozen=True)
class Settings:
    """Everything read from the process environment at startup."""

    environments: Mapping[str, EnvironmentSettings]
    gas_limit: Optional[str] = None
    gas_price: Optional[str] = None

    def for_environment(self, name: str) -> EnvironmentSettings:
        return self.environments.get(name, EnvironmentSettings())


def _get(source: Mapping[str, Optional[str]], key: str) -> Optional[str]:
    """Read a variable, treating empty strings as unset."""
    value = source.get(key)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def _secret(value: Optional[str]) -> Optional[Secret]:
    return Secret(value) if value is not None else None


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Union[Path, str]] = None,
) -> Settings:
    """
    Read deployment settings once from the environment.

    Args:
        environ: Variables to read from (defaults to os.environ)
        env_file: Optional .env file. Its values fill in variables missing
                  from environ; the process environment is not modified.

    Returns:
        Immutable Settings object

    Raises:
        EnvFileNotFoundError: If env_file is given but is not a file
    """
    if environ is None:
        environ = os.environ

    source: Dict[str, Optional[str]] = {}
    if env_file is not None:
        if not Path(env_file).is_file():
            raise EnvFileNotFoundError(f"Environment file not found at {env_file}")
        source.update(dotenv_values(env_file))
        logger.debug("Loaded %d variables from %s", len(source), env_file)
    source.update(environ)

    environments: Dict[str, EnvironmentSettings] = {}
    for name, network_config in NETWORK_CONFIG.items():
        prefix = network_config["env_prefix"]
        environments[name] = EnvironmentSettings(
            url=_get(source, f"{prefix}_{URL_SUFFIX}"),
            mnemonic=_secret(_get(source, f"{prefix}_{MNEMONIC_SUFFIX}")),
            private_key=_secret(_get(source, f"{prefix}_{PRIVATE_KEY_SUFFIX}")),
        )

    return Settings(
        environments=MappingProxyType(environments),
        gas_limit=_get(source, GAS_LIMIT_ENV),
        gas_price=_get(source, GAS_PRICE_ENV),
    )
