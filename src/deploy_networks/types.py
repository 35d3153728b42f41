"""Data types and dataclasses for deploy-networks library."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .providers import Provider


class EnvironmentName(Enum):
    """
    Supported deployment environments.

    Value strings are the names the deployment tool selects networks by.
    """

    LOCAL = "local"
    TESTNET = "testnet"
    MAINNET = "mainnet"


@dataclass(frozen=True)
class Secret:
    """A sensitive string that is never shown by repr() or str()."""

    _value: str = field(repr=False)

    def reveal(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return "Secret('**********')"

    __str__ = __repr__


@dataclass(frozen=True)
class NetworkConfig:
    """Connection parameters for one deployment environment."""

    # Fixed per environment
    name: EnvironmentName
    network_id: str  # "1" for mainnet, "2" for local and testnet
    shard_id: int
    chain_id: int

    # From the process environment
    rpc_url: Optional[str] = None
    mnemonic: Optional[Secret] = None  # read but never used for signing
    private_key: Optional[Secret] = None
    gas_limit: Optional[str] = None  # numeric string
    gas_price: Optional[str] = None  # numeric string


ProviderFactory = Callable[[], "Provider"]


@dataclass(frozen=True)
class NetworkEntry:
    """What the deployment tool sees for one environment."""

    network_id: str
    provider: ProviderFactory
