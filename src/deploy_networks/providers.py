"""Signing-capable JSON-RPC providers for deploy-networks library."""

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol
from urllib.parse import urlparse

import requests
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_keys.exceptions import ValidationError as KeyValidationError
from web3 import Web3
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.types import TxParams

from .constants import DEFAULT_GAS_LIMIT, DEFAULT_GAS_PRICE, SIGNER_MIDDLEWARE_NAME
from .exceptions import CredentialError, MalformedCredentialError, ProviderConstructionError
from .parsers import is_well_formed_private_key, parse_gas_value
from .types import NetworkConfig

logger = logging.getLogger(__name__)


class Provider(Protocol):
    """What the deployment tool needs from a provider."""

    rpc_url: str
    shard_id: int
    chain_id: int
    gas_limit: int
    gas_price: int

    @property
    def signer(self) -> Optional[str]: ...

    def add_by_private_key(self, private_key: str) -> str: ...

    def set_signer(self, address: str) -> None: ...


ProviderBuilder = Callable[[NetworkConfig], Provider]


def _validate_rpc_url(rpc_url: Optional[str]) -> str:
    if not rpc_url:
        raise ProviderConstructionError("RPC URL is not configured")

    parsed = urlparse(rpc_url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ProviderConstructionError(
            f"RPC URL must be an http(s) URL with a host, got scheme "
            f"'{parsed.scheme}' and host '{parsed.hostname}'"
        )
    return rpc_url


def _resolve_gas(value: Optional[str], default: int, label: str) -> int:
    try:
        parsed = parse_gas_value(value)
    except ValueError as e:
        raise ProviderConstructionError(f"Invalid {label} {value!r}: {e}") from e
    return default if parsed is None else parsed


class SigningProvider:
    """
    A web3 connection that signs transactions locally.

    Accounts are registered with add_by_private_key() and one of them is
    made the active signer with set_signer(). Transactions sent from the
    active signer are signed by web3's sign-and-send-raw middleware and
    submitted as eth_sendRawTransaction.

    Constructing the provider makes no network calls.
    """

    def __init__(
        self,
        rpc_url: Optional[str],
        shard_id: int = 0,
        chain_id: int = 1,
        gas_limit: Optional[str] = None,
        gas_price: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the provider.

        Args:
            rpc_url: JSON-RPC endpoint (http or https)
            shard_id: Shard the transactions target
            chain_id: Chain ID stamped on every transaction
            gas_limit: Gas limit as a numeric string (defaults to 6721975)
            gas_price: Gas price in wei as a numeric string (defaults to 20 gwei)
            session: requests session for the HTTP transport. A session
                     passed in is left open by close(); one created here
                     is closed by it.

        Raises:
            ProviderConstructionError: If the URL or gas settings are rejected
        """
        self.rpc_url = _validate_rpc_url(rpc_url)
        self.shard_id = shard_id
        self.chain_id = chain_id
        self.gas_limit = _resolve_gas(gas_limit, DEFAULT_GAS_LIMIT, "gas limit")
        self.gas_price = _resolve_gas(gas_price, DEFAULT_GAS_PRICE, "gas price")

        self._owns_session = session is None
        if session is None:
            session = requests.Session()
        self._session = session

        try:
            http_provider = Web3.HTTPProvider(
                self.rpc_url,
                session=session,
                exception_retry_configuration=None,
            )
        except (TypeError, ValueError) as e:
            raise ProviderConstructionError(f"Provider rejected RPC URL: {e}") from e

        self.w3 = Web3(http_provider)
        self._accounts: Dict[str, LocalAccount] = {}
        self._signer: Optional[str] = None

    @property
    def signer(self) -> Optional[str]:
        """Checksum address of the active signer, or None."""
        return self._signer

    @property
    def accounts(self) -> List[str]:
        """Addresses of all registered accounts."""
        return list(self._accounts.keys())

    def add_by_private_key(self, private_key: str) -> str:
        """
        Register an account derived from a private key.

        Args:
            private_key: 32-byte hex key, with or without 0x/0X prefix

        Returns:
            Checksum address of the account

        Raises:
            MalformedCredentialError: If the key is not a valid private key
        """
        if not isinstance(private_key, str) or not is_well_formed_private_key(private_key):
            raise MalformedCredentialError("Private key must be 32 bytes of hex")

        key = private_key.strip()
        if key[:2] == "0X":
            key = "0x" + key[2:]

        try:
            account = Account.from_key(key)
        except (ValueError, KeyValidationError) as e:
            # Do not chain: the cause may echo the key
            raise MalformedCredentialError(
                f"Private key is not a valid secp256k1 key ({type(e).__name__})"
            ) from None

        self._accounts[account.address] = account
        logger.debug("Registered account %s", account.address)
        return account.address

    def set_signer(self, address: str) -> None:
        """
        Make a registered account the active signer.

        Args:
            address: Address returned by add_by_private_key()

        Raises:
            CredentialError: If no account with that address is registered
        """
        try:
            checksum_address = Web3.to_checksum_address(address)
        except (TypeError, ValueError) as e:
            raise CredentialError(f"Invalid signer address {address!r}") from e

        account = self._accounts.get(checksum_address)
        if account is None:
            raise CredentialError(
                f"Account {checksum_address} is not registered with this provider"
            )

        if SIGNER_MIDDLEWARE_NAME in self.w3.middleware_onion:
            self.w3.middleware_onion.remove(SIGNER_MIDDLEWARE_NAME)
        self.w3.middleware_onion.inject(
            SignAndSendRawMiddlewareBuilder.build(account),
            name=SIGNER_MIDDLEWARE_NAME,
            layer=0,
        )
        self.w3.eth.default_account = checksum_address
        self._signer = checksum_address
        logger.info(
            "Signer %s active on shard %d, chain %d",
            checksum_address,
            self.shard_id,
            self.chain_id,
        )

    def transaction_defaults(self) -> Dict[str, Any]:
        """Fields merged under every transaction sent through this provider."""
        defaults: Dict[str, Any] = {
            "chainId": self.chain_id,
            "gas": self.gas_limit,
            "gasPrice": self.gas_price,
        }
        if self._signer is not None:
            defaults["from"] = self._signer
        return defaults

    def send_transaction(self, transaction: Dict[str, Any]) -> bytes:
        """
        Sign and submit a transaction from the active signer.

        Args:
            transaction: Transaction fields; defaults fill in the rest

        Returns:
            Transaction hash

        Raises:
            CredentialError: If no signer is set
        """
        if self._signer is None:
            raise CredentialError("No signer set; call set_signer() first")

        tx: TxParams = {**self.transaction_defaults(), **transaction}  # type: ignore[typeddict-item]
        return self.w3.eth.send_transaction(tx)

    def close(self) -> None:
        """Release the HTTP connection pool if this provider created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "SigningProvider":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        host = urlparse(self.rpc_url).hostname
        return (
            f"SigningProvider(host={host!r}, shard_id={self.shard_id}, "
            f"chain_id={self.chain_id}, signer={self._signer!r})"
        )


def build_signing_provider(config: NetworkConfig) -> SigningProvider:
    """
    Construct a SigningProvider for a network configuration.

    The mnemonic in config is not used; signers come from private keys only.
    """
    return SigningProvider(
        config.rpc_url,
        shard_id=config.shard_id,
        chain_id=config.chain_id,
        gas_limit=config.gas_limit,
        gas_price=config.gas_price,
    )
