"""Shared pytest fixtures for deploy-networks tests."""

from typing import Dict, List, Optional

import pytest
from eth_account import Account

from deploy_networks.types import NetworkConfig

TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
OTHER_PRIVATE_KEY = "0x" + "11" * 32


class FakeProvider:
    """In-memory stand-in for SigningProvider."""

    def __init__(self, config: NetworkConfig):
        self.config = config
        self.rpc_url = config.rpc_url
        self.shard_id = config.shard_id
        self.chain_id = config.chain_id
        self.gas_limit = config.gas_limit
        self.gas_price = config.gas_price
        self.added_keys: List[str] = []
        self._signer: Optional[str] = None

    @property
    def signer(self) -> Optional[str]:
        return self._signer

    def add_by_private_key(self, private_key: str) -> str:
        self.added_keys.append(private_key)
        return Account.from_key(private_key).address

    def set_signer(self, address: str) -> None:
        self._signer = address


class RecordingBuilder:
    """Provider builder that records every config it is asked to build."""

    def __init__(self):
        self.built: List[NetworkConfig] = []

    def __call__(self, config: NetworkConfig) -> FakeProvider:
        self.built.append(config)
        return FakeProvider(config)


@pytest.fixture
def test_private_key() -> str:
    return TEST_PRIVATE_KEY


@pytest.fixture
def test_address() -> str:
    return Account.from_key(TEST_PRIVATE_KEY).address


@pytest.fixture
def sample_environ() -> Dict[str, str]:
    """A fully configured environment for all three networks."""
    return {
        "LOCAL_URL": "http://localhost:9500",
        "LOCAL_PRIVATE_KEY": TEST_PRIVATE_KEY,
        "LOCAL_MNEMONIC": "test test test test test test test test test test test junk",
        "TESTNET_URL": "https://api.s0.b.hmny.io",
        "TESTNET_PRIVATE_KEY": OTHER_PRIVATE_KEY,
        "TESTNET_MNEMONIC": "",
        "MAINNET_URL": "https://api.s0.t.hmny.io",
        "MAINNET_PRIVATE_KEY": TEST_PRIVATE_KEY,
        "GAS_LIMIT": "6721900",
        "GAS_PRICE": "1000000000",
    }


@pytest.fixture
def recording_builder() -> RecordingBuilder:
    return RecordingBuilder()
