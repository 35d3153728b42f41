"""Configuration constants for deploy-networks library."""

# Fixed per-environment identifiers. These never come from the process
# environment; only URLs, credentials and gas settings do.
NETWORK_CONFIG = {
    "local": {
        "network_id": "2",
        "shard_id": 0,
        "chain_id": 2,
        "env_prefix": "LOCAL",
    },
    "testnet": {
        "network_id": "2",
        "shard_id": 0,
        "chain_id": 2,
        "env_prefix": "TESTNET",
    },
    "mainnet": {
        "network_id": "1",
        "shard_id": 0,
        "chain_id": 1,
        "env_prefix": "MAINNET",
    },
}

# Per-environment variable suffixes, e.g. LOCAL_URL
URL_SUFFIX = "URL"
MNEMONIC_SUFFIX = "MNEMONIC"
PRIVATE_KEY_SUFFIX = "PRIVATE_KEY"

# Shared across all environments
GAS_LIMIT_ENV = "GAS_LIMIT"
GAS_PRICE_ENV = "GAS_PRICE"

# Truffle defaults, used when GAS_LIMIT / GAS_PRICE are unset
DEFAULT_GAS_LIMIT = 6721975
DEFAULT_GAS_PRICE = 20000000000  # 20 gwei

SIGNER_MIDDLEWARE_NAME = "signer"
