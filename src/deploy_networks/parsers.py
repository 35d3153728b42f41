"""Value normalizers for deploy-networks library."""

import re
from typing import Optional, Union

from .exceptions import ConfigurationError
from .types import EnvironmentName

_PRIVATE_KEY_PATTERN = re.compile(r"^(0[xX])?[0-9a-fA-F]{64}$")


def normalize_environment_name(name: Union[str, EnvironmentName]) -> EnvironmentName:
    """
    Resolve a user-supplied environment name.

    Accepts EnvironmentName members and strings in any case with
    surrounding whitespace (e.g., " Mainnet ").

    Args:
        name: Environment name or enum member

    Returns:
        Matching EnvironmentName

    Raises:
        ConfigurationError: If the name is not a known environment
    """
    if isinstance(name, EnvironmentName):
        return name

    if not isinstance(name, str):
        raise ConfigurationError(f"Unknown environment: {name!r}")

    try:
        return EnvironmentName(name.strip().lower())
    except ValueError:
        known = ", ".join(e.value for e in EnvironmentName)
        raise ConfigurationError(
            f"Unknown environment '{name}'. Expected one of: {known}"
        ) from None


def is_well_formed_private_key(key: str) -> bool:
    """
    Check the textual shape of a private key.

    A well-formed key is 32 bytes of hex, with or without a 0x or 0X prefix.
    Whether the value is a valid secp256k1 scalar is left to eth-account.
    """
    return bool(_PRIVATE_KEY_PATTERN.match(key.strip()))


def parse_gas_value(value: Optional[str]) -> Optional[int]:
    """
    Parse a gas limit or gas price string.

    Args:
        value: Decimal ("6721975") or hex ("0x6691b7") string, or None

    Returns:
        Integer value, or None if value is None or blank

    Raises:
        ValueError: If the string is not a non-negative integer
    """
    if value is None or not value.strip():
        return None

    text = value.strip()
    if text.lower().startswith("0x"):
        parsed = int(text, 16)
    else:
        parsed = int(text, 10)

    if parsed < 0:
        raise ValueError(f"Gas value must be non-negative, got {parsed}")
    return parsed
