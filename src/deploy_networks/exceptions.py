"""Custom exception classes for deploy-networks library."""


class NetworkConfigError(Exception):
    """Base exception for network configuration errors."""

    pass


class ConfigurationError(NetworkConfigError, ValueError):
    """Raised when an unknown deployment environment is requested."""

    pass


class CredentialError(NetworkConfigError, ValueError):
    """Base exception for signing credential problems."""

    pass


class MissingCredentialError(CredentialError):
    """Raised when the private key for an environment is absent or empty."""

    pass


class MalformedCredentialError(CredentialError):
    """Raised when a private key cannot be used to derive an account."""

    pass


class ProviderConstructionError(NetworkConfigError, ValueError):
    """Raised when the RPC URL or network parameters are rejected."""

    pass


class EnvFileNotFoundError(NetworkConfigError, FileNotFoundError):
    """Raised when an explicitly requested .env file does not exist."""

    pass
