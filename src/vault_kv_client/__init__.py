"""
Vault KV Python client

Client for the versioned key/value (KV version 2) secret engine of HashiCorp
Vault. Provides connection resolution, secret reads and writes with
check-and-set, soft deletion, destruction and metadata queries.
"""

from .client import VaultKVClient
from .connection import Connection, vault_connect
from .config import (
    ClientConfig,
    ConnectionDefaults,
    DefaultsProvider,
    EnvironmentDefaults,
    StaticDefaults,
)
from .exceptions import (
    VaultKVError,
    ConfigurationError,
    TransportError,
    ServiceError,
    DecodeError,
)
from .models import (
    CheckAndSet,
    CreateOnly,
    CurrentVersion,
    Metadata,
    Result,
    SecretData,
    SecretMetadata,
    SecretPath,
    SecretVersion,
    SecretVersions,
    VaultKey,
    WriteAllowed,
)
from .utils import (
    from_secret_data,
    from_secret_versions,
    is_folder,
    to_secret_data,
    to_secret_versions,
)

__version__ = "1.0.0"

__all__ = [
    "VaultKVClient",
    "Connection",
    "vault_connect",
    "ClientConfig",
    "ConnectionDefaults",
    "DefaultsProvider",
    "EnvironmentDefaults",
    "StaticDefaults",
    "VaultKVError",
    "ConfigurationError",
    "TransportError",
    "ServiceError",
    "DecodeError",
    "CheckAndSet",
    "CreateOnly",
    "CurrentVersion",
    "Metadata",
    "Result",
    "SecretData",
    "SecretMetadata",
    "SecretPath",
    "SecretVersion",
    "SecretVersions",
    "VaultKey",
    "WriteAllowed",
    "from_secret_data",
    "from_secret_versions",
    "is_folder",
    "to_secret_data",
    "to_secret_versions",
]
