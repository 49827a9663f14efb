"""
Configuration classes for the Vault KV client.
"""

import os
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

VAULT_ADDR_ENV = "VAULT_ADDR"
HOME_ENV = "HOME"
TOKEN_FILE_NAME = ".vault-token"


class ClientConfig(BaseModel):
    """Configuration for the HTTP clients bound to a connection."""
    model_config = ConfigDict(extra="forbid")
    
    timeout: float = Field(30.0, description="Request timeout in seconds")
    max_connections: int = Field(10, description="Maximum number of connections")
    ca_bundle: Optional[str] = Field(None, description="Path to CA bundle file")
    
    # Logging configuration
    log_requests: bool = Field(False, description="Whether to log HTTP requests")
    log_responses: bool = Field(False, description="Whether to log HTTP responses")


class ConnectionDefaults(BaseModel):
    """Values used when ``vault_connect`` is not given them explicitly."""
    model_config = ConfigDict(frozen=True)
    
    address: Optional[str] = Field(None, description="Vault server address")
    home_dir: Optional[str] = Field(None, description="Directory holding the token file")


class DefaultsProvider(ABC):
    """Source of connection defaults."""
    
    @abstractmethod
    def provide_defaults(self) -> ConnectionDefaults:
        """Get connection defaults."""
        pass


class EnvironmentDefaults(DefaultsProvider):
    """Reads ``VAULT_ADDR`` and ``HOME`` from the process environment."""
    
    def provide_defaults(self) -> ConnectionDefaults:
        return ConnectionDefaults(
            address=os.environ.get(VAULT_ADDR_ENV),
            home_dir=os.environ.get(HOME_ENV),
        )


class StaticDefaults(DefaultsProvider):
    """Fixed defaults, mostly useful in tests."""
    
    def __init__(self, address: Optional[str] = None, home_dir: Optional[str] = None):
        self._defaults = ConnectionDefaults(address=address, home_dir=home_dir)
    
    def provide_defaults(self) -> ConnectionDefaults:
        return self._defaults
