"""
Exception classes for the Vault KV client.

Public operations return these as values (see ``models.Result``) rather than
raising them; ``Result.unwrap()`` raises the carried error.
"""

from typing import List, Optional


class VaultKVError(Exception):
    """Base exception for the Vault KV client."""
    
    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ConfigurationError(VaultKVError):
    """Address, token or environment could not be resolved."""
    pass


class TransportError(VaultKVError):
    """Network or TLS failure while talking to Vault."""
    pass


class ServiceError(VaultKVError):
    """Vault answered with a status outside the 2xx range."""
    
    def __init__(
        self,
        message: str,
        status_code: int,
        errors: Optional[List[str]] = None,
        body: str = "",
    ):
        super().__init__(message, error_code=str(status_code))
        self.status_code = status_code
        self.errors = errors or []
        self.body = body


class DecodeError(VaultKVError):
    """Successful status, but the JSON does not have the expected shape."""
    pass
