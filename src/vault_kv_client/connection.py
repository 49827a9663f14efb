"""
Vault connection resolution.

A ``Connection`` binds the server address, the token and the KV engine mount
path to one synchronous and one asynchronous HTTP client sharing the same TLS
settings.
"""

import logging
import ssl
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import certifi
import httpx

from .config import (
    HOME_ENV,
    TOKEN_FILE_NAME,
    VAULT_ADDR_ENV,
    ClientConfig,
    DefaultsProvider,
    EnvironmentDefaults,
)
from .exceptions import ConfigurationError
from .models import Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Connection:
    """Immutable handle on a Vault KV version 2 engine."""
    address: str
    token: bytes = field(repr=False)
    engine_path: str
    client: httpx.Client = field(repr=False, compare=False)
    async_client: httpx.AsyncClient = field(repr=False, compare=False)
    config: ClientConfig = field(default_factory=ClientConfig, repr=False, compare=False)

    @property
    def base_url(self) -> str:
        return f"{self.address}v1/{self.engine_path}"

    def close(self) -> None:
        """Close the sync HTTP client; ``aclose`` closes both."""
        self.client.close()

    async def aclose(self) -> None:
        """Close both HTTP clients."""
        await self.async_client.aclose()
        self.client.close()


def _normalize_address(address: str) -> str:
    return address.rstrip("/") + "/"


def _build_ssl_context(
    disable_cert_validation: bool,
    ca_bundle: Optional[str] = None,
) -> ssl.SSLContext:
    """TLS context shared by both clients of a connection."""
    context = ssl.create_default_context(cafile=ca_bundle or certifi.where())
    if disable_cert_validation:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    else:
        context.verify_mode = ssl.CERT_REQUIRED
        context.check_hostname = True
    # No session tickets: every TLS connection negotiates a fresh session.
    context.options |= ssl.OP_NO_TICKET
    return context


def _read_token_file(home_dir: Optional[str], address: Optional[str]) -> Result[bytes]:
    if home_dir is None:
        return Result(error=ConfigurationError(f"Environment variable {HOME_ENV} not set"))
    if address is None:
        return Result(error=ConfigurationError(f"Environment variable {VAULT_ADDR_ENV} not set"))
    token_path = Path(home_dir) / TOKEN_FILE_NAME
    if not token_path.is_file():
        return Result(error=ConfigurationError(f"No Vault token file found at {token_path}"))
    try:
        return Result(value=token_path.read_bytes().strip())
    except OSError as e:
        return Result(error=ConfigurationError(f"Cannot read Vault token file at {token_path}: {e}"))


def vault_connect(
    address: Optional[str] = None,
    engine_path: str = "secret",
    token: Optional[str] = None,
    disable_cert_validation: bool = False,
    *,
    config: Optional[ClientConfig] = None,
    defaults: Optional[DefaultsProvider] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Result[Connection]:
    """
    Resolve a connection to a Vault KV version 2 engine.

    Args:
        address: Vault server address, or ``None`` to use ``VAULT_ADDR``
        engine_path: Mount path of the KV engine, e.g. ``"secret"``
        token: Vault token, or ``None`` to read ``$HOME/.vault-token``
        disable_cert_validation: Skip TLS certificate and hostname checks
        config: Optional client configuration
        defaults: Source of ``VAULT_ADDR``/``HOME``, the process environment by default
        transport: Optional httpx transport used by both clients instead of the network

    Returns:
        Result holding the Connection, or a ConfigurationError
    """
    config = config or ClientConfig()
    found = (defaults or EnvironmentDefaults()).provide_defaults()
    resolved_address = address if address is not None else found.address

    if token is not None:
        credential = Result(value=token.encode("utf-8"))
    else:
        credential = _read_token_file(found.home_dir, resolved_address)
    if credential.ok and resolved_address is None:
        credential = Result(error=ConfigurationError(f"Environment variable {VAULT_ADDR_ENV} not set"))
    if not credential.ok:
        logger.warning(f"Vault connection not resolved: {credential.error}")
        return Result(error=credential.error)

    try:
        context = _build_ssl_context(disable_cert_validation, config.ca_bundle)
    except OSError as e:
        ca_path = config.ca_bundle or certifi.where()
        logger.warning(f"Cannot load CA bundle {ca_path}: {e}")
        return Result(error=ConfigurationError(f"Cannot load CA bundle at {ca_path}: {e}"))
    timeout = httpx.Timeout(config.timeout)
    limits = httpx.Limits(
        max_keepalive_connections=config.max_connections,
        max_connections=config.max_connections,
    )
    # A given transport is used as-is; httpx ignores verify/limits then.
    connection = Connection(
        address=_normalize_address(resolved_address),
        token=credential.value,
        engine_path=engine_path.strip("/"),
        client=httpx.Client(
            timeout=timeout,
            limits=limits,
            verify=context,
            transport=transport,
        ),
        async_client=httpx.AsyncClient(
            timeout=timeout,
            limits=limits,
            verify=context,
            transport=transport,
        ),
        config=config,
    )
    logger.debug(f"Connected to Vault KV engine at {connection.base_url}")
    return Result(value=connection)
