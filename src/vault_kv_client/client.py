"""
Vault KV Client

Main client class for the KV version 2 secret engine.
"""

import logging
from typing import Any, List, Optional

import httpx

from . import request as rq
from . import response as rs
from .connection import Connection
from .exceptions import TransportError, VaultKVError
from .models import (
    CheckAndSet,
    Result,
    SecretData,
    SecretMetadata,
    SecretPath,
    SecretVersion,
    SecretVersions,
    VaultKey,
)

logger = logging.getLogger(__name__)


class VaultKVClient:
    """
    Client for one KV version 2 engine.

    Every operation exists in a synchronous and an asynchronous (``a`` prefix)
    form. Operations never raise for expected failures: value-returning ones
    give a ``Result``, effect-only ones give the error or ``None``. Each call
    is exactly one HTTP round trip, without caching or retries.
    """

    def __init__(self, connection: Connection):
        """
        Initialize the Vault KV client.

        Args:
            connection: Connection obtained from ``vault_connect``
        """
        self.connection = connection

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def close(self):
        """Close the sync HTTP client; ``aclose`` closes both."""
        self.connection.close()

    async def aclose(self):
        """Close both HTTP clients."""
        await self.connection.aclose()

    def _log_request(self, request: rq.VaultRequest) -> None:
        if self.connection.config.log_requests:
            logger.debug(f"{request.method} {request.url} params={request.params}")

    def _decode(self, request: rq.VaultRequest, response: httpx.Response) -> Result[Any]:
        if self.connection.config.log_responses:
            logger.debug(f"{request.method} {request.url} -> HTTP {response.status_code}")
        return rs.decode_envelope(response.status_code, response.content)

    def _send(self, request: rq.VaultRequest) -> Result[Any]:
        """Perform one synchronous round trip and decode the envelope."""
        self._log_request(request)
        try:
            response = self.connection.client.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                json=request.json,
                params=request.params,
            )
        except httpx.HTTPError as e:
            logger.error(f"Request failed: {e}")
            return Result(error=TransportError(f"Failed to connect to Vault: {e}"))
        return self._decode(request, response)

    async def _asend(self, request: rq.VaultRequest) -> Result[Any]:
        """Perform one asynchronous round trip and decode the envelope."""
        self._log_request(request)
        try:
            response = await self.connection.async_client.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                json=request.json,
                params=request.params,
            )
        except httpx.HTTPError as e:
            logger.error(f"Async request failed: {e}")
            return Result(error=TransportError(f"Failed to connect to Vault: {e}"))
        return self._decode(request, response)

    # Engine configuration

    def kv_engine_config(self, max_versions: int, cas_required: bool) -> Result[Any]:
        """Set default secret settings for the KV engine."""
        return self._send(rq.engine_config_request(self.connection, max_versions, cas_required))

    async def akv_engine_config(self, max_versions: int, cas_required: bool) -> Result[Any]:
        """Set default secret settings for the KV engine (async)."""
        return await self._asend(rq.engine_config_request(self.connection, max_versions, cas_required))

    def secret_config(self, path: SecretPath, max_versions: int, cas_required: bool) -> Result[Any]:
        """Override the engine's default settings for one secret."""
        return self._send(rq.secret_config_request(self.connection, path, max_versions, cas_required))

    async def asecret_config(
        self,
        path: SecretPath,
        max_versions: int,
        cas_required: bool,
    ) -> Result[Any]:
        """Override the engine's default settings for one secret (async)."""
        return await self._asend(
            rq.secret_config_request(self.connection, path, max_versions, cas_required)
        )

    # Basic operations

    def get_secret(
        self,
        path: SecretPath,
        version: Optional[SecretVersion] = None,
    ) -> Result[SecretData]:
        """
        Get a secret.

        Args:
            path: Location of the secret
            version: Version to read, ``None`` for the current one
        """
        return rs.secret_data(self._send(rq.read_secret_request(self.connection, path, version)))

    async def aget_secret(
        self,
        path: SecretPath,
        version: Optional[SecretVersion] = None,
    ) -> Result[SecretData]:
        """Get a secret (async)."""
        return rs.secret_data(await self._asend(rq.read_secret_request(self.connection, path, version)))

    def put_secret(
        self,
        cas: CheckAndSet,
        path: SecretPath,
        data: SecretData,
    ) -> Result[SecretVersion]:
        """
        Write a new version of a secret.

        Args:
            cas: ``WriteAllowed()``, ``CreateOnly()`` or ``CurrentVersion(version=n)``
            path: Location of the secret
            data: Key/value pairs to store

        Returns:
            Result holding the version number created by the write
        """
        return rs.write_version(self._send(rq.write_secret_request(self.connection, cas, path, data)))

    async def aput_secret(
        self,
        cas: CheckAndSet,
        path: SecretPath,
        data: SecretData,
    ) -> Result[SecretVersion]:
        """Write a new version of a secret (async)."""
        return rs.write_version(
            await self._asend(rq.write_secret_request(self.connection, cas, path, data))
        )

    # Soft deletion

    def delete_secret(self, path: SecretPath) -> Optional[VaultKVError]:
        """Soft delete the current version of a secret."""
        return rs.maybe_error(self._send(rq.delete_secret_request(self.connection, path)))

    async def adelete_secret(self, path: SecretPath) -> Optional[VaultKVError]:
        """Soft delete the current version of a secret (async)."""
        return rs.maybe_error(await self._asend(rq.delete_secret_request(self.connection, path)))

    def delete_secret_versions(
        self,
        path: SecretPath,
        versions: SecretVersions,
    ) -> Optional[VaultKVError]:
        """Soft delete the given versions of a secret."""
        request = rq.secret_versions_request(self.connection, rq.DELETE, path, versions)
        return rs.maybe_error(self._send(request))

    async def adelete_secret_versions(
        self,
        path: SecretPath,
        versions: SecretVersions,
    ) -> Optional[VaultKVError]:
        """Soft delete the given versions of a secret (async)."""
        request = rq.secret_versions_request(self.connection, rq.DELETE, path, versions)
        return rs.maybe_error(await self._asend(request))

    def undelete_secret_versions(
        self,
        path: SecretPath,
        versions: SecretVersions,
    ) -> Optional[VaultKVError]:
        """Restore soft deleted versions of a secret."""
        request = rq.secret_versions_request(self.connection, rq.UNDELETE, path, versions)
        return rs.maybe_error(self._send(request))

    async def aundelete_secret_versions(
        self,
        path: SecretPath,
        versions: SecretVersions,
    ) -> Optional[VaultKVError]:
        """Restore soft deleted versions of a secret (async)."""
        request = rq.secret_versions_request(self.connection, rq.UNDELETE, path, versions)
        return rs.maybe_error(await self._asend(request))

    # Permanent deletion

    def destroy_secret(self, path: SecretPath) -> Optional[VaultKVError]:
        """Permanently delete a secret, i.e. all its versions and metadata."""
        return rs.maybe_error(self._send(rq.destroy_secret_request(self.connection, path)))

    async def adestroy_secret(self, path: SecretPath) -> Optional[VaultKVError]:
        """Permanently delete a secret, i.e. all its versions and metadata (async)."""
        return rs.maybe_error(await self._asend(rq.destroy_secret_request(self.connection, path)))

    def destroy_secret_versions(self, path: SecretPath, versions: SecretVersions) -> Result[Any]:
        """
        Permanently delete the given versions of a secret.

        The decoded response is returned as-is: Vault sends nothing worth
        extracting back for this call.
        """
        return self._send(rq.secret_versions_request(self.connection, rq.DESTROY, path, versions))

    async def adestroy_secret_versions(
        self,
        path: SecretPath,
        versions: SecretVersions,
    ) -> Result[Any]:
        """Permanently delete the given versions of a secret (async)."""
        return await self._asend(
            rq.secret_versions_request(self.connection, rq.DESTROY, path, versions)
        )

    # Information

    def secrets_list(self, path: SecretPath) -> Result[List[VaultKey]]:
        """List secrets and folders (keys ending with ``/``) at a location."""
        return rs.vault_keys(self._send(rq.list_secrets_request(self.connection, path)))

    async def asecrets_list(self, path: SecretPath) -> Result[List[VaultKey]]:
        """List secrets and folders at a location (async)."""
        return rs.vault_keys(await self._asend(rq.list_secrets_request(self.connection, path)))

    def read_secret_metadata(self, path: SecretPath) -> Result[SecretMetadata]:
        """Retrieve the version history of a secret."""
        return rs.secret_metadata(self._send(rq.read_metadata_request(self.connection, path)))

    async def aread_secret_metadata(self, path: SecretPath) -> Result[SecretMetadata]:
        """Retrieve the version history of a secret (async)."""
        return rs.secret_metadata(await self._asend(rq.read_metadata_request(self.connection, path)))

    def current_secret_version(self, path: SecretPath) -> Result[SecretVersion]:
        """Get the current version number of a secret."""
        return rs.current_version(self._send(rq.read_metadata_request(self.connection, path)))

    async def acurrent_secret_version(self, path: SecretPath) -> Result[SecretVersion]:
        """Get the current version number of a secret (async)."""
        return rs.current_version(await self._asend(rq.read_metadata_request(self.connection, path)))
