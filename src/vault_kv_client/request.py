"""
Request construction for the KV version 2 HTTP API.

Builders are pure: they never fail and never touch the network. Version
numbers are expected to be non-negative; this is not checked here.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .connection import Connection
from .models import (
    CheckAndSet,
    CreateOnly,
    CurrentVersion,
    SecretData,
    SecretPath,
    SecretVersion,
    SecretVersions,
)
from .utils import from_secret_versions

TOKEN_HEADER = "X-Vault-Token"

DATA = "data"
METADATA = "metadata"
DELETE = "delete"
UNDELETE = "undelete"
DESTROY = "destroy"
CONFIG = "config"


@dataclass(frozen=True)
class VaultRequest:
    """Fully specified HTTP request."""
    method: str
    url: str
    headers: Dict[str, Union[str, bytes]] = field(repr=False)
    json: Optional[Dict[str, Any]] = None
    params: Dict[str, str] = field(default_factory=dict)


def _url(conn: Connection, segment: str, path: Optional[SecretPath] = None) -> str:
    url = f"{conn.base_url}/{segment}"
    if path is not None:
        url = f"{url}/{path.lstrip('/')}"
    return url


def _request(
    conn: Connection,
    method: str,
    url: str,
    body: Optional[Dict[str, Any]] = None,
    params: Optional[Dict[str, str]] = None,
) -> VaultRequest:
    headers: Dict[str, Union[str, bytes]] = {TOKEN_HEADER: conn.token}
    if body is not None:
        headers["Content-Type"] = "application/json"
    return VaultRequest(
        method=method,
        url=url,
        headers=headers,
        json=body,
        params=params or {},
    )


def cas_option(cas: CheckAndSet) -> Dict[str, int]:
    """``options`` object of a write for the given check-and-set mode."""
    if isinstance(cas, CreateOnly):
        return {"cas": 0}
    if isinstance(cas, CurrentVersion):
        return {"cas": cas.version}
    return {}


def read_secret_request(
    conn: Connection,
    path: SecretPath,
    version: Optional[SecretVersion] = None,
) -> VaultRequest:
    """GET a secret; ``None`` or ``0`` reads the current version."""
    params = {"version": str(version)} if version else {}
    return _request(conn, "GET", _url(conn, DATA, path), params=params)


def write_secret_request(
    conn: Connection,
    cas: CheckAndSet,
    path: SecretPath,
    data: SecretData,
) -> VaultRequest:
    body = {"options": cas_option(cas), "data": dict(data.data)}
    return _request(conn, "POST", _url(conn, DATA, path), body=body)


def delete_secret_request(conn: Connection, path: SecretPath) -> VaultRequest:
    """Soft delete of the current version."""
    return _request(conn, "DELETE", _url(conn, DATA, path))


def secret_versions_request(
    conn: Connection,
    segment: str,
    path: SecretPath,
    versions: SecretVersions,
) -> VaultRequest:
    """Bulk delete, undelete or destroy of explicit versions."""
    body = {"versions": from_secret_versions(versions)}
    return _request(conn, "POST", _url(conn, segment, path), body=body)


def destroy_secret_request(conn: Connection, path: SecretPath) -> VaultRequest:
    """Permanent removal of all versions and metadata."""
    return _request(conn, "DELETE", _url(conn, METADATA, path))


def read_metadata_request(conn: Connection, path: SecretPath) -> VaultRequest:
    return _request(conn, "GET", _url(conn, METADATA, path))


def list_secrets_request(conn: Connection, path: SecretPath) -> VaultRequest:
    return _request(conn, "GET", _url(conn, METADATA, path), params={"list": "true"})


def _config_body(max_versions: int, cas_required: bool) -> Dict[str, Any]:
    return {"max_versions": max_versions, "cas_required": cas_required}


def engine_config_request(
    conn: Connection,
    max_versions: int,
    cas_required: bool,
) -> VaultRequest:
    """Engine-wide defaults for every secret."""
    return _request(conn, "POST", _url(conn, CONFIG), body=_config_body(max_versions, cas_required))


def secret_config_request(
    conn: Connection,
    path: SecretPath,
    max_versions: int,
    cas_required: bool,
) -> VaultRequest:
    """Per-secret override of the engine defaults."""
    return _request(
        conn,
        "POST",
        _url(conn, METADATA, path),
        body=_config_body(max_versions, cas_required),
    )
