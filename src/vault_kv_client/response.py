"""
Decoding of KV version 2 responses.

``decode_envelope`` turns a status code and raw body into parsed JSON or a
``ServiceError``. The extractors then validate the JSON against the shape an
operation expects; a mismatch is a ``DecodeError``. Only the fields the
client uses are modelled, everything else in the envelope is ignored.
"""

import json
from typing import Annotated, Any, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

from .exceptions import DecodeError, ServiceError, VaultKVError
from .models import (
    Metadata,
    Result,
    SecretData,
    SecretMetadata,
    SecretVersion,
    VaultKey,
)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")

Version = Annotated[int, Field(ge=0, strict=True)]
VersionKey = Annotated[int, Field(ge=0)]


class KvV2ReadDetailResponse(BaseModel):
    data: Dict[str, str]


class KvV2ReadResponse(BaseModel):
    data: KvV2ReadDetailResponse


class KvV2WriteDetailResponse(BaseModel):
    version: Version
    created_time: Optional[str] = None
    deletion_time: Optional[str] = None
    destroyed: Optional[bool] = None


class KvV2WriteResponse(BaseModel):
    data: KvV2WriteDetailResponse


class KvV2ListDetailResponse(BaseModel):
    keys: List[str]


class KvV2ListResponse(BaseModel):
    data: KvV2ListDetailResponse


class KvV2CurrentVersionDetailResponse(BaseModel):
    current_version: Version


class KvV2CurrentVersionResponse(BaseModel):
    data: KvV2CurrentVersionDetailResponse


class KvV2VersionMetadataResponse(BaseModel):
    destroyed: bool
    created_time: str
    deletion_time: str = ""


class KvV2MetadataDetailResponse(KvV2CurrentVersionDetailResponse):
    oldest_version: Version = 0
    versions: Dict[VersionKey, KvV2VersionMetadataResponse]
    max_versions: Optional[int] = None
    cas_required: Optional[bool] = None
    created_time: Optional[str] = None
    updated_time: Optional[str] = None


class KvV2MetadataResponse(BaseModel):
    data: KvV2MetadataDetailResponse


def _service_error(status_code: int, text: str) -> ServiceError:
    try:
        payload = json.loads(text)
    except ValueError:
        payload = None
    errors = payload.get("errors") if isinstance(payload, dict) else None
    if isinstance(errors, list) and errors and all(isinstance(e, str) for e in errors):
        return ServiceError(", ".join(errors), status_code, errors=errors, body=text)
    return ServiceError(f"HTTP {status_code}: {text}", status_code, body=text)


def decode_envelope(status_code: int, body: bytes) -> Result[Any]:
    """
    Decode a raw Vault response.

    Args:
        status_code: HTTP status code
        body: Raw response body

    Returns:
        Parsed JSON (``None`` for an empty 2xx body), a ServiceError for
        non-2xx statuses, or a DecodeError for a 2xx body that is not JSON
    """
    text = body.decode("utf-8", errors="replace")
    if not 200 <= status_code < 300:
        return Result(error=_service_error(status_code, text))
    if not text.strip():
        return Result(value=None)
    try:
        return Result(value=json.loads(text))
    except ValueError as e:
        return Result(error=DecodeError(f"Vault response is not valid JSON: {e}"))


def _describe(error: ValidationError) -> str:
    # Input values are left out, they may hold secret data.
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in error.errors()
    )


def _extract(
    envelope: Result[Any],
    model: Type[M],
    shape: str,
    adapt: Callable[[M], T],
) -> Result[T]:
    if not envelope.ok:
        return Result(error=envelope.error)
    try:
        parsed = model.model_validate(envelope.value)
    except ValidationError as e:
        return Result(error=DecodeError(f"Expected {shape} in Vault response: {_describe(e)}"))
    return Result(value=adapt(parsed))


def secret_data(envelope: Result[Any]) -> Result[SecretData]:
    return _extract(
        envelope,
        KvV2ReadResponse,
        "data.data",
        lambda r: SecretData(data=r.data.data),
    )


def write_version(envelope: Result[Any]) -> Result[SecretVersion]:
    return _extract(
        envelope,
        KvV2WriteResponse,
        "data.version",
        lambda r: SecretVersion(r.data.version),
    )


def vault_keys(envelope: Result[Any]) -> Result[List[VaultKey]]:
    return _extract(
        envelope,
        KvV2ListResponse,
        "data.keys",
        lambda r: [VaultKey(k) for k in r.data.keys],
    )


def current_version(envelope: Result[Any]) -> Result[SecretVersion]:
    return _extract(
        envelope,
        KvV2CurrentVersionResponse,
        "data.current_version",
        lambda r: SecretVersion(r.data.current_version),
    )


def _to_secret_metadata(response: KvV2MetadataResponse) -> SecretMetadata:
    detail = response.data
    return SecretMetadata(
        versions={
            SecretVersion(v): Metadata(**m.model_dump()) for v, m in detail.versions.items()
        },
        current_version=SecretVersion(detail.current_version),
        oldest_version=SecretVersion(detail.oldest_version),
        max_versions=detail.max_versions,
        cas_required=detail.cas_required,
        created_time=detail.created_time,
        updated_time=detail.updated_time,
    )


def secret_metadata(envelope: Result[Any]) -> Result[SecretMetadata]:
    return _extract(
        envelope,
        KvV2MetadataResponse,
        "data.versions and data.current_version",
        _to_secret_metadata,
    )


def maybe_error(envelope: Result[Any]) -> Optional[VaultKVError]:
    return envelope.error
