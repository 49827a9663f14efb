"""
Data models for the Vault KV client.
"""

from dataclasses import dataclass
from typing import Annotated, Dict, Generic, List, Literal, NewType, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import VaultKVError

SecretPath = NewType("SecretPath", str)
SecretVersion = NewType("SecretVersion", int)
VaultKey = NewType("VaultKey", str)

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation: a value, or the error that prevented it."""
    value: Optional[T] = None
    error: Optional[VaultKVError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value


class SecretData(BaseModel):
    """Key/value payload of one secret version."""
    model_config = ConfigDict(frozen=True)

    data: Dict[str, str] = Field(default_factory=dict, description="Secret key/value pairs")


class SecretVersions(BaseModel):
    """Versions targeted by a bulk delete, undelete or destroy."""
    model_config = ConfigDict(frozen=True)

    versions: List[int] = Field(default_factory=list, description="Version numbers, in order")


class Metadata(BaseModel):
    """History record of one secret version."""

    destroyed: bool = Field(False, description="Whether the version was destroyed")
    deletion_time: str = Field("", description="Soft deletion timestamp, empty if not deleted")
    created_time: str = Field("", description="Creation timestamp (ISO-8601)")


class SecretMetadata(BaseModel):
    """Version history of a secret, read fresh on each query."""

    versions: Dict[SecretVersion, Metadata] = Field(default_factory=dict)
    current_version: SecretVersion = Field(SecretVersion(0), description="Latest version")
    oldest_version: SecretVersion = Field(SecretVersion(0), description="Oldest retained version")
    max_versions: Optional[int] = Field(None, description="Versions kept for this secret")
    cas_required: Optional[bool] = Field(None, description="Whether writes must set cas")
    created_time: Optional[str] = Field(None, description="Secret creation timestamp")
    updated_time: Optional[str] = Field(None, description="Last write timestamp")


class WriteAllowed(BaseModel):
    """Write without any check-and-set condition."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["write_allowed"] = "write_allowed"


class CreateOnly(BaseModel):
    """Write only if the secret does not exist yet."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["create_only"] = "create_only"


class CurrentVersion(BaseModel):
    """Write only if the latest version equals ``version``."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["current_version"] = "current_version"
    version: int = Field(..., ge=0, description="Expected current version")


CheckAndSet = Annotated[
    Union[WriteAllowed, CreateOnly, CurrentVersion],
    Field(discriminator="kind"),
]
