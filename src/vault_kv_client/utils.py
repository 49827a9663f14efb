"""
Conversions between plain Python values and the client's data types.
"""

from typing import Iterable, List, Tuple

from .models import SecretData, SecretVersion, SecretVersions, VaultKey


def to_secret_data(pairs: Iterable[Tuple[str, str]]) -> SecretData:
    """Build secret data from key/value pairs; a repeated key keeps its last value."""
    return SecretData(data=dict(pairs))


def from_secret_data(secret_data: SecretData) -> List[Tuple[str, str]]:
    return list(secret_data.data.items())


def to_secret_versions(versions: Iterable[int]) -> SecretVersions:
    return SecretVersions(versions=[SecretVersion(v) for v in versions])


def from_secret_versions(secret_versions: SecretVersions) -> List[int]:
    return [int(v) for v in secret_versions.versions]


def is_folder(key: VaultKey) -> bool:
    """Listed keys ending with a slash are nested paths, not secrets."""
    return key.endswith("/")
