"""Online package registry access.

Public API:
    RegistryClient - Async client with metadata caching and retries
    Version - Semantic or branch version
    VersionConstraint - Set of acceptable versions
    PackageMetadata, PackageVersion, SearchResult - Wire types
    RegistryError, PackageNotFoundError, NoMatchingVersionError - Errors
"""

from __future__ import annotations

from .client import RegistryClient
from .errors import NoMatchingVersionError, PackageNotFoundError, RegistryError
from .types import PackageMetadata, PackageVersion, SearchResult
from .versions import Version, VersionConstraint

__all__ = [
    "RegistryClient",
    "Version",
    "VersionConstraint",
    "PackageMetadata",
    "PackageVersion",
    "SearchResult",
    "RegistryError",
    "PackageNotFoundError",
    "NoMatchingVersionError",
]
