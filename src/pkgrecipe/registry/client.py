"""Online package registry client.

Fetches package metadata, recipes and archives from a registry such as
https://code.dlang.org/. Metadata is cached per package for a configurable
time. Failed requests are retried a fixed number of times, except when the
registry answers "not found", which is final.

Usage:
    async with RegistryClient(RegistryConfig.from_env()) as registry:
        versions = await registry.list_versions("vibe-d")
        recipe = await registry.fetch_recipe("vibe-d", "~>0.9")
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

from ..config import RegistryConfig
from .errors import NoMatchingVersionError, PackageNotFoundError, RegistryError
from .types import PackageMetadata, PackageVersion, SearchResult
from .versions import Version, VersionConstraint

logger = logging.getLogger(__name__)

PACKAGES_PATH = "packages"
SEARCH_PATH = "api/packages/search"


@dataclass
class _CacheEntry:
    metadata: PackageMetadata
    fetched_at: float


class RegistryClient:
    """Client for an online package registry.

    Args:
        config: Registry settings; defaults to RegistryConfig()
        http_client: Client to send requests with; created lazily when omitted
        clock: Monotonic time source in seconds, used for cache expiry
    """

    def __init__(
        self,
        config: RegistryConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or RegistryConfig()
        self._client = http_client
        self._owns_client = http_client is None
        self._clock = clock
        self._metadata_cache: dict[str, _CacheEntry] = {}

    @property
    def description(self) -> str:
        return f"registry at {self.config.base_url}"

    async def __aenter__(self) -> RegistryClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if this registry client created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # Public API

    async def list_versions(self, package_id: str) -> list[Version]:
        """List the published versions of a package, oldest first.

        Returns an empty list for packages the registry does not know.
        """
        metadata = await self.get_metadata(package_id)
        if metadata is None:
            return []
        versions = (self._parse_version(entry, package_id) for entry in metadata.versions)
        return sorted(v for v in versions if v is not None)

    async def fetch_recipe(
        self,
        package_id: str,
        constraint: str | VersionConstraint = "*",
        allow_prerelease: bool = False,
    ) -> dict[str, Any]:
        """Return the recipe data of the best version matching ``constraint``.

        Releases are preferred over pre-releases unless ``allow_prerelease``
        is set, in which case the highest matching version wins.

        Raises:
            PackageNotFoundError: The registry does not know the package
            NoMatchingVersionError: No version satisfies the constraint
        """
        if isinstance(constraint, str):
            constraint = VersionConstraint.parse(constraint)
        metadata = await self.get_metadata(package_id)
        if metadata is None:
            raise PackageNotFoundError(package_id)
        best = self._best_version(metadata, package_id, constraint, allow_prerelease)
        if best is None:
            raise NoMatchingVersionError(package_id, str(constraint))
        return best.recipe()

    async def fetch_artifact(self, package_id: str, version: str, destination: Path) -> Path:
        """Download the archive of one package version to ``destination``."""
        url = self._url(f"{PACKAGES_PATH}/{package_id}/{version}.zip")
        logger.debug(f"Downloading from '{url}'")
        response = await self._get(url, package_id)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(response.content)
        return destination

    async def search(self, query: str) -> list[SearchResult]:
        """Search the registry for packages matching ``query``."""
        response = await self._get(self._url(SEARCH_PATH), query, params={"q": query})
        try:
            return [SearchResult.model_validate(hit) for hit in response.json()]
        except ValueError as e:
            raise RegistryError(f"Invalid search response from {self.description}: {e}") from e

    async def get_metadata(self, package_id: str) -> PackageMetadata | None:
        """Return package metadata, from cache while it has not expired.

        Returns None when the registry does not know the package.
        """
        now = self._clock()
        entry = self._metadata_cache.get(package_id)
        if entry is not None:
            if entry.fetched_at + self.config.cache_ttl > now:
                return entry.metadata
            del self._metadata_cache[package_id]

        url = self._url(f"{PACKAGES_PATH}/{package_id}.json")
        logger.debug(f"Downloading metadata for {package_id}")
        logger.debug(f"Getting from {url}")
        try:
            response = await self._get(url, package_id)
        except PackageNotFoundError:
            logger.debug(f"Package {package_id} not found at {self.description}")
            return None

        try:
            metadata = PackageMetadata.model_validate(response.json())
        except ValueError as e:
            raise RegistryError(f"Invalid metadata for package {package_id}: {e}") from e

        self._metadata_cache[package_id] = _CacheEntry(metadata, now)
        return metadata

    # Private methods

    def _url(self, path: str) -> str:
        return self.config.base_url + path

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                follow_redirects=True,
            )
        return self._client

    async def _get(
        self, url: str, package_id: str, params: dict[str, str] | None = None
    ) -> httpx.Response:
        """GET ``url``, retrying failures other than "not found"."""
        client = await self._ensure_client()
        attempts = self.config.max_attempts
        last_error: Exception | None = None

        for attempt in range(1, attempts + 1):
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
                return response
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 404:
                    raise PackageNotFoundError(package_id, url) from e
                last_error = e
            except httpx.RequestError as e:
                last_error = e
            logger.debug(
                f"Error getting {url} for {package_id} "
                f"(attempt {attempt} of {attempts}): {last_error}"
            )

        raise RegistryError(
            f"Failed to download {url} from {self.description} "
            f"after {attempts} attempts: {last_error}"
        ) from last_error

    def _parse_version(self, entry: PackageVersion, package_id: str) -> Version | None:
        try:
            return Version.parse(entry.version)
        except ValueError:
            logger.warning(f"Skipping invalid version {entry.version!r} of package {package_id}")
            return None

    def _best_version(
        self,
        metadata: PackageMetadata,
        package_id: str,
        constraint: VersionConstraint,
        allow_prerelease: bool,
    ) -> PackageVersion | None:
        best: PackageVersion | None = None
        best_version: Version | None = None

        for entry in metadata.versions:
            current = self._parse_version(entry, package_id)
            if current is None or not constraint.matches(current):
                continue
            if best_version is None:
                better = True
            elif allow_prerelease:
                better = current > best_version
            elif best_version.is_prerelease:
                better = not current.is_prerelease or current > best_version
            else:
                better = not current.is_prerelease and current > best_version
            if better:
                best, best_version = entry, current

        return best
