"""Registry client errors."""

from __future__ import annotations


class RegistryError(Exception):
    """A registry request failed after all attempts."""

    pass


class PackageNotFoundError(RegistryError):
    """The registry does not know the requested package or artifact."""

    def __init__(self, package_id: str, url: str = "") -> None:
        self.package_id = package_id
        self.url = url
        super().__init__(f"Package {package_id} not found" + (f" at {url}" if url else ""))


class NoMatchingVersionError(RegistryError):
    """No published version satisfies the requested constraint."""

    def __init__(self, package_id: str, constraint: str) -> None:
        self.package_id = package_id
        self.constraint = constraint
        super().__init__(f"No package candidate found for {package_id} {constraint}")
