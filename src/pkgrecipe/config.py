"""Registry client configuration.

Values come from keyword arguments or, via RegistryConfig.from_env(), from
environment variables:

    PKGRECIPE_REGISTRY_URL   Registry base URL
    PKGRECIPE_CACHE_TTL      Seconds package metadata stays cached
    PKGRECIPE_MAX_ATTEMPTS   Attempts per request before giving up
    PKGRECIPE_TIMEOUT        HTTP timeout in seconds
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_REGISTRY_URL = "https://code.dlang.org/"


@dataclass
class RegistryConfig:
    """Registry client configuration."""

    base_url: str = DEFAULT_REGISTRY_URL
    cache_ttl: float = 24 * 60 * 60
    max_attempts: int = 3
    timeout: float = 30.0

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            self.base_url += "/"
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @classmethod
    def from_env(cls) -> RegistryConfig:
        """Build a configuration, overriding defaults from the environment."""
        return cls(
            base_url=os.environ.get("PKGRECIPE_REGISTRY_URL", DEFAULT_REGISTRY_URL),
            cache_ttl=_env_number("PKGRECIPE_CACHE_TTL", float, cls.cache_ttl),
            max_attempts=_env_number("PKGRECIPE_MAX_ATTEMPTS", int, cls.max_attempts),
            timeout=_env_number("PKGRECIPE_TIMEOUT", float, cls.timeout),
        )


def _env_number(name: str, kind: type, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from None
