"""npm registry lookups for depmatrix.

The grouper only needs one thing from a registry: the latest published
version of a package and where its source lives. That capability is
described by :class:`RegistryLookup`; :class:`NpmRegistry` implements it
against the public registry (or any compatible mirror) and caches one
answer per package name.

Typical usage::

    from depmatrix.utils.http import HTTPClient
    from depmatrix.core.registry import NpmRegistry

    async with HTTPClient() as client:
        registry = NpmRegistry(client)
        meta = await registry.get_latest("left-pad")
        print(meta.version, meta.repository_url)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol
from urllib.parse import quote

from depmatrix.constants import DEFAULT_MAX_CONCURRENCY, DEFAULT_REGISTRY_URL
from depmatrix.exceptions import RegistryError
from depmatrix.utils.http import HTTPClient
from depmatrix.utils.logger import get_logger

logger = get_logger("registry")

__all__ = [
    "RegistryLookup",
    "RegistryMetadata",
    "NpmRegistry",
    "git_repository_url",
]


def git_repository_url(repository: Any) -> Optional[str]:
    """Return a browsable URL for a ``{"type": "git", "url": ...}`` record.

    A leading ``git+`` and a trailing ``.git`` are removed. Any other
    repository type, or a non-mapping value, yields ``None``.

    Example::

        >>> git_repository_url(
        ...     {"type": "git", "url": "git+https://github.com/x/left-pad.git"}
        ... )
        'https://github.com/x/left-pad'
    """
    if not isinstance(repository, Mapping) or repository.get("type") != "git":
        return None

    url = repository.get("url")
    if not isinstance(url, str) or not url:
        return None

    if url.startswith("git+"):
        url = url[len("git+"):]
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return url or None


@dataclass(frozen=True)
class RegistryMetadata:
    """Latest-release facts about one package.

    Attributes:
        name: Package name as requested.
        version: Latest published version (``dist-tags.latest``).
        repository: Raw ``repository`` record of that version, if any.
    """

    name: str
    version: Optional[str]
    repository: Optional[Mapping[str, Any]] = None

    @property
    def repository_url(self) -> Optional[str]:
        return git_repository_url(self.repository)


class RegistryLookup(Protocol):
    """Capability used by the grouper to query a package registry.

    Implementations may return ``None`` or raise for packages they cannot
    describe; the grouper treats both as "no data".
    """

    async def get_latest(self, name: str) -> Optional[RegistryMetadata]:
        ...


class NpmRegistry:
    """Cached npm registry client.

    Each package name triggers at most one request to
    ``<registry_url>/<name>``. A semaphore bounds in-flight fetches and a
    second cache check inside it stops duplicate requests when several
    coroutines ask for the same package at once.

    Args:
        http_client: Configured :class:`HTTPClient`.
        registry_url: Registry base URL.
        concurrent_limit: Maximum number of fetches in flight.
    """

    def __init__(
        self,
        http_client: HTTPClient,
        registry_url: str = DEFAULT_REGISTRY_URL,
        concurrent_limit: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        self.http_client = http_client
        self.registry_url = registry_url.rstrip("/")
        self._semaphore = asyncio.Semaphore(concurrent_limit)
        self._cache: Dict[str, RegistryMetadata] = {}

    def package_url(self, name: str) -> str:
        """Registry document URL; the scope separator is percent-encoded."""
        return f"{self.registry_url}/{quote(name, safe='@')}"

    async def get_latest(self, name: str) -> RegistryMetadata:
        """Return (possibly cached) latest-release metadata for *name*.

        Raises:
            RegistryError: Package missing or registry document malformed.
            NetworkError: The registry could not be reached.
        """
        if name in self._cache:
            return self._cache[name]

        async with self._semaphore:
            if name in self._cache:
                return self._cache[name]

            document = await self.http_client.get_json(self.package_url(name))
            metadata = self._parse_document(name, document)
            self._cache[name] = metadata
            return metadata

    @staticmethod
    def _parse_document(name: str, document: Dict[str, Any]) -> RegistryMetadata:
        """Pick ``dist-tags.latest`` and its repository out of a packument.

        The repository of the latest version manifest wins; the
        document-level ``repository`` is the fallback.
        """
        dist_tags = document.get("dist-tags")
        if not isinstance(dist_tags, dict):
            raise RegistryError(
                f"Registry document for '{name}' has no dist-tags",
                package_name=name,
            )

        latest = dist_tags.get("latest")
        if not isinstance(latest, str):
            return RegistryMetadata(name=name, version=None)

        repository = None
        versions = document.get("versions")
        if isinstance(versions, dict):
            manifest = versions.get(latest)
            if isinstance(manifest, dict):
                repository = manifest.get("repository")
        if repository is None:
            repository = document.get("repository")

        return RegistryMetadata(
            name=name,
            version=latest,
            repository=repository if isinstance(repository, Mapping) else None,
        )
