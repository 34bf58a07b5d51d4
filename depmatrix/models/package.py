"""
Package data model for depmatrix.

A :class:`ResolvedPackage` is a declared dependency that the registry
confirmed to be behind its latest published version.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from depmatrix.constants import TYPES_SCOPE


@dataclass(frozen=True)
class ResolvedPackage:
    """
    A dependency that needs an update.

    Attributes:
        name: npm package name, possibly scoped (``@scope/name``).
        current_version: Bare declared version.
        latest_version: Bare latest published version.
        repository_url: Browsable source repository, when known.
    """

    name: str
    current_version: str
    latest_version: str
    repository_url: Optional[str] = None

    # ------------------------------------------------------------------
    # Name helpers
    # ------------------------------------------------------------------

    def split_name(self) -> Tuple[Optional[str], str]:
        """
        Split the package name into scope and bare name.

        Returns:
            ``(scope, name)`` where ``scope`` keeps its leading ``@`` and is
            ``None`` for unscoped packages.
        """
        if "/" not in self.name:
            return None, self.name
        scope, _, rest = self.name.partition("/")
        return scope, rest

    @property
    def is_scoped(self) -> bool:
        return "/" in self.name

    @property
    def is_types_package(self) -> bool:
        """True for DefinitelyTyped declaration packages (``@types/...``)."""
        return self.split_name()[0] == TYPES_SCOPE

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize to the matrix member format.

        Returns:
            JSON-safe representation with camelCase keys.
        """
        return {
            "name": self.name,
            "currentVersion": self.current_version,
            "latestVersion": self.latest_version,
            "repositoryUrl": self.repository_url,
        }

    def __str__(self) -> str:
        return f"{self.name} {self.current_version} -> {self.latest_version}"
