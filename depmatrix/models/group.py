"""
Update group data model for depmatrix.

An :class:`UpdateGroup` is a batch of dependencies that are upgraded
together in a single change, typically one pull request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from depmatrix.models.package import ResolvedPackage
from depmatrix.utils.version_utils import NONE


@dataclass
class UpdateGroup:
    """
    A set of packages updated together.

    Attributes:
        packages: Members in group order. For unscoped groups the primary
            package comes first, followed by its ``@types`` companion.
        scope: Publishing scope without the ``@`` (``None`` when unscoped).
        group_current_version: Lowest current version among the members.
        group_latest_version: Version every member is bumped to.
        semver_label: ``major``, ``minor``, ``patch`` or ``none``.
        display_name: Human-readable title.
        identifier: Short stable code derived from member names.
        changelog_body: Markdown bullet list describing each bump.
        slug: Readable branch-name friendly key.
    """

    packages: List[ResolvedPackage] = field(default_factory=list)
    scope: Optional[str] = None
    group_current_version: str = ""
    group_latest_version: str = ""
    semver_label: str = NONE
    display_name: str = ""
    identifier: str = ""
    changelog_body: str = ""
    slug: str = ""

    @property
    def package_names(self) -> List[str]:
        return [pkg.name for pkg in self.packages]

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize to one entry of the build matrix.

        ``semverLabel`` is ``null`` when the group versions do not differ.
        """
        return {
            "packages": [pkg.to_json() for pkg in self.packages],
            "scope": self.scope,
            "groupCurrentVersion": self.group_current_version,
            "groupLatestVersion": self.group_latest_version,
            "semverLabel": None if self.semver_label == NONE else self.semver_label,
            "displayName": self.display_name,
            "identifier": self.identifier,
            "changelogBody": self.changelog_body,
            "slug": self.slug,
        }

    def __str__(self) -> str:
        return (
            f"{self.display_name} {self.group_current_version} -> "
            f"{self.group_latest_version} ({self.semver_label})"
        )
