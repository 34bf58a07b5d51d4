"""Grouping of outdated dependencies into update batches.

Given the merged ``name -> range`` mapping of a project,
:class:`UpdateGrouper` asks the registry for every package's latest
release, keeps the ones that are behind, and partitions them into
:class:`~depmatrix.models.group.UpdateGroup` objects:

* ``@scope/name`` packages are grouped per scope *and* per latest
  version, so every member of a group moves to the same version;
* unscoped packages form a group of their own, joined by their
  ``@types/<name>`` declaration package when that is outdated as well.

Scoped groups come first (scope order, then latest-version order, both
by first appearance), followed by unscoped groups in mapping order, so
identical input always produces identical output.

Typical usage::

    async with HTTPClient() as http:
        grouper = UpdateGrouper(NpmRegistry(http))
        groups = await grouper.group_updates(declared)
"""

from __future__ import annotations

import asyncio
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from depmatrix.core.formatting import changelog_body, identifier, slug
from depmatrix.core.registry import RegistryLookup, RegistryMetadata
from depmatrix.models.group import UpdateGroup
from depmatrix.models.package import ResolvedPackage
from depmatrix.utils.logger import get_logger
from depmatrix.utils.version_utils import diff_kind, is_at_least, lower, strip_range

logger = get_logger("grouper")

__all__ = ["UpdateGrouper", "partition_packages", "build_groups"]


# ---------------------------------------------------------------------------
# Pure grouping steps
# ---------------------------------------------------------------------------


def resolve_package(
    name: str,
    range_expression: str,
    metadata: Optional[RegistryMetadata],
) -> Optional[ResolvedPackage]:
    """Turn a declaration plus registry data into a :class:`ResolvedPackage`.

    Returns ``None`` when the package cannot or need not be updated.
    """
    current = strip_range(range_expression)
    if current is None:
        return None

    if metadata is None or not metadata.version:
        logger.debug("No registry version for %s", name)
        return None

    latest = strip_range(metadata.version)
    if latest is None:
        logger.debug("Unparseable latest version for %s: %r", name, metadata.version)
        return None

    if is_at_least(current, latest):
        return None

    return ResolvedPackage(
        name=name,
        current_version=current,
        latest_version=latest,
        repository_url=metadata.repository_url,
    )


def partition_packages(
    packages: Sequence[ResolvedPackage],
) -> Tuple[
    Dict[str, Dict[str, List[ResolvedPackage]]],
    Dict[str, ResolvedPackage],
    List[ResolvedPackage],
]:
    """Split packages into scoped buckets, ``@types`` shadows and unscoped.

    Returns:
        ``(scoped, types, unscoped)`` where ``scoped`` maps scope (without
        ``@``) to latest version to members, and ``types`` maps the bare
        name after ``@types/`` to its package.
    """
    scoped: Dict[str, Dict[str, List[ResolvedPackage]]] = {}
    types: Dict[str, ResolvedPackage] = {}
    unscoped: List[ResolvedPackage] = []

    for pkg in packages:
        if not pkg.is_scoped:
            unscoped.append(pkg)
            continue

        scope, bare_name = pkg.split_name()
        if pkg.is_types_package:
            # TODO: pair @types/scope__name with @scope/name
            types[bare_name] = pkg
        else:
            by_version = scoped.setdefault(scope.lstrip("@"), {})
            by_version.setdefault(pkg.latest_version, []).append(pkg)

    return scoped, types, unscoped


def _make_group(
    members: List[ResolvedPackage],
    scope: Optional[str],
    current: str,
    latest: str,
    display_name: str,
) -> UpdateGroup:
    return UpdateGroup(
        packages=members,
        scope=scope,
        group_current_version=current,
        group_latest_version=latest,
        semver_label=diff_kind(current, latest),
        display_name=display_name,
        identifier=identifier(pkg.name for pkg in members),
        changelog_body=changelog_body(members),
        slug=slug(scope if scope and len(members) > 1 else display_name, latest),
    )


def build_groups(packages: Sequence[ResolvedPackage]) -> List[UpdateGroup]:
    """Group resolved packages; see the module docstring for the rules."""
    scoped, types, unscoped = partition_packages(packages)
    groups: List[UpdateGroup] = []

    for scope, by_version in scoped.items():
        for latest, members in by_version.items():
            current = members[0].current_version
            for pkg in members[1:]:
                current = lower(current, pkg.current_version)

            display_name = f"{scope} packages" if len(members) > 1 else members[0].name
            groups.append(_make_group(list(members), scope, current, latest, display_name))

    for pkg in unscoped:
        members = [pkg]
        companion = types.get(pkg.name)
        if companion is not None:
            members.append(companion)

        groups.append(
            _make_group(members, None, pkg.current_version, pkg.latest_version, pkg.name)
        )

    return groups


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


class UpdateGrouper:
    """Resolve declared dependencies against a registry and group them.

    Args:
        lookup: Registry capability. Lookups run concurrently; the
            implementation is responsible for bounding parallelism.
    """

    def __init__(self, lookup: RegistryLookup) -> None:
        if lookup is None:
            raise TypeError("lookup must not be None; pass a RegistryLookup")
        self.lookup = lookup

    async def resolve(self, dependencies: Mapping[str, str]) -> List[ResolvedPackage]:
        """Return the dependencies that need an update, in mapping order.

        Declarations without a registry version are skipped without a
        lookup. A failed lookup only drops its own package.
        """
        candidates = [
            (name, expr)
            for name, expr in dependencies.items()
            if strip_range(expr) is not None
        ]
        skipped = len(dependencies) - len(candidates)
        if skipped:
            logger.debug("Skipping %d non-registry declaration(s)", skipped)

        results = await asyncio.gather(
            *(self.lookup.get_latest(name) for name, _ in candidates),
            return_exceptions=True,
        )

        resolved: List[ResolvedPackage] = []
        for (name, expr), result in zip(candidates, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning("Registry lookup failed for %s: %s", name, result)
                continue

            pkg = resolve_package(name, expr, result)
            if pkg is not None:
                logger.info("%s", pkg)
                resolved.append(pkg)

        return resolved

    async def group_updates(self, dependencies: Mapping[str, str]) -> List[UpdateGroup]:
        """Resolve *dependencies* and return their update groups."""
        packages = await self.resolve(dependencies)
        groups = build_groups(packages)
        logger.info(
            "%d outdated package(s) in %d group(s)", len(packages), len(groups)
        )
        return groups
