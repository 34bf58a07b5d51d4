"""Dependency collection across an npm monorepo.

Walks the workspace root, every nested ``packages/<name>`` directory
below it, and any extra directories requested by the caller, and folds
all declared ``dependencies`` and ``devDependencies`` into one flat
``name -> range`` mapping.

When the same dependency is declared more than once, the merged entry
keeps the *lowest* declared version (see :func:`merge_dependencies`), so
the update computed later is the smallest bump that satisfies every
package in the tree.

Typical usage::

    collector = DependencyCollector(Path("."))
    declared = collector.collect(["apps/web", "tools"])
    declared = filter_excluded(declared, ["@internal/*"])
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Pattern, Set

from depmatrix.constants import (
    DEPENDENCY_SECTIONS,
    MAX_SCAN_DEPTH,
    PACKAGES_DIR_NAME,
)
from depmatrix.exceptions import FileOperationError, ManifestError
from depmatrix.utils.filesystem import LocalFileSystem
from depmatrix.utils.logger import get_logger
from depmatrix.utils.version_utils import lower, strip_range

logger = get_logger("collector")

__all__ = [
    "DependencyCollector",
    "merge_dependencies",
    "compile_exclude_pattern",
    "filter_excluded",
]


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def merge_dependencies(
    base: Mapping[str, str],
    incoming: Mapping[str, str],
) -> Dict[str, str]:
    """Merge *incoming* into a copy of *base*, keeping the lowest version.

    Names only present in *incoming* are inserted unchanged. Names present
    in both become ``lower(base[name], incoming[name])``, except that the
    existing value is kept as written when its floor is already the lowest.
    Merging the same mapping twice therefore changes nothing.

    Example::

        >>> merge_dependencies({"react": "^17.0.2"}, {"react": "^16.14.0"})
        {'react': '16.14.0'}
    """
    result = dict(base)

    for name, version in incoming.items():
        if name not in result:
            result[name] = version
        else:
            floor = lower(result[name], version)
            if floor != strip_range(result[name]):
                result[name] = floor

    return result


def compile_exclude_pattern(pattern: str) -> Pattern[str]:
    """Compile a package glob where ``*`` matches any run of characters.

    Every other character is literal and the match is anchored at both
    ends, so ``@foo/*`` matches ``@foo/bar`` but not ``@foobar/baz``.
    """
    parts = (re.escape(part) for part in pattern.split("*"))
    return re.compile("^" + ".*".join(parts) + "$")


def filter_excluded(
    dependencies: Mapping[str, str],
    patterns: Iterable[str],
) -> Dict[str, str]:
    """Drop every dependency whose name matches one of *patterns*."""
    compiled = [compile_exclude_pattern(p) for p in patterns]
    if not compiled:
        return dict(dependencies)

    result: Dict[str, str] = {}
    for name, version in dependencies.items():
        if any(regex.match(name) for regex in compiled):
            logger.debug("Excluding %s", name)
            continue
        result[name] = version

    return result


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------


class DependencyCollector:
    """Gather declared dependencies from a project tree.

    Args:
        root: Workspace root. Extra directories are resolved against it.
        filesystem: Object providing ``is_dir``, ``read_manifest`` and
            ``list_subdirectories``. Defaults to :class:`LocalFileSystem`.
        max_depth: Maximum number of nested ``packages/`` levels followed.
    """

    def __init__(
        self,
        root: Path,
        filesystem: Optional[Any] = None,
        max_depth: int = MAX_SCAN_DEPTH,
    ) -> None:
        self.root = Path(root)
        self.filesystem = filesystem or LocalFileSystem()
        self.max_depth = max_depth

    def collect(self, extra_paths: Iterable[str] = ()) -> Dict[str, str]:
        """Collect dependencies from the root and each extra path.

        Args:
            extra_paths: Directories relative to the root, walked in order
                after the root itself.

        Returns:
            Merged ``name -> range`` mapping.

        Raises:
            FileOperationError: The workspace root is not a directory.
        """
        if not self.filesystem.is_dir(self.root):
            raise FileOperationError(
                f"Workspace root is not a directory: {self.root}",
                file_path=str(self.root),
                operation="read",
            )

        dependencies = self.walk(self.root)

        for extra in extra_paths:
            directory = self.root / extra
            if not self.filesystem.is_dir(directory):
                logger.warning("Skipping missing directory: %s", directory)
                continue
            dependencies = merge_dependencies(dependencies, self.walk(directory))

        logger.info("Collected %d declared dependencies", len(dependencies))
        return dependencies

    def walk(self, directory: Path) -> Dict[str, str]:
        """Collect dependencies from *directory* and its ``packages/`` tree."""
        return self._walk(directory, depth=0, visited=set())

    def read_directory(self, directory: Path) -> Dict[str, str]:
        """Return the dependencies declared directly in *directory*.

        Missing or broken manifests contribute nothing.
        """
        try:
            manifest = self.filesystem.read_manifest(directory)
        except (FileOperationError, ManifestError) as exc:
            logger.warning("Ignoring unreadable manifest in %s: %s", directory, exc)
            return {}

        if manifest is None:
            logger.debug("No manifest in %s", directory)
            return {}

        dependencies: Dict[str, str] = {}
        for section in DEPENDENCY_SECTIONS:
            declared = manifest.get(section) or {}
            if not isinstance(declared, dict):
                logger.warning("Ignoring malformed %s in %s", section, directory)
                continue
            entries = {
                name: version
                for name, version in declared.items()
                if isinstance(version, str)
            }
            dependencies = merge_dependencies(dependencies, entries)

        return dependencies

    def _walk(self, directory: Path, depth: int, visited: Set[Path]) -> Dict[str, str]:
        key = directory.resolve()
        if key in visited:
            logger.debug("Already scanned %s", directory)
            return {}
        visited.add(key)

        dependencies = self.read_directory(directory)

        packages_dir = directory / PACKAGES_DIR_NAME
        if not self.filesystem.is_dir(packages_dir):
            return dependencies

        if depth >= self.max_depth:
            logger.warning("Not descending into %s: nesting too deep", packages_dir)
            return dependencies

        children: List[Path] = self.filesystem.list_subdirectories(packages_dir)
        for child in children:
            dependencies = merge_dependencies(
                dependencies, self._walk(child, depth + 1, visited)
            )

        return dependencies
