"""
Core functionality exports for depmatrix.

    from depmatrix.core import DependencyCollector, UpdateGrouper
"""

from __future__ import annotations

from depmatrix.core.assembler import assemble, parse_limit, serialize
from depmatrix.core.collector import (
    DependencyCollector,
    filter_excluded,
    merge_dependencies,
)
from depmatrix.core.formatting import changelog_body, identifier
from depmatrix.core.grouper import UpdateGrouper, build_groups
from depmatrix.core.registry import (
    NpmRegistry,
    RegistryLookup,
    RegistryMetadata,
    git_repository_url,
)

__all__ = [
    "DependencyCollector",
    "merge_dependencies",
    "filter_excluded",
    "NpmRegistry",
    "RegistryLookup",
    "RegistryMetadata",
    "git_repository_url",
    "UpdateGrouper",
    "build_groups",
    "identifier",
    "changelog_body",
    "assemble",
    "parse_limit",
    "serialize",
]
