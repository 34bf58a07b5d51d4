"""
depmatrix: grouped dependency update matrices for npm monorepos

depmatrix scans a multi-package JavaScript project for outdated npm
dependencies, groups them by publishing scope and target version, and
emits a CI build matrix with one entry per update group, ready to drive
one automated pull request per group.

Features include:
    • Recursive discovery of ``packages/*`` workspaces
    • "Lowest version wins" reconciliation across packages
    • Scope and ``@types`` aware grouping
    • Major / minor / patch classification per group
    • Stable group identifiers and markdown changelogs
    • GitHub Actions input/output integration
"""

from __future__ import annotations

from depmatrix.__version__ import __version__

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "depmatrix Contributors"
__license__ = "Apache-2.0"
__description__ = "Grouped npm dependency update matrices for CI."

__all__ = [
    "__version__",
]
