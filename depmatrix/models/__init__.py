"""
Unified data model exports for depmatrix.

Example:
    >>> from depmatrix.models import ResolvedPackage, UpdateGroup
"""

from __future__ import annotations

from depmatrix.models.package import ResolvedPackage
from depmatrix.models.group import UpdateGroup

__all__ = [
    "ResolvedPackage",
    "UpdateGroup",
]
