"""
Version range helpers for depmatrix.

npm range expressions (``^1.2.0``, ``~1.0.2``, ``>=3``) are reduced to a
bare version before any comparison. Comparison only looks at the numeric
``major.minor.patch`` triple: pre-release and build suffixes are carried
along for display but ignored when ordering, so ``1.0.0-beta.1`` and
``1.0.0`` compare equal.

Every helper is total. Expressions that do not describe a registry
version (URLs, local paths, protocol specs, ``*``) yield ``None`` from
:func:`strip_range` instead of raising.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional, Tuple

#: Update classifications returned by :func:`diff_kind`.
MAJOR = "major"
MINOR = "minor"
PATCH = "patch"
NONE = "none"

_VERSION_TOKEN = re.compile(
    r"(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+))?"
    r"(?:\.(?P<patch>\d+))?"
    r"(?P<suffix>[-+][0-9A-Za-z.+-]*)?"
)

# URLs, file:/link:/workspace:/npm: protocols and user/repo shorthands
_NOT_A_REGISTRY_RANGE = re.compile(r"[:/\\]")


class SemVer(NamedTuple):
    """A bare version split into its numeric triple and raw text."""

    major: int
    minor: int
    patch: int
    text: str

    @property
    def release(self) -> Tuple[int, int, int]:
        return self.major, self.minor, self.patch

    def __str__(self) -> str:
        return self.text


def parse_version(expr: Optional[str]) -> Optional[SemVer]:
    """Parse the first version token of *expr*.

    Args:
        expr: A bare version or npm range expression.

    Returns:
        The parsed :class:`SemVer`, or ``None`` when *expr* holds no
        registry version.

    Examples:
        >>> parse_version("^1.2.0").release
        (1, 2, 0)
        >>> parse_version("git+https://github.com/x/y.git") is None
        True
    """
    if not isinstance(expr, str):
        return None

    candidate = expr.strip()
    if not candidate or _NOT_A_REGISTRY_RANGE.search(candidate):
        return None

    match = _VERSION_TOKEN.search(candidate)
    if match is None:
        return None

    return SemVer(
        major=int(match.group("major")),
        minor=int(match.group("minor") or 0),
        patch=int(match.group("patch") or 0),
        text=match.group(0),
    )


def strip_range(expr: Optional[str]) -> Optional[str]:
    """Drop any leading range operator and return the bare version.

    Examples:
        >>> strip_range("^1.2.0")
        '1.2.0'
        >>> strip_range(">=2.0.0-rc.1")
        '2.0.0-rc.1'
        >>> strip_range("file:../local") is None
        True
    """
    parsed = parse_version(expr)
    return parsed.text if parsed else None


def is_at_least(a: str, b: str) -> bool:
    """Return True when version *a* is numerically >= version *b*.

    Either side may carry a range operator. An unparseable side never
    satisfies the comparison.
    """
    left = parse_version(a)
    right = parse_version(b)
    if left is None or right is None:
        return False
    return left.release >= right.release


def lower(a: str, b: str) -> str:
    """Return the bare form of whichever version is not greater.

    Ties resolve to *a*. When only one side is a registry version, that
    side wins; when neither is, *a* is returned unchanged.

    Examples:
        >>> lower("^1.0.0", "~1.0.2")
        '1.0.0'
        >>> lower("2.0.0", "2.0.0-beta.1")
        '2.0.0'
    """
    left = parse_version(a)
    right = parse_version(b)

    if left is None and right is None:
        return a
    if left is None:
        return right.text  # type: ignore[union-attr]
    if right is None:
        return left.text

    return right.text if right.release < left.release else left.text


def diff_kind(current: str, latest: str) -> str:
    """Classify the change from *current* to *latest*.

    Returns:
        One of ``"major"``, ``"minor"``, ``"patch"`` or ``"none"``.
        ``"none"`` is also returned when either side cannot be parsed.

    Examples:
        >>> diff_kind("1.2.0", "1.3.0")
        'minor'
        >>> diff_kind("1.0.0-beta.1", "1.0.0")
        'none'
    """
    old = parse_version(current)
    new = parse_version(latest)
    if old is None or new is None or old.release == new.release:
        return NONE

    if old.major != new.major:
        return MAJOR
    if old.minor != new.minor:
        return MINOR
    return PATCH
