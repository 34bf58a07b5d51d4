"""Identifiers and changelog text for update groups.

:func:`identifier` turns a group's member names into a short code that is
safe in branch names and URLs. It is a 32-bit rolling hash, so distinct
groups can collide in rare cases; it is kept stable because consumers key
branches and pull requests on it across runs.
"""

from __future__ import annotations

import re
from typing import Iterable, List

from depmatrix.models.package import ResolvedPackage

__all__ = ["identifier", "changelog_body", "slug"]

#: Digits, lower-case and upper-case letters up to ``Y``; ``Z`` marks a
#: negative hash.
_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXY"
_BASE = len(_ALPHABET)  # 61


def _hash32(text: str) -> int:
    """Java-style ``h = h * 31 + c`` hash wrapped to a signed 32-bit int."""
    value = 0
    for char in text:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def _to_base61(number: int) -> str:
    if number == 0:
        return _ALPHABET[0]

    digits: List[str] = []
    while number:
        number, remainder = divmod(number, _BASE)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits))


def identifier(names: Iterable[str]) -> str:
    """Return the short stable code for a sequence of package names.

    Names are joined in the given order without a separator before
    hashing, so the same sequence always yields the same code.

    Example::

        >>> identifier(["left-pad"]) == identifier(["left-pad"])
        True
    """
    value = _hash32("".join(names))
    encoded = _to_base61(abs(value))
    if value < 0:
        encoded = "-" + encoded
    return encoded.replace("-", "Z")


def changelog_body(packages: Iterable[ResolvedPackage]) -> str:
    """Render one markdown bullet per package.

    Example::

        - Bumps [left-pad](https://github.com/x/left-pad) from 1.2.0 to 1.3.0
    """
    text = ""
    for pkg in packages:
        if pkg.repository_url:
            title = f"[{pkg.name}]({pkg.repository_url})"
        else:
            title = pkg.name
        text += f"- Bumps {title} from {pkg.current_version} to {pkg.latest_version}\n"
    return text


def slug(name: str, version: str) -> str:
    """Readable branch-name key such as ``babel_core-7_1_0``."""
    key = re.sub(r"\W", "_", name.lower().replace("@", "", 1))
    return f"{key}-{re.sub(r'[^0-9]', '_', version)}"
