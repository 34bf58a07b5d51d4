"""Build matrix assembly.

Downstream CI fans the ``include`` array out into one job per entry, so
the output contract is exactly ``{"include": [group, ...]}``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence, Union

from depmatrix.models.group import UpdateGroup
from depmatrix.utils.logger import get_logger

logger = get_logger("assembler")

__all__ = ["parse_limit", "assemble", "serialize"]


def parse_limit(value: Union[None, int, str]) -> Optional[int]:
    """Normalize a user-supplied group limit.

    Empty values mean "no limit". Values that are not positive integers
    are ignored with a warning.

    Examples:
        >>> parse_limit("3")
        3
        >>> parse_limit("") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            number = int(value)
        except ValueError:
            logger.warning("Ignoring non-numeric limit %r", value)
            return None
    else:
        number = value

    if number < 1:
        logger.warning("Ignoring non-positive limit %d", number)
        return None
    return number


def assemble(
    groups: Sequence[UpdateGroup],
    limit: Optional[int] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """Return the build matrix, keeping at most *limit* groups."""
    selected = list(groups)
    if limit is not None:
        if len(selected) > limit:
            logger.info("Limiting matrix to %d of %d group(s)", limit, len(selected))
        selected = selected[:limit]

    return {"include": [group.to_json() for group in selected]}


def serialize(matrix: Dict[str, Any], *, indent: Optional[int] = None) -> str:
    """Serialize the matrix to JSON (compact unless *indent* is given)."""
    if indent is None:
        return json.dumps(matrix, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(matrix, indent=indent, ensure_ascii=False)
