"""
GitHub Actions helpers for depmatrix.

Action inputs arrive as plain strings (``INPUT_<NAME>`` environment
variables) and step outputs are appended to the file named by
``GITHUB_OUTPUT``. Outside a runner, outputs fall back to stdout.
"""

from __future__ import annotations

import os
import re
import sys
import uuid
from typing import IO, List, Optional

from depmatrix.constants import ENV_GITHUB_OUTPUT
from depmatrix.utils.filesystem import append_text
from depmatrix.utils.logger import get_logger

logger = get_logger("actions")

_LIST_SEPARATOR = re.compile(r"[\n,]+")


def get_string_as_array(value: Optional[str]) -> List[str]:
    """Split a newline- or comma-separated input into trimmed items.

    Examples:
        >>> get_string_as_array("apps/web, apps/api\\n\\ntools")
        ['apps/web', 'apps/api', 'tools']
    """
    if not value:
        return []
    return [item.strip() for item in _LIST_SEPARATOR.split(value) if item.strip()]


def set_output(name: str, value: str, *, stream: Optional[IO[str]] = None) -> None:
    """Publish a step output.

    Multi-line values use the heredoc form with a random delimiter.
    Without ``GITHUB_OUTPUT`` the bare value is written to *stream*
    (stdout by default).
    """
    output_file = os.environ.get(ENV_GITHUB_OUTPUT)
    if not output_file:
        (stream or sys.stdout).write(f"{value}\n")
        return

    if "\n" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        record = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        record = f"{name}={value}\n"

    append_text(output_file, record)
    logger.debug("Wrote output %r to %s", name, output_file)
