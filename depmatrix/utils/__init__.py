"""
Utility helpers for depmatrix.

This package provides reusable utilities used across depmatrix, including:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Read-only filesystem helpers
- Async HTTP client utilities
- Version range helpers
- GitHub Actions input/output helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from depmatrix.utils.filesystem import (
    LocalFileSystem,
    append_text,
    safe_read_file,
)

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from depmatrix.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    level_from_verbosity,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from depmatrix.utils.console import (
    colorize_update_type,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# HTTP utilities
# ---------------------------------------------------------------------------

from depmatrix.utils.http import HTTPClient

# ---------------------------------------------------------------------------
# Version utilities
# ---------------------------------------------------------------------------

from depmatrix.utils.version_utils import (
    diff_kind,
    is_at_least,
    lower,
    strip_range,
)

# ---------------------------------------------------------------------------
# GitHub Actions utilities
# ---------------------------------------------------------------------------

from depmatrix.utils.actions import get_string_as_array, set_output

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    "colorize_update_type",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    "level_from_verbosity",
    # Filesystem
    "LocalFileSystem",
    "append_text",
    "safe_read_file",
    # HTTP
    "HTTPClient",
    # Version utilities
    "strip_range",
    "is_at_least",
    "lower",
    "diff_kind",
    # GitHub Actions
    "get_string_as_array",
    "set_output",
]
