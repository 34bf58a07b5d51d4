"""
Centralized constants for depmatrix.

This module defines immutable configuration values used across depmatrix,
including registry endpoints, network settings, manifest layout, GitHub
Actions integration names, and logging formats. All values are intended
to be treated as read-only.
"""

from typing import Final

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

#: HTTP User-Agent template used for outbound requests.
USER_AGENT_TEMPLATE: Final[str] = "depmatrix/{version} (https://github.com/depmatrix/depmatrix)"

# ---------------------------------------------------------------------------
# npm registry
# ---------------------------------------------------------------------------

#: Base URL of the public npm registry.
DEFAULT_REGISTRY_URL: Final[str] = "https://registry.npmjs.org"

#: Scope used by DefinitelyTyped declaration packages.
TYPES_SCOPE: Final[str] = "@types"

# ---------------------------------------------------------------------------
# HTTP configuration
# ---------------------------------------------------------------------------

#: Default network timeout in seconds.
DEFAULT_TIMEOUT: Final[int] = 30

#: Maximum number of retries for failed HTTP requests.
DEFAULT_MAX_RETRIES: Final[int] = 3

#: Maximum number of registry lookups in flight at once.
DEFAULT_MAX_CONCURRENCY: Final[int] = 10

# ---------------------------------------------------------------------------
# Project layout
# ---------------------------------------------------------------------------

#: Manifest file read from every scanned directory.
MANIFEST_FILE_NAME: Final[str] = "package.json"

#: Conventional directory holding nested workspace packages.
PACKAGES_DIR_NAME: Final[str] = "packages"

#: Manifest sections whose entries are collected.
DEPENDENCY_SECTIONS: Final[tuple] = ("dependencies", "devDependencies")

#: Maximum nesting of ``packages/`` directories followed during a scan.
MAX_SCAN_DEPTH: Final[int] = 16

#: Maximum allowed file size (in bytes) when reading manifests.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# GitHub Actions integration
# ---------------------------------------------------------------------------

#: Environment variables carrying action inputs.
ENV_INPUT_DIRECTORIES: Final[str] = "INPUT_DIRECTORIES"
ENV_INPUT_EXCLUDE_PACKAGES: Final[str] = "INPUT_EXCLUDE-PACKAGES"
ENV_INPUT_LIMIT: Final[str] = "INPUT_LIMIT"

#: File that step outputs are appended to.
ENV_GITHUB_OUTPUT: Final[str] = "GITHUB_OUTPUT"

#: Set to ``1`` by the runner when debug logging is enabled.
ENV_RUNNER_DEBUG: Final[str] = "RUNNER_DEBUG"

#: Default step output name for the build matrix.
DEFAULT_OUTPUT_NAME: Final[str] = "matrix"

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
