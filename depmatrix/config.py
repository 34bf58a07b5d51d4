"""Configuration file loader for depmatrix.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``depmatrix.toml``: settings under ``[depmatrix]`` table
- ``pyproject.toml``: settings under ``[tool.depmatrix]`` table

Discovery order:

1. Explicit path from ``--config`` or ``DEPMATRIX_CONFIG``
2. ``depmatrix.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.depmatrix]`` section

Configuration precedence: defaults < config file < environment < CLI args.
Environment and CLI values are applied by the command layer.

Example (``depmatrix.toml``)::

    [depmatrix]
    directories = ["apps/web", "apps/api"]
    exclude_packages = ["@internal/*", "typescript"]
    limit = 10
"""

from __future__ import annotations


import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field, replace

from depmatrix.exceptions import ConfigError
from depmatrix.core.assembler import parse_limit
from depmatrix.utils.actions import get_string_as_array
from depmatrix.utils.logger import get_logger
from depmatrix.constants import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_REGISTRY_URL,
    DEFAULT_TIMEOUT,
)

logger = get_logger("config")


@dataclass
class DepMatrixConfig:
    """Parsed and validated depmatrix configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        directories: Extra directories, relative to the workspace root,
            scanned after the root.
        exclude_packages: Package globs removed before grouping.
        limit: Maximum number of groups emitted, or ``None``.
        registry_url: npm registry base URL.
        max_concurrency: Maximum registry requests in flight.
        timeout: Registry request timeout in seconds.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    directories: List[str] = field(default_factory=list)
    exclude_packages: List[str] = field(default_factory=list)
    limit: Optional[int] = None
    registry_url: str = DEFAULT_REGISTRY_URL
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    timeout: int = DEFAULT_TIMEOUT

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging."""
        return {
            "directories": self.directories,
            "exclude_packages": self.exclude_packages,
            "limit": self.limit,
            "registry_url": self.registry_url,
            "max_concurrency": self.max_concurrency,
            "timeout": self.timeout,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    depmatrix_toml = cwd / "depmatrix.toml"
    if depmatrix_toml.is_file():
        logger.debug("Found depmatrix.toml: %s", depmatrix_toml)
        return depmatrix_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_depmatrix_section(pyproject_toml):
        logger.debug("Found [tool.depmatrix] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_depmatrix_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.depmatrix] section.

    An unreadable pyproject.toml is treated as not configuring depmatrix.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    tool = raw.get("tool", {})
    return isinstance(tool, dict) and "depmatrix" in tool


def load_config(config_path: Optional[Path] = None) -> DepMatrixConfig:
    """Load and validate depmatrix configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`DepMatrixConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return DepMatrixConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("depmatrix", {})
    else:
        section = raw.get("depmatrix", {})

    if not section:
        logger.debug("Config file found but no depmatrix section, using defaults")
        return DepMatrixConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _string_list(value: Any, *, option: str, config_path: str) -> List[str]:
    """Accept a list of strings or a newline/comma separated string."""
    if isinstance(value, str):
        return get_string_as_array(value)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return [item.strip() for item in value if item.strip()]
    raise ConfigError(
        f"{option} must be a string or a list of strings, got {type(value).__name__}",
        config_path=config_path,
        option=option,
    )


def _positive_int(value: Any, *, option: str, config_path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(
            f"{option} must be a positive integer, got {value!r}",
            config_path=config_path,
            option=option,
        )
    return value


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> DepMatrixConfig:
    """Parse and validate a ``[depmatrix]`` or ``[tool.depmatrix]`` table.

    Raises:
        ConfigError: Unknown keys or incorrect types.
    """
    config = DepMatrixConfig()

    known_top = {
        "directories",
        "exclude_packages",
        "limit",
        "registry_url",
        "max_concurrency",
        "timeout",
    }

    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=config_path,
        )

    if "directories" in section:
        config.directories = _string_list(
            section["directories"], option="directories", config_path=config_path
        )

    if "exclude_packages" in section:
        config.exclude_packages = _string_list(
            section["exclude_packages"],
            option="exclude_packages",
            config_path=config_path,
        )

    if "limit" in section:
        config.limit = _positive_int(
            section["limit"], option="limit", config_path=config_path
        )

    if "registry_url" in section:
        val = section["registry_url"]
        if not isinstance(val, str) or not val.strip():
            raise ConfigError(
                f"registry_url must be a non-empty string, got {val!r}",
                config_path=config_path,
                option="registry_url",
            )
        config.registry_url = val.strip()

    if "max_concurrency" in section:
        config.max_concurrency = _positive_int(
            section["max_concurrency"],
            option="max_concurrency",
            config_path=config_path,
        )

    if "timeout" in section:
        config.timeout = _positive_int(
            section["timeout"], option="timeout", config_path=config_path
        )

    return config


def apply_overrides(
    config: DepMatrixConfig,
    *,
    directories: Optional[str] = None,
    exclude_packages: Optional[str] = None,
    limit: Optional[str] = None,
    registry_url: Optional[str] = None,
) -> DepMatrixConfig:
    """Layer environment/CLI values over a loaded configuration.

    ``None`` leaves the file value in place. List inputs are raw
    newline/comma separated strings as delivered by action inputs; an
    empty string also leaves the file value in place.

    Returns:
        A new :class:`DepMatrixConfig`; *config* is not modified.
    """
    merged = replace(config)

    if directories:
        merged.directories = get_string_as_array(directories)
    if exclude_packages:
        merged.exclude_packages = get_string_as_array(exclude_packages)
    if limit is not None and limit.strip():
        merged.limit = parse_limit(limit)
    if registry_url:
        merged.registry_url = registry_url.strip()

    return merged
