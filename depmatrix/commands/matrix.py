"""Matrix command implementation for depmatrix.

Scans a project for outdated npm dependencies and emits the grouped
update build matrix.

The command orchestrates four core components:

1. **DependencyCollector**: merges ``package.json`` declarations from the
   root, its ``packages/*`` tree and any extra directories.
2. **filter_excluded**: drops packages matching the exclude globs.
3. **UpdateGrouper**: queries the registry (through :class:`NpmRegistry`)
   and groups what is outdated.
4. **assemble**: applies the group limit and builds ``{"include": [...]}``.

Typical usage::

    # Print the matrix for the current project
    $ depmatrix matrix

    # Scan extra directories, skip internal packages, cap at 5 groups
    $ depmatrix matrix --directories "apps/web,apps/api" \\
          --exclude-packages "@internal/*" --limit 5

    # Human-readable report
    $ depmatrix matrix --format table

Inside GitHub Actions the options are read from the action inputs and the
matrix is written to the ``matrix`` step output.
"""

from __future__ import annotations

import sys
import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from depmatrix.config import DepMatrixConfig, apply_overrides
from depmatrix.constants import (
    DEFAULT_OUTPUT_NAME,
    ENV_INPUT_DIRECTORIES,
    ENV_INPUT_EXCLUDE_PACKAGES,
    ENV_INPUT_LIMIT,
)
from depmatrix.context import pass_context, DepMatrixContext
from depmatrix.core import (
    DependencyCollector,
    NpmRegistry,
    UpdateGrouper,
    assemble,
    filter_excluded,
    serialize,
)
from depmatrix.exceptions import DepMatrixError
from depmatrix.models import UpdateGroup
from depmatrix.utils import (
    HTTPClient,
    colorize_update_type,
    get_logger,
    print_error,
    print_success,
    print_table,
    set_output,
)

logger = get_logger("commands.matrix")


@click.command()
@click.argument(
    "root",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--directories",
    "-d",
    envvar=ENV_INPUT_DIRECTORIES,
    help="Extra directories to scan, comma or newline separated.",
)
@click.option(
    "--exclude-packages",
    "-x",
    envvar=ENV_INPUT_EXCLUDE_PACKAGES,
    help="Package globs to skip ('*' wildcard), comma or newline separated.",
)
@click.option(
    "--limit",
    "-l",
    envvar=ENV_INPUT_LIMIT,
    help="Maximum number of groups to emit.",
)
@click.option(
    "--registry-url",
    help="npm registry base URL.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "table"], case_sensitive=False),
    default="json",
    help="Output format.",
)
@click.option(
    "--output-name",
    default=DEFAULT_OUTPUT_NAME,
    show_default=True,
    help="Step output name used when GITHUB_OUTPUT is set.",
)
@pass_context
def matrix(
    ctx: DepMatrixContext,
    root: Path,
    directories: Optional[str],
    exclude_packages: Optional[str],
    limit: Optional[str],
    registry_url: Optional[str],
    format: str,
    output_name: str,
) -> None:
    """Emit the grouped update matrix for ROOT (default: current directory).

    Every update group becomes one ``include`` entry carrying its
    packages, scope, version pair, semver label, display name,
    identifier and markdown changelog.

    Exits:
        0 on success (including "nothing to update"), 1 on error.
    """
    config = apply_overrides(
        ctx.config or DepMatrixConfig(),
        directories=directories,
        exclude_packages=exclude_packages,
        limit=limit,
        registry_url=registry_url,
    )
    logger.debug("Effective configuration: %s", config.to_log_dict())

    try:
        groups = asyncio.run(_collect_groups(root, config))
    except DepMatrixError as e:
        print_error(f"{e}")
        sys.exit(1)

    result = assemble(groups, config.limit)
    logger.debug("Matrix: %s", serialize(result))

    if format == "table":
        _display_table(groups[: config.limit] if config.limit else groups)
        return

    set_output(output_name, serialize(result))


# ---------------------------------------------------------------------------
# Async orchestration
# ---------------------------------------------------------------------------


async def _collect_groups(root: Path, config: DepMatrixConfig) -> List[UpdateGroup]:
    """Collect, filter, resolve and group dependencies of *root*.

    Raises:
        DepMatrixError: The workspace root cannot be scanned.
    """
    logger.info("Scanning %s", root)

    collector = DependencyCollector(root)
    declared = collector.collect(config.directories)
    declared = filter_excluded(declared, config.exclude_packages)

    if not declared:
        logger.warning("No dependencies found under %s", root)
        return []

    async with HTTPClient(timeout=config.timeout) as http:
        registry = NpmRegistry(
            http,
            registry_url=config.registry_url,
            concurrent_limit=config.max_concurrency,
        )
        grouper = UpdateGrouper(registry)
        return await grouper.group_updates(declared)


# ---------------------------------------------------------------------------
# Display renderers
# ---------------------------------------------------------------------------


def _display_table(groups: List[UpdateGroup]) -> None:
    """Render update groups as a Rich table.

    Example::

        ┏━━━━━━━━━━━━━━┳━━━━━━━━━┳━━━━━━━━┳━━━━━━━┳━━━━━━━━━━━━━━━━━━━━━━━━┓
        ┃ Group        ┃ Current ┃ Latest ┃ Type  ┃ Packages               ┃
        ┡━━━━━━━━━━━━━━╇━━━━━━━━━╇━━━━━━━━╇━━━━━━━╇━━━━━━━━━━━━━━━━━━━━━━━━┩
        │ babel packa… │ 7.0.0   │ 7.24.0 │ minor │ @babel/core            │
        │              │         │        │       │ @babel/preset-env      │
        └──────────────┴─────────┴────────┴───────┴────────────────────────┘
    """
    if not groups:
        print_success("All dependencies are up to date!")
        return

    data: List[Dict[str, Any]] = [
        {
            "Group": group.display_name,
            "Current": group.group_current_version,
            "Latest": group.group_latest_version,
            "Type": colorize_update_type(group.to_json()["semverLabel"]),
            "Packages": "\n".join(group.package_names),
            "ID": group.identifier,
        }
        for group in groups
    ]

    column_styles: Dict[str, Dict[str, Any]] = {
        "Group": {"style": "bold cyan", "no_wrap": True},
        "Current": {"justify": "center", "style": "dim"},
        "Latest": {"justify": "center", "style": "bold green"},
        "Type": {"justify": "center"},
        "Packages": {"justify": "left"},
        "ID": {"justify": "center", "style": "dim"},
    }

    print_table(
        data,
        title="Dependency Update Groups",
        column_styles=column_styles,
        show_row_lines=True,
    )
