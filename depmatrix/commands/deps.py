"""Deps command implementation for depmatrix.

Prints the merged ``name -> range`` mapping that ``depmatrix matrix``
would send to the registry, without any network access. Useful for
checking which declaration wins when packages disagree.

Typical usage::

    $ depmatrix deps
    $ depmatrix deps --directories apps/web --exclude-packages "@internal/*"
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import Optional

import click

from depmatrix.config import DepMatrixConfig, apply_overrides
from depmatrix.constants import ENV_INPUT_DIRECTORIES, ENV_INPUT_EXCLUDE_PACKAGES
from depmatrix.context import pass_context, DepMatrixContext
from depmatrix.core import DependencyCollector, filter_excluded
from depmatrix.exceptions import DepMatrixError
from depmatrix.utils import get_logger, print_error

logger = get_logger("commands.deps")


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
@pass_context
def deps(
    ctx: DepMatrixContext,
    root: Path,
    directories: Optional[str],
    exclude_packages: Optional[str],
) -> None:
    """Print the merged declared dependencies of ROOT as JSON."""
    config = apply_overrides(
        ctx.config or DepMatrixConfig(),
        directories=directories,
        exclude_packages=exclude_packages,
    )

    try:
        declared = DependencyCollector(root).collect(config.directories)
    except DepMatrixError as e:
        print_error(f"{e}")
        sys.exit(1)

    declared = filter_excluded(declared, config.exclude_packages)
    click.echo(json.dumps(declared, indent=2, sort_keys=True))
