"""
Command-line interface for depmatrix.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import logging
from pathlib import Path
from typing import Optional

import click

from depmatrix.config import load_config
from depmatrix.__version__ import __version__
from depmatrix.context import DepMatrixContext
from depmatrix.exceptions import ConfigError, DepMatrixError
from depmatrix.utils.logger import get_logger, level_from_verbosity, setup_logging
from depmatrix.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="DEPMATRIX_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="DEPMATRIX_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="depmatrix",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """depmatrix: grouped npm dependency update matrices.

    \b
    Available commands:
      depmatrix matrix             Emit the update build matrix
      depmatrix deps               Show merged declared dependencies

    \b
    Examples:
      depmatrix matrix
      depmatrix matrix --format table
      depmatrix -v matrix --limit 5

    Use ``depmatrix COMMAND --help`` for command-specific options.
    """
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    level = level_from_verbosity(verbose)
    setup_logging(level=level, verbose=level <= logging.DEBUG)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    state = ctx.ensure_object(DepMatrixContext)
    state.config_path = config or loaded_config.source_path
    state.color = color
    state.verbose = verbose
    state.config = loaded_config

    logger.debug(
        "depmatrix %s, log level %s, config %s",
        __version__,
        logging.getLevelName(level),
        state.config_path or "<defaults>",
    )


# Register CLI subcommands
from depmatrix.commands.deps import deps  # noqa: E402
from depmatrix.commands.matrix import matrix  # noqa: E402

cli.add_command(matrix)
cli.add_command(deps)


def main() -> int:
    """Main entry point for the depmatrix CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.exceptions.Exit as exc:
        return exc.exit_code

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    except DepMatrixError as exc:
        print_error(str(exc))
        logger.debug(
            "DepMatrixError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except (KeyboardInterrupt, click.exceptions.Abort):
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1

