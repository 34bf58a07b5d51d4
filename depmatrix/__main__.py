"""
Executable module for depmatrix.

Running:
    python -m depmatrix

is equivalent to:
    depmatrix

This module simply forwards execution to the CLI entrypoint defined in
`depmatrix.cli`.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Report a CLI import failure on stderr."""
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from depmatrix.__version__ import __version__

        sys.stderr.write(f"depmatrix version: {__version__}\n")
    except ImportError:
        sys.stderr.write("depmatrix version: <unknown>\n")
    sys.stderr.write("\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """
    Main entrypoint when executing `python -m depmatrix`.

    Returns:
        Exit code returned by the CLI.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from depmatrix.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
