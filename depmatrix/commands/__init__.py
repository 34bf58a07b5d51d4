"""CLI subcommands for depmatrix."""
