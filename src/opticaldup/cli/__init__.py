"""Command line interface (opticaldup)."""

from opticaldup.cli.main import cli, main

__all__ = ["cli", "main"]
