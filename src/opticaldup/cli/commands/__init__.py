"""Subcommands of the opticaldup CLI."""
