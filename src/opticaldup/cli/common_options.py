"""Shared Click options for opticaldup CLI commands.

This module defines reusable Click option decorators to ensure consistency
between the ``mark`` and ``parse`` subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, TypeVar

import click

F = TypeVar("F", bound=Callable[..., None])


def input_option(func: F) -> F:
    """Input duplicate-set table option."""
    return click.option(
        "-i",
        "--input",
        "input_file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        required=False,
        help="Tab-separated duplicate set table (set_id, read_name[, read_group, library])",
    )(func)


def output_option(func: F) -> F:
    """Output table option."""
    return click.option(
        "-o",
        "--output",
        "output_file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Output table with an optical_duplicate column",
    )(func)


def config_option(func: F) -> F:
    """Configuration file option."""
    return click.option(
        "-c",
        "--config",
        type=click.Path(exists=True, path_type=Path),
        help="Configuration file (YAML)",
    )(func)


def threads_option(func: F) -> F:
    """Threads option."""
    return click.option(
        "-t",
        "--threads",
        type=click.IntRange(min=1),
        default=None,
        help="Number of worker processes [default: 1]",
    )(func)


def pixel_distance_option(func: F) -> F:
    """Optical duplicate pixel distance option."""
    return click.option(
        "-d",
        "--pixel-distance",
        type=click.IntRange(min=0),
        default=None,
        help="Maximum pixel offset for optical duplicates [default: 100]",
    )(func)


def read_name_regex_options(func: F) -> F:
    """Read name regex options (custom regex, or disable extraction)."""
    func = click.option(
        "--no-read-name-regex",
        is_flag=True,
        help="Disable location extraction (no read is an optical duplicate)",
    )(func)
    return click.option(
        "--read-name-regex",
        default=None,
        help="Regex with three capture groups (tile, x, y) [default: Illumina fast path]",
    )(func)


def verbose_option(func: F) -> F:
    """Verbosity option (-v for INFO, -vv for DEBUG)."""
    return click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG)",
    )(func)


def log_file_option(func: F) -> F:
    """Log file option."""
    return click.option(
        "--log-file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Path for log file output",
    )(func)
