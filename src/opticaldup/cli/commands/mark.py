"""Optical duplicate marking command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from opticaldup.cli.common_options import (
    config_option,
    input_option,
    log_file_option,
    output_option,
    pixel_distance_option,
    read_name_regex_options,
    threads_option,
    verbose_option,
)
from opticaldup.cli.exit_codes import EXIT_ERROR, EXIT_SIGINT, EXIT_USAGE
from opticaldup.config import Config, load_config
from opticaldup.exceptions import OpticalDupError
from opticaldup.modules.duplicate_sets import OpticalDuplicateMarker
from opticaldup.utils.logging import get_logger, level_from_verbosity, setup_logging


def build_config(
    config_path: Optional[Path],
    input_file: Optional[Path],
    output_file: Optional[Path],
    read_name_regex: Optional[str],
    no_read_name_regex: bool,
    pixel_distance: Optional[int],
    threads: Optional[int],
    log_file: Optional[Path],
) -> Config:
    """Merge config file values with CLI overrides (CLI wins)."""
    cfg = load_config(config_path) if config_path else Config()

    if input_file is not None:
        cfg.input_file = input_file
    if output_file is not None:
        cfg.output_file = output_file
    if no_read_name_regex:
        cfg.read_name_regex = None
    elif read_name_regex is not None:
        cfg.read_name_regex = read_name_regex
    if pixel_distance is not None:
        cfg.pixel_distance = pixel_distance
    if threads is not None:
        cfg.threads = threads
    if log_file is not None:
        cfg.runtime.log_file = log_file
    return cfg


@click.command(name="mark")
@input_option
@output_option
@config_option
@read_name_regex_options
@pixel_distance_option
@threads_option
@verbose_option
@log_file_option
@click.option("--no-progress", is_flag=True, help="Disable the progress bar")
def mark(
    input_file: Optional[Path],
    output_file: Optional[Path],
    config: Optional[Path],
    read_name_regex: Optional[str],
    no_read_name_regex: bool,
    pixel_distance: Optional[int],
    threads: Optional[int],
    verbose: int,
    log_file: Optional[Path],
    no_progress: bool,
) -> None:
    """Mark optical duplicates in a table of duplicate sets."""
    if read_name_regex is not None and no_read_name_regex:
        click.echo("Error: --read-name-regex and --no-read-name-regex are exclusive", err=True)
        sys.exit(EXIT_USAGE)

    try:
        cfg = build_config(
            config,
            input_file,
            output_file,
            read_name_regex,
            no_read_name_regex,
            pixel_distance,
            threads,
            log_file,
        )
        if cfg.input_file is None or cfg.output_file is None:
            click.echo("Error: --input and --output are required (or set them in --config)", err=True)
            sys.exit(EXIT_USAGE)
        cfg.validate()
    except OpticalDupError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_ERROR)

    if verbose:
        log_level = level_from_verbosity(verbose)
    else:
        log_level = getattr(logging, str(cfg.runtime.log_level).upper())
    setup_logging(level=log_level, log_file=cfg.runtime.log_file)
    logger = get_logger("cli")

    try:
        marker = OpticalDuplicateMarker(
            read_name_regex=cfg.read_name_regex,
            pixel_distance=cfg.pixel_distance,
            threads=cfg.threads,
            enable_progress=cfg.runtime.enable_progress and not no_progress,
        )
        stats = marker.run(cfg.input_file, cfg.output_file)
    except KeyboardInterrupt:
        logger.info("Marking interrupted by user")
        sys.exit(EXIT_SIGINT)
    except OpticalDupError as exc:
        logger.error(f"Marking failed: {exc}")
        sys.exit(EXIT_ERROR)

    click.echo(
        f"Marked {stats.optical_duplicates} optical duplicate(s) among "
        f"{stats.total_reads} read(s) in {stats.total_sets} duplicate set(s)"
    )
    click.echo(f"Output: {cfg.output_file}")
