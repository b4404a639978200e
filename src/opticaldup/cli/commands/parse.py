"""Read name inspection command."""

from __future__ import annotations

import sys
from typing import Optional

import click

from opticaldup.cli.common_options import pixel_distance_option, read_name_regex_options
from opticaldup.cli.exit_codes import EXIT_ERROR
from opticaldup.constants import DEFAULT_OPTICAL_DUPLICATE_DISTANCE, DEFAULT_READ_NAME_REGEX
from opticaldup.core.optical_duplicates import OpticalDuplicateFinder
from opticaldup.core.physical_location import PhysicalLocation
from opticaldup.exceptions import ConfigurationError


@click.command(name="parse")
@click.argument("read_names", nargs=-1, required=True)
@read_name_regex_options
@pixel_distance_option
@click.option(
    "--cluster",
    is_flag=True,
    help="Treat the names as one duplicate set and report optical duplicates",
)
def parse_read_names(
    read_names: tuple[str, ...],
    read_name_regex: Optional[str],
    no_read_name_regex: bool,
    pixel_distance: Optional[int],
    cluster: bool,
) -> None:
    """Show the tile/x/y extracted from READ_NAMES."""
    regex = None if no_read_name_regex else (read_name_regex or DEFAULT_READ_NAME_REGEX)
    try:
        finder = OpticalDuplicateFinder(
            regex,
            pixel_distance if pixel_distance is not None else DEFAULT_OPTICAL_DUPLICATE_DISTANCE,
        )
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_ERROR)

    locations = []
    for read_name in read_names:
        loc = PhysicalLocation(read_name=read_name)
        finder.add_location_information(read_name, loc)
        locations.append(loc)

    flags = [False] * len(locations)
    if cluster:
        flags = finder.find_optical_duplicates(locations)

    click.echo("read_name\ttile\tx\ty" + ("\toptical_duplicate" if cluster else ""))
    for loc, flag in zip(locations, flags):
        row = f"{loc.read_name}\t{loc.tile}\t{loc.x}\t{loc.y}"
        if cluster:
            row += f"\t{str(flag).lower()}"
        click.echo(row)
