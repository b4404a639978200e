"""Click application entrypoint for opticaldup."""

from __future__ import annotations

import signal
import sys
from types import FrameType
from typing import Optional

import click

from opticaldup import __version__
from opticaldup.cli.exit_codes import EXIT_ERROR, EXIT_SIGINT, EXIT_SIGTERM, EXIT_SUCCESS

from .commands.config import init_config
from .commands.mark import mark
from .commands.parse import parse_read_names


def _handle_signal(signum: int, frame: Optional[FrameType]) -> None:
    """Handle interrupt signals for graceful shutdown."""
    sig_name = "SIGINT" if signum == signal.SIGINT else "SIGTERM"
    click.echo(f"\n{sig_name} received, initiating graceful shutdown...", err=True)
    if signum == signal.SIGTERM:
        raise SystemExit(EXIT_SIGTERM)
    raise KeyboardInterrupt(f"{sig_name} received")


def _print_version(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if value and not ctx.resilient_parsing:
        click.echo(f"opticaldup {__version__}")
        ctx.exit()


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "-V",
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_print_version,
    help="Show the version and exit.",
)
def cli() -> None:
    """opticaldup: find optical duplicates among sequencing duplicate sets."""


cli.add_command(mark)
cli.add_command(parse_read_names)
cli.add_command(init_config)


def main(argv: list[str] | None = None) -> int:
    """Main entry point with signal handling."""
    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    try:
        cli(argv)
        return EXIT_SUCCESS
    except KeyboardInterrupt:
        return EXIT_SIGINT
    except SystemExit as exc:
        # Preserve explicit exit codes from cli()
        if exc.code is None:
            return EXIT_SUCCESS
        return exc.code if isinstance(exc.code, int) else EXIT_ERROR
    except Exception as exc:
        click.echo(f"Error: {exc}", err=True)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
