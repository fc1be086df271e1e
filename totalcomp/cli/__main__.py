"""Total Comp CLI - Command-line interface for compensation package comparison."""

import logging
import os

import click

from totalcomp import __version__

from .compare_commands import compare as compare_command
from .fiscal_year_commands import fiscal_year as fiscal_year_group


@click.group()
@click.version_option(version=__version__, prog_name="totalcomp")
def cli():
    """Total Comp - Take-home pay and offer comparison for Mexico.

    Computes net monthly pay, statutory benefits and annual totals for
    one or more compensation packages and picks the best one.

    Fiscal-year tables are loaded from (first match wins):

    \b
    1. $TOTALCOMP_CONFIG_PATH/fiscal-years/<year>.yaml
    2. ~/.config/totalcomp/fiscal-years/<year>.yaml (XDG default)
    3. Tables bundled with the package

    Run 'totalcomp fiscal-year list' to see available years.
    """
    pass


cli.add_command(compare_command)
cli.add_command(fiscal_year_group)


def configure_logging():
    """Configure logging from the LOG_LEVEL environment variable (default WARNING)."""
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main():
    """Entry point for the CLI."""
    configure_logging()
    cli()


if __name__ == "__main__":
    main()
