"""CLI entry point."""

from __future__ import annotations

import logging

import click

from hanameta.cli.catalog import synonyms, triggers
from hanameta.cli.connect import connect
from hanameta.cli.ddl import ddl
from hanameta.cli.errpos import errpos


@click.group()
@click.version_option(package_name="hanameta")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool) -> None:
    """hanameta: SAP HANA catalog metadata from the command line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


main.add_command(connect)
main.add_command(ddl)
main.add_command(triggers)
main.add_command(synonyms)
main.add_command(errpos)
