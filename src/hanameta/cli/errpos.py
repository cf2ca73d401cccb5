"""The `errpos` command: locate the error position in a HANA error message."""

from __future__ import annotations

import click

from hanameta.cli._shared import FORMAT_OPTION, emit
from hanameta.meta import extract_error_position


@click.command("errpos")
@click.argument("message")
@FORMAT_OPTION
def errpos(message: str, output_format: str) -> None:
    """Print the zero-based character position reported in MESSAGE."""
    pos = extract_error_position(message)
    if pos is None:
        emit(output_format, {"position": None}, "no position in message")
        raise SystemExit(1)
    emit(output_format, {"line": pos.line, "position": pos.position}, str(pos.position))
