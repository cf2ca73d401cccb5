"""Shared helpers for CLI commands."""

from __future__ import annotations

import contextlib
import json
from collections.abc import Iterator
from typing import NoReturn

import click

from hanameta.adapters._base import ConnectionConfig, DatabaseType, MetadataError
from hanameta.connections import get_connection
from hanameta.datasource import DataSource

FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format.",
)

DB_OPTION = click.option(
    "--db",
    required=True,
    envvar="HANAMETA_DB",
    help="Connection name or type:key=val.",
)


def parse_db(value: str) -> ConnectionConfig:
    """Resolve --db value: try named connection first, fall back to 'type:key=val' format."""
    config = get_connection(value)
    if config is not None:
        return config

    if ":" not in value:
        raise click.BadParameter(
            f"Connection '{value}' not found and not in 'type:key=val' format.\n"
            f"  Add it: hanameta connect add {value} <type> <param>=<val>",
            param_hint="'--db'",
        )
    db_type_str, params_str = value.split(":", 1)

    try:
        db_type = DatabaseType(db_type_str)
    except ValueError as e:
        valid = ", ".join(t.value for t in DatabaseType)
        raise click.BadParameter(
            f"Unknown database type '{db_type_str}'. Valid: {valid}",
            param_hint="'--db'",
        ) from e

    params: dict[str, str] = {}
    if params_str:
        for part in params_str.split(","):
            if "=" not in part:
                raise click.BadParameter(
                    f"Expected key=value pair, got '{part}'",
                    param_hint="'--db'",
                )
            k, v = part.split("=", 1)
            params[k.strip()] = v.strip()

    return ConnectionConfig(name=db_type_str, db_type=db_type, params=params)


def split_ref(value: str) -> tuple[str, str]:
    """Split SCHEMA.NAME; the schema part is required."""
    if "." not in value:
        raise click.BadParameter(f"Expected SCHEMA.NAME, got '{value}'")
    schema, name = value.split(".", 1)
    if not schema or not name:
        raise click.BadParameter(f"Expected SCHEMA.NAME, got '{value}'")
    return schema, name


@contextlib.contextmanager
def data_source(db: str) -> Iterator[DataSource]:
    with DataSource(parse_db(db)) as ds:
        yield ds


def emit(output_format: str, doc: dict[str, object], text: str) -> None:
    if output_format == "json":
        click.echo(json.dumps(doc, indent=2, default=str))
    else:
        click.echo(text)


def fail(output_format: str, error: MetadataError) -> NoReturn:
    """Report a metadata error and exit with status 1."""
    if output_format == "json":
        click.echo(json.dumps({"error": str(error)}, indent=2))
    else:
        click.echo(f"error: {error}", err=True)
    raise SystemExit(1)
