"""The `connect` command group: manage named connections."""

from __future__ import annotations

import click

from hanameta.adapters._base import DatabaseType, MetadataError
from hanameta.connections import (
    connections_file,
    list_connections,
    remove_connection,
    save_connection,
)

_SECRET_KEYS = frozenset({"password"})


def _mask(key: str, value: str) -> str:
    return "****" if key in _SECRET_KEYS else value


@click.group()
def connect() -> None:
    """Manage named connections (~/.hanameta/connections.toml)."""


@connect.command("add")
@click.argument("name")
@click.argument("db_type", type=click.Choice([t.value for t in DatabaseType]))
@click.argument("params", nargs=-1)
def connect_add(name: str, db_type: str, params: tuple[str, ...]) -> None:
    """Add a named connection.

    \b
    Examples:
      hanameta connect add prod hana host=hana.example.com port=30015 user=SYSTEM password=...
      hanameta connect add snapshot duckdb path=catalog.duckdb
    """
    parsed: dict[str, str] = {}
    for p in params:
        if "=" not in p:
            raise click.BadParameter(f"Expected key=value, got '{p}'")
        k, v = p.split("=", 1)
        parsed[k] = v

    try:
        path = save_connection(name, DatabaseType(db_type), parsed)
    except MetadataError as e:
        raise click.UsageError(str(e)) from e
    click.echo(f"Saved connection '{name}' to {path}")


@connect.command("list")
def connect_list() -> None:
    """List all named connections."""
    connections = list_connections()
    if not connections:
        click.echo(f"No connections configured in {connections_file()}.")
        click.echo("Add one: hanameta connect add <name> <type> <param>=<val>")
        return

    for name, entry in connections.items():
        db_type = entry.get("type", "?")
        param_str = ", ".join(
            f"{k}={_mask(k, str(v))}" for k, v in entry.items() if k != "type"
        )
        click.echo(f"  {name} ({db_type}): {param_str}")


@connect.command("remove")
@click.argument("name")
def connect_remove(name: str) -> None:
    """Remove a named connection."""
    if not remove_connection(name):
        click.echo(f"Connection '{name}' not found.", err=True)
        raise SystemExit(1)
    click.echo(f"Removed connection '{name}'.")
