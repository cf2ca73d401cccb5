"""The `ddl` command group: print the source of catalog objects."""

from __future__ import annotations

from collections.abc import Callable

import click

from hanameta.adapters._base import MetadataError
from hanameta.cli._shared import DB_OPTION, FORMAT_OPTION, data_source, emit, fail, split_ref
from hanameta.datasource import DataSource
from hanameta.meta import (
    HanaMetadataProvider,
    RoutineKind,
    RoutineRef,
    TableRef,
    TriggerRef,
)
from hanameta.meta._types import ObjectRef


def _show(
    kind: str,
    ref: ObjectRef,
    db: str,
    output_format: str,
    read: Callable[[HanaMetadataProvider, DataSource], str],
) -> None:
    provider = HanaMetadataProvider()
    try:
        with data_source(db) as ds:
            ddl = read(provider, ds)
    except MetadataError as e:
        fail(output_format, e)
    emit(output_format, {"kind": kind, "object": ref.qualified_name, "ddl": ddl}, ddl)


@click.group("ddl")
def ddl() -> None:
    """Print DDL of views, routines, tables and triggers."""


@ddl.command("view")
@click.argument("ref")
@DB_OPTION
@FORMAT_OPTION
def view(ref: str, db: str, output_format: str) -> None:
    """Show the definition of view REF (SCHEMA.NAME)."""
    target = TableRef(*split_ref(ref), is_view=True)
    _show("view", target, db, output_format, lambda p, ds: p.get_view_ddl(ds, target))


@ddl.command("procedure")
@click.argument("ref")
@DB_OPTION
@FORMAT_OPTION
def procedure(ref: str, db: str, output_format: str) -> None:
    """Show the source of procedure REF (SCHEMA.NAME)."""
    target = RoutineRef(*split_ref(ref), kind=RoutineKind.PROCEDURE)
    _show("procedure", target, db, output_format, lambda p, ds: p.get_routine_ddl(ds, target))


@ddl.command("function")
@click.argument("ref")
@DB_OPTION
@FORMAT_OPTION
def function(ref: str, db: str, output_format: str) -> None:
    """Show the source of function REF (SCHEMA.NAME)."""
    target = RoutineRef(*split_ref(ref), kind=RoutineKind.FUNCTION)
    _show("function", target, db, output_format, lambda p, ds: p.get_routine_ddl(ds, target))


@ddl.command("table")
@click.argument("ref")
@DB_OPTION
@FORMAT_OPTION
def table(ref: str, db: str, output_format: str) -> None:
    """Show the CREATE statement of table REF (SCHEMA.NAME)."""
    target = TableRef(*split_ref(ref))
    _show("table", target, db, output_format, lambda p, ds: p.get_table_ddl(ds, target))


@ddl.command("trigger")
@click.argument("ref")
@DB_OPTION
@FORMAT_OPTION
def trigger(ref: str, db: str, output_format: str) -> None:
    """Show the source of trigger REF (SCHEMA.NAME)."""
    target = TriggerRef(*split_ref(ref))
    _show("trigger", target, db, output_format, lambda p, ds: p.get_trigger_ddl(ds, target))
