"""The `triggers` and `synonyms` commands: list catalog objects."""

from __future__ import annotations

import click

from hanameta.adapters._base import MetadataError
from hanameta.cli._shared import DB_OPTION, FORMAT_OPTION, data_source, emit, fail, split_ref
from hanameta.meta import HanaMetadataProvider, SchemaRef, TableRef


@click.command("triggers")
@click.argument("table_ref")
@DB_OPTION
@FORMAT_OPTION
def triggers(table_ref: str, db: str, output_format: str) -> None:
    """List triggers of TABLE_REF (SCHEMA.TABLE)."""
    schema_name, table_name = split_ref(table_ref)
    table = TableRef(schema_name, table_name)
    try:
        with data_source(db) as ds:
            found = HanaMetadataProvider().list_triggers(ds, SchemaRef(schema_name), table)
    except MetadataError as e:
        fail(output_format, e)

    if not found:
        text = f"No triggers on {table.qualified_name}."
    else:
        text = "\n".join(t.name for t in found)
    emit(
        output_format,
        {"table": table.qualified_name, "triggers": [t.name for t in found]},
        text,
    )


@click.command("synonyms")
@click.argument("schema_name")
@DB_OPTION
@FORMAT_OPTION
def synonyms(schema_name: str, db: str, output_format: str) -> None:
    """List synonyms defined in SCHEMA_NAME."""
    try:
        with data_source(db) as ds:
            found = HanaMetadataProvider().list_synonyms(ds, SchemaRef(schema_name))
    except MetadataError as e:
        fail(output_format, e)

    if not found:
        text = f"No synonyms in '{schema_name}'."
    else:
        text = "\n".join(f"{s.name} -> {s.target}" for s in found)
    emit(
        output_format,
        {
            "schema": schema_name,
            "synonyms": [
                {"name": s.name, "target_schema": s.target_schema, "target_object": s.target_object}
                for s in found
            ],
        },
        text,
    )
