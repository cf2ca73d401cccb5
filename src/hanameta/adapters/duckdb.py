"""DuckDB connector: a local replica of the HANA SYS catalog views.

The replica holds the columns the metadata provider reads, so a snapshot of a
live system (see scripts/snapshot_catalog.py) can be browsed offline and the
provider can be exercised in-process.
"""

from __future__ import annotations

import duckdb as _duckdb

from hanameta.adapters._base import ConnectionConfig, DatabaseType, MetadataError

# Table name -> column definitions. Mirrors the subset of SYS read by the provider.
CATALOG_REPLICA: dict[str, tuple[tuple[str, str], ...]] = {
    "VIEWS": (
        ("SCHEMA_NAME", "VARCHAR"),
        ("VIEW_NAME", "VARCHAR"),
        ("DEFINITION", "VARCHAR"),
    ),
    "PROCEDURES": (
        ("SCHEMA_NAME", "VARCHAR"),
        ("PROCEDURE_NAME", "VARCHAR"),
        ("DEFINITION", "VARCHAR"),
    ),
    "FUNCTIONS": (
        ("SCHEMA_NAME", "VARCHAR"),
        ("FUNCTION_NAME", "VARCHAR"),
        ("DEFINITION", "VARCHAR"),
    ),
    "TRIGGERS": (
        ("SCHEMA_NAME", "VARCHAR"),
        ("TRIGGER_NAME", "VARCHAR"),
        ("SUBJECT_TABLE_SCHEMA", "VARCHAR"),
        ("SUBJECT_TABLE_NAME", "VARCHAR"),
        ("DEFINITION", "VARCHAR"),
    ),
    "SYNONYMS": (
        ("SCHEMA_NAME", "VARCHAR"),
        ("SYNONYM_NAME", "VARCHAR"),
        ("OBJECT_SCHEMA", "VARCHAR"),
        ("OBJECT_NAME", "VARCHAR"),
    ),
    "M_MONITOR_COLUMNS": (
        ("VIEW_NAME", "VARCHAR"),
        ("VIEW_COLUMN_NAME", "VARCHAR"),
        ("UNIT", "VARCHAR"),
    ),
}


def create_catalog_replica(conn: _duckdb.DuckDBPyConnection) -> None:
    """Create the SYS schema and empty replica tables on a DuckDB connection."""
    conn.execute('CREATE SCHEMA IF NOT EXISTS "SYS"')
    for table, columns in CATALOG_REPLICA.items():
        column_sql = ", ".join(f'"{name}" {data_type}' for name, data_type in columns)
        conn.execute(f'CREATE TABLE IF NOT EXISTS "SYS"."{table}" ({column_sql})')


class DuckDBConnector:
    """DuckDB connector: in-process, no server needed."""

    driver_error = _duckdb.Error

    def connect(self, config: ConnectionConfig) -> _duckdb.DuckDBPyConnection:
        path = config.params.get("path", ":memory:")
        try:
            conn = _duckdb.connect(path, config={"custom_user_agent": "hanameta/0.1.0"})
            create_catalog_replica(conn)
        except _duckdb.Error as e:
            raise MetadataError(f"DuckDB connection failed: {e}") from e
        return conn

    def db_type(self) -> DatabaseType:
        return DatabaseType.DUCKDB
