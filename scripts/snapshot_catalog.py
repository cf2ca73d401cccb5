#!/usr/bin/env python3
"""Copy the SYS catalog views read by hanameta from SAP HANA into a DuckDB file.

The snapshot can then be browsed offline:

    hanameta ddl view SALES.V_ORDERS --db duckdb:path=catalog.duckdb

Usage:
    python scripts/snapshot_catalog.py --db prod                     # named connection
    python scripts/snapshot_catalog.py --db hana:host=h,user=u,password=p --out catalog.duckdb
    python scripts/snapshot_catalog.py --db prod --schema SALES --schema HR

Environment variables:
    HANAMETA_DB     Connection used when --db is not given
"""

from __future__ import annotations

import argparse
import os
import time

BATCH_SIZE = 1000

# Replica table -> column holding the owning schema (None: not schema-scoped).
SCHEMA_COLUMNS = {
    "VIEWS": "SCHEMA_NAME",
    "PROCEDURES": "SCHEMA_NAME",
    "FUNCTIONS": "SCHEMA_NAME",
    "TRIGGERS": "SCHEMA_NAME",
    "SYNONYMS": "SCHEMA_NAME",
    "M_MONITOR_COLUMNS": None,
}


def copy_table(src, dst, table: str, columns: list[str], schemas: list[str]) -> int:
    """Stream one SYS view into the replica table. Returns rows copied."""
    column_sql = ", ".join(columns)
    sql = f"SELECT {column_sql} FROM SYS.{table}"
    params: list[str] = []
    schema_column = SCHEMA_COLUMNS[table]
    if schemas and schema_column:
        sql += f" WHERE {schema_column} IN ({', '.join('?' for _ in schemas)})"
        params = schemas

    placeholders = ", ".join("?" for _ in columns)
    insert = f'INSERT INTO "SYS"."{table}" ({column_sql}) VALUES ({placeholders})'

    cur = src.cursor()
    try:
        if params:
            cur.execute(sql, params)
        else:
            cur.execute(sql)
        copied = 0
        while True:
            batch = cur.fetchmany(BATCH_SIZE)
            if not batch:
                break
            dst.executemany(insert, [tuple(row) for row in batch])
            copied += len(batch)
    finally:
        cur.close()
    return copied


def main() -> None:
    parser = argparse.ArgumentParser(
        description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--db", default=os.environ.get("HANAMETA_DB"), help="HANA connection")
    parser.add_argument("--out", default="catalog.duckdb", help="DuckDB file to write")
    parser.add_argument(
        "--schema", action="append", default=[], help="Limit to schema (repeatable)"
    )
    args = parser.parse_args()
    if not args.db:
        parser.error("--db is required (or set HANAMETA_DB)")

    import duckdb

    from hanameta.adapters._base import DatabaseType
    from hanameta.adapters.duckdb import CATALOG_REPLICA, create_catalog_replica
    from hanameta.adapters.hana import HanaConnector
    from hanameta.cli._shared import parse_db

    config = parse_db(args.db)
    if config.db_type is not DatabaseType.HANA:
        parser.error(f"--db must be a SAP HANA connection, got {config.db_type.value}")

    print(f"Snapshotting SYS catalog of '{config.name}' into {args.out}...")
    t0 = time.time()

    src = HanaConnector().connect(config)
    dst = duckdb.connect(args.out)
    try:
        create_catalog_replica(dst)
        for table, columns in CATALOG_REPLICA.items():
            dst.execute(f'DELETE FROM "SYS"."{table}"')
            names = [name for name, _ in columns]
            t1 = time.time()
            copied = copy_table(src, dst, table, names, args.schema)
            print(f"  {table}: {copied} rows in {time.time() - t1:.1f}s")
    finally:
        dst.close()
        src.close()

    print(f"Done in {time.time() - t0:.1f}s")


if __name__ == "__main__":
    main()
