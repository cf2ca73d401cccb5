"""CLI fixtures: an isolated connections file and a DuckDB catalog snapshot."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_connections(tmp_path, monkeypatch):
    monkeypatch.setenv("HANAMETA_CONNECTIONS", str(tmp_path / "connections.toml"))
    monkeypatch.delenv("HANAMETA_DB", raising=False)


@pytest.fixture
def snapshot_db(tmp_path):
    """DuckDB file holding a small SYS catalog; returns a --db value for it."""
    duckdb = pytest.importorskip("duckdb")
    from hanameta.adapters.duckdb import create_catalog_replica

    path = tmp_path / "catalog.duckdb"
    conn = duckdb.connect(str(path))
    create_catalog_replica(conn)
    conn.execute(
        "INSERT INTO \"SYS\".\"VIEWS\" VALUES ('SALES', 'V_ORDERS', 'SELECT * FROM SALES.ORDERS')"
    )
    conn.execute(
        'INSERT INTO "SYS"."PROCEDURES" '
        "VALUES ('SALES', 'CLOSE_DAY', 'PROCEDURE CLOSE_DAY() AS BEGIN END')"
    )
    conn.execute(
        "INSERT INTO \"SYS\".\"TRIGGERS\" VALUES "
        "('SALES', 'TRG_B', 'SALES', 'ORDERS', 'CREATE TRIGGER TRG_B ...'), "
        "('SALES', 'TRG_A', 'SALES', 'ORDERS', 'CREATE TRIGGER TRG_A ...')"
    )
    conn.execute(
        "INSERT INTO \"SYS\".\"SYNONYMS\" VALUES "
        "('APP', 'ORDERS', 'SALES', 'ORDERS'), ('APP', 'CUSTOMERS', 'CRM', 'CUSTOMERS')"
    )
    conn.close()
    return f"duckdb:path={path}"
