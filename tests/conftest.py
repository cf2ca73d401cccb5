"""Root conftest: shared fixtures and markers."""

from __future__ import annotations

import os

import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "hana: requires a reachable SAP HANA system")


def pytest_collection_modifyitems(config, items):
    if os.environ.get("HANAMETA_TEST_HANA"):
        return

    skip_hana = pytest.mark.skip(reason="SAP HANA not available (set HANAMETA_TEST_HANA=1)")
    for item in items:
        if "hana" in item.keywords:
            item.add_marker(skip_hana)


@pytest.fixture
def catalog():
    """Connected DataSource over an in-memory DuckDB replica of the SYS views."""
    pytest.importorskip("duckdb")
    from hanameta.adapters._base import ConnectionConfig, DatabaseType
    from hanameta.datasource import DataSource

    ds = DataSource(
        ConnectionConfig(name="catalog", db_type=DatabaseType.DUCKDB, params={"path": ":memory:"})
    )
    ds.connect()
    yield ds
    ds.close()


@pytest.fixture
def seed():
    """Insert rows into a replica table: seed(ds, "VIEWS", [(...), ...])."""

    def _seed(data_source, table: str, rows: list[tuple]) -> None:
        if not rows:
            return
        placeholders = ", ".join("?" for _ in rows[0])
        with data_source.meta_session("seed") as session:
            for row in rows:
                session.execute(f'INSERT INTO "SYS"."{table}" VALUES ({placeholders})', row)

    return _seed
