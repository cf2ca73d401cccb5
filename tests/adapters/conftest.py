"""Adapter test fixtures."""

from __future__ import annotations

import os

import pytest

HANA_PARAMS = {
    "host": os.environ.get("HANAMETA_HANA_HOST", "localhost"),
    "port": os.environ.get("HANAMETA_HANA_PORT", "39017"),
    "user": os.environ.get("HANAMETA_HANA_USER", "SYSTEM"),
    "password": os.environ.get("HANAMETA_HANA_PASSWORD", ""),
}


@pytest.fixture(scope="session")
def hana_params():
    return dict(HANA_PARAMS)


@pytest.fixture
def hana_source(hana_params):
    """Connected DataSource on a live HANA system, closed after each test."""
    from hanameta.adapters._base import ConnectionConfig, DatabaseType
    from hanameta.datasource import DataSource

    config = ConnectionConfig(name="hana-test", db_type=DatabaseType.HANA, params=hana_params)
    with DataSource(config) as ds:
        yield ds
