"""Lazy connector loading: imports driver modules only when needed."""

from __future__ import annotations

import importlib

from hanameta.adapters._base import Connector, DatabaseType, MetadataError

_CONNECTOR_MAP: dict[DatabaseType, tuple[str, str]] = {
    DatabaseType.HANA: ("hanameta.adapters.hana", "HanaConnector"),
    DatabaseType.DUCKDB: ("hanameta.adapters.duckdb", "DuckDBConnector"),
}

_EXTRAS: dict[DatabaseType, str] = {
    DatabaseType.HANA: "hana",
    DatabaseType.DUCKDB: "duckdb",
}


def get_connector(db_type: DatabaseType) -> type[Connector]:
    """Lazy-load a connector class by database type.

    Raises MetadataError with install hint if the driver package is missing.
    """
    entry = _CONNECTOR_MAP.get(db_type)
    if entry is None:
        raise MetadataError(f"No connector registered for {db_type.value}")

    module_path, class_name = entry
    try:
        mod = importlib.import_module(module_path)
    except ImportError as e:
        extra = _EXTRAS.get(db_type, "all")
        raise MetadataError(
            f"Missing driver for {db_type.value}. "
            f"Install with: pip install 'hanameta[{extra}]'"
        ) from e

    return getattr(mod, class_name)
