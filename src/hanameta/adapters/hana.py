"""SAP HANA connector: hdbcli DB-API connections."""

from __future__ import annotations

from hdbcli import dbapi

from hanameta.adapters._base import ConnectionConfig, DatabaseType, MetadataError

DEFAULT_PORT = 30015

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _connect_kwargs(params: dict[str, str]) -> dict[str, object]:
    """Translate connection params into hdbcli keyword arguments."""
    host = params.get("host")
    if not host:
        raise MetadataError("SAP HANA requires 'host' in connection params")
    try:
        port = int(params.get("port", DEFAULT_PORT))
    except ValueError as e:
        raise MetadataError(f"Invalid SAP HANA port: {params['port']!r}") from e

    kwargs: dict[str, object] = {"address": host, "port": port}
    if params.get("user"):
        kwargs["user"] = params["user"]
    if params.get("password"):
        kwargs["password"] = params["password"]
    if params.get("database"):
        kwargs["databaseName"] = params["database"]
    if "encrypt" in params:
        kwargs["encrypt"] = params["encrypt"].lower() in _TRUE_VALUES
    return kwargs


class HanaConnector:
    """Opens hdbcli connections for a SAP HANA system."""

    driver_error = dbapi.Error

    def connect(self, config: ConnectionConfig) -> dbapi.Connection:
        kwargs = _connect_kwargs(config.params)
        try:
            return dbapi.connect(**kwargs)
        except dbapi.Error as e:
            raise MetadataError(f"SAP HANA connection failed: {e}") from e

    def db_type(self) -> DatabaseType:
        return DatabaseType.HANA
