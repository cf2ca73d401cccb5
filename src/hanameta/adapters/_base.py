"""Connector protocol: the abstraction boundary between data sources and drivers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


class DatabaseType(enum.Enum):
    HANA = "hana"
    DUCKDB = "duckdb"  # local replica of the SYS catalog views


@dataclass
class ConnectionConfig:
    name: str
    db_type: DatabaseType
    params: dict[str, str] = field(default_factory=dict)


class MetadataError(Exception):
    """Raised for connection, query and metadata read failures.

    Carries the data source the failure belongs to, when known.
    """

    def __init__(self, message: str, *, data_source: object | None = None) -> None:
        super().__init__(message)
        self.data_source = data_source

    def __str__(self) -> str:
        message = super().__str__()
        name = getattr(self.data_source, "name", None)
        if name:
            return f"[{name}] {message}"
        return message


class SessionError(MetadataError):
    """Raised by a session when the underlying driver call fails."""


@runtime_checkable
class Connector(Protocol):
    # Base class of the driver's DB-API exceptions.
    driver_error: type[Exception]

    def connect(self, config: ConnectionConfig) -> Any: ...
    def db_type(self) -> DatabaseType: ...
