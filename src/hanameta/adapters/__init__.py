"""Driver connectors: implementations of the Connector protocol."""

from hanameta.adapters._base import (
    ConnectionConfig,
    Connector,
    DatabaseType,
    MetadataError,
    SessionError,
)

__all__ = [
    "ConnectionConfig",
    "Connector",
    "DatabaseType",
    "MetadataError",
    "SessionError",
]
