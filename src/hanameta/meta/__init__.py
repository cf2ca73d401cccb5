"""Metadata providers: the generic base and the SAP HANA dialect."""

from hanameta.meta._types import (
    UNKNOWN_LINE,
    ColumnAttributes,
    ColumnVariant,
    ErrorPosition,
    MetadataProvider,
    RoutineKind,
    RoutineRef,
    SchemaRef,
    Synonym,
    TableColumn,
    TableRef,
    Trigger,
    TriggerRef,
)
from hanameta.meta.generic import GenericMetadataProvider
from hanameta.meta.hana import HanaMetadataProvider, extract_error_position

__all__ = [
    "UNKNOWN_LINE",
    "ColumnAttributes",
    "ColumnVariant",
    "ErrorPosition",
    "GenericMetadataProvider",
    "HanaMetadataProvider",
    "MetadataProvider",
    "RoutineKind",
    "RoutineRef",
    "SchemaRef",
    "Synonym",
    "TableColumn",
    "TableRef",
    "Trigger",
    "TriggerRef",
    "extract_error_position",
]
