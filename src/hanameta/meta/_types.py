"""Catalog object references, metadata records and the provider protocol."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hanameta.datasource import DataSource

# Reported when the driver gives a character offset but no line.
UNKNOWN_LINE = -1

_PLAIN_IDENTIFIER = re.compile(r"[A-Z_][A-Z0-9_#$]*")

# SAP HANA reserved words; these need quoting even when upper-case.
RESERVED_WORDS = frozenset({
    "ALL", "ALTER", "AS", "BEFORE", "BEGIN", "BOTH", "CASE", "CHAR", "CONDITION",
    "CONNECT", "CROSS", "CUBE", "CURRENT_CONNECTION", "CURRENT_DATE", "CURRENT_SCHEMA",
    "CURRENT_TIME", "CURRENT_TIMESTAMP", "CURRENT_TRANSACTION_ISOLATION_LEVEL",
    "CURRENT_USER", "CURRENT_UTCDATE", "CURRENT_UTCTIME", "CURRENT_UTCTIMESTAMP",
    "CURRVAL", "CURSOR", "DECLARE", "DEFERRED", "DISTINCT", "ELSE", "ELSEIF", "END",
    "EXCEPT", "EXCEPTION", "EXEC", "FALSE", "FOR", "FROM", "FULL", "GROUP", "HAVING",
    "IF", "IN", "INNER", "INOUT", "INTERSECT", "INTO", "IS", "JOIN", "LATERAL",
    "LEADING", "LEFT", "LIMIT", "LOOP", "MINUS", "NATURAL", "NCHAR", "NEXTVAL", "NULL",
    "ON", "ORDER", "OUT", "PRIOR", "RETURN", "RETURNS", "REVERSE", "RIGHT", "ROLLUP",
    "ROWID", "SELECT", "SESSION_USER", "SET", "SQL", "START", "SYSUUID", "TABLESAMPLE",
    "TOP", "TRAILING", "TRUE", "UNION", "UNKNOWN", "USING", "UTCTIMESTAMP", "VALUES",
    "WHEN", "WHERE", "WHILE", "WITH",
})


def quote_identifier(name: str) -> str:
    """Quote an identifier unless it is a plain upper-case, non-reserved name."""
    if _PLAIN_IDENTIFIER.fullmatch(name) and name not in RESERVED_WORDS:
        return name
    return '"' + name.replace('"', '""') + '"'


class RoutineKind(enum.Enum):
    PROCEDURE = "PROCEDURE"
    FUNCTION = "FUNCTION"

    @property
    def label(self) -> str:
        return self.value.lower()


class ColumnVariant(enum.Enum):
    GENERIC = "generic"
    SYSTEM_VIEW = "system_view"  # column of a view in the SYS schema


@dataclass(frozen=True)
class SchemaRef:
    name: str


@dataclass(frozen=True)
class ObjectRef:
    schema: str
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{quote_identifier(self.schema)}.{quote_identifier(self.name)}"


@dataclass(frozen=True)
class ColumnAttributes:
    """Column attributes as reported by the host's catalog reader."""

    name: str
    type_name: str
    value_type: int = 0
    source_type: int = 0
    ordinal_position: int = 0
    column_size: int = 0
    char_length: int = 0
    scale: int | None = None
    precision: int | None = None
    radix: int = 10
    not_null: bool = False
    remarks: str | None = None
    default_value: str | None = None
    auto_increment: bool = False
    auto_generated: bool = False


@dataclass(frozen=True)
class TableColumn(ColumnAttributes):
    variant: ColumnVariant = ColumnVariant.GENERIC
    # Only set for system view columns with a known unit.
    unit: str | None = None

    def render_value(self, value: object) -> str:
        if value is None:
            return ""
        if self.unit:
            return f"{value} {self.unit}"
        return str(value)


@dataclass(frozen=True)
class TableRef(ObjectRef):
    is_view: bool = False
    columns: tuple[ColumnAttributes, ...] = ()
    primary_key: tuple[str, ...] = ()
    remarks: str | None = None


@dataclass(frozen=True)
class RoutineRef(ObjectRef):
    kind: RoutineKind = RoutineKind.PROCEDURE


@dataclass(frozen=True)
class TriggerRef(ObjectRef):
    table: str | None = None


@dataclass
class Trigger:
    schema: str
    name: str
    table: str | None = None


@dataclass
class Synonym:
    schema: str
    name: str
    target_schema: str | None = None
    target_object: str | None = None

    @property
    def target(self) -> str | None:
        if self.target_object is None:
            return None
        if self.target_schema is None:
            return quote_identifier(self.target_object)
        return f"{quote_identifier(self.target_schema)}.{quote_identifier(self.target_object)}"


@dataclass(frozen=True)
class ErrorPosition:
    position: int
    line: int = UNKNOWN_LINE


@dataclass
class DDLOptions:
    """Options accepted by table DDL generation."""

    show_comments: bool = False

    @classmethod
    def from_mapping(cls, options: dict[str, object] | None) -> DDLOptions:
        if not options:
            return cls()
        return cls(show_comments=bool(options.get("show_comments", False)))


@runtime_checkable
class MetadataProvider(Protocol):
    def get_view_ddl(
        self, data_source: DataSource, view: TableRef, options: dict[str, object] | None = None
    ) -> str: ...
    def get_routine_ddl(self, data_source: DataSource, routine: RoutineRef) -> str: ...
    def get_table_ddl(
        self, data_source: DataSource, table: TableRef, options: dict[str, object] | None = None
    ) -> str: ...
    def supports_table_ddl_split(self, table: TableRef) -> bool: ...
    def supports_triggers(self, data_source: DataSource) -> bool: ...
    def list_triggers(
        self, data_source: DataSource, container: SchemaRef, table: TableRef | None = None
    ) -> list[Trigger]: ...
    def get_trigger_ddl(self, data_source: DataSource, trigger: TriggerRef) -> str: ...
    def supports_synonyms(self, data_source: DataSource) -> bool: ...
    def list_synonyms(self, data_source: DataSource, container: SchemaRef) -> list[Synonym]: ...
    def get_auto_increment_clause(self, column: ColumnAttributes) -> str | None: ...
    def is_system_table(self, table: TableRef) -> bool: ...
    def get_error_position(self, error: BaseException) -> ErrorPosition | None: ...
    def create_table_column(
        self, data_source: DataSource, table: TableRef, attrs: ColumnAttributes
    ) -> TableColumn: ...
