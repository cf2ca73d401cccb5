"""Engine-neutral metadata provider.

Every capability here is the "not supported" answer, except table DDL, which
is rendered from the column metadata the host already holds. Dialect
providers subclass this and override what their catalog can answer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hanameta.meta._types import (
    ColumnAttributes,
    DDLOptions,
    ErrorPosition,
    RoutineRef,
    SchemaRef,
    Synonym,
    TableColumn,
    TableRef,
    Trigger,
    TriggerRef,
    quote_identifier,
)
from hanameta.meta.columns import build_column

if TYPE_CHECKING:
    from hanameta.datasource import DataSource

_SIZED_TYPES = frozenset({
    "ALPHANUM",
    "BINARY",
    "CHAR",
    "NCHAR",
    "NVARCHAR",
    "SHORTTEXT",
    "VARBINARY",
    "VARCHAR",
})

_DECIMAL_TYPES = frozenset({"DECIMAL", "NUMERIC", "SMALLDECIMAL"})


def _sql_literal(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def column_type(column: ColumnAttributes) -> str:
    """Render a column's type with its size or precision."""
    type_name = column.type_name
    upper = type_name.upper()
    if "(" in type_name:
        return type_name
    if upper in _SIZED_TYPES and column.column_size > 0:
        return f"{type_name}({column.column_size})"
    if upper in _DECIMAL_TYPES and column.precision:
        if column.scale is not None:
            return f"{type_name}({column.precision},{column.scale})"
        return f"{type_name}({column.precision})"
    return type_name


class GenericMetadataProvider:
    """Metadata provider for databases without a dialect-specific catalog."""

    def get_view_ddl(
        self, data_source: DataSource, view: TableRef, options: dict[str, object] | None = None
    ) -> str:
        return f"-- View definition not available for {view.qualified_name}"

    def get_routine_ddl(self, data_source: DataSource, routine: RoutineRef) -> str:
        return f"-- Source code not available for {routine.qualified_name}"

    def get_table_ddl(
        self, data_source: DataSource, table: TableRef, options: dict[str, object] | None = None
    ) -> str:
        opts = DDLOptions.from_mapping(options)
        name = table.qualified_name
        if not table.columns:
            return f"-- No column metadata available for {name}"

        lines = [f"\t{self._column_definition(c)}" for c in table.columns]
        if table.primary_key:
            key = ", ".join(quote_identifier(c) for c in table.primary_key)
            lines.append(f"\tPRIMARY KEY ({key})")
        ddl = f"CREATE TABLE {name} (\n" + ",\n".join(lines) + "\n);"

        if opts.show_comments:
            comments: list[str] = []
            if table.remarks:
                comments.append(f"COMMENT ON TABLE {name} IS {_sql_literal(table.remarks)};")
            for c in table.columns:
                if c.remarks:
                    comments.append(
                        f"COMMENT ON COLUMN {name}.{quote_identifier(c.name)} "
                        f"IS {_sql_literal(c.remarks)};"
                    )
            if comments:
                ddl += "\n\n" + "\n".join(comments)
        return ddl

    def _column_definition(self, column: ColumnAttributes) -> str:
        parts = [quote_identifier(column.name), column_type(column)]
        if column.default_value is not None:
            parts.append(f"DEFAULT {column.default_value}")
        if column.auto_increment:
            clause = self.get_auto_increment_clause(column)
            if clause:
                parts.append(clause)
        if column.not_null:
            parts.append("NOT NULL")
        return " ".join(parts)

    def supports_table_ddl_split(self, table: TableRef) -> bool:
        return True

    def supports_triggers(self, data_source: DataSource) -> bool:
        return False

    def list_triggers(
        self, data_source: DataSource, container: SchemaRef, table: TableRef | None = None
    ) -> list[Trigger]:
        return []

    def get_trigger_ddl(self, data_source: DataSource, trigger: TriggerRef) -> str:
        return f"-- Trigger definition not available for {trigger.qualified_name}"

    def supports_synonyms(self, data_source: DataSource) -> bool:
        return False

    def list_synonyms(self, data_source: DataSource, container: SchemaRef) -> list[Synonym]:
        return []

    def get_auto_increment_clause(self, column: ColumnAttributes) -> str | None:
        return None

    def is_system_table(self, table: TableRef) -> bool:
        return False

    def get_error_position(self, error: BaseException) -> ErrorPosition | None:
        return None

    def create_table_column(
        self, data_source: DataSource, table: TableRef, attrs: ColumnAttributes
    ) -> TableColumn:
        return build_column(attrs)
