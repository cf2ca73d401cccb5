"""SAP HANA metadata provider: DDL and catalog reads against the SYS views."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from hanameta.adapters._base import MetadataError, SessionError
from hanameta.meta._types import (
    UNKNOWN_LINE,
    ColumnAttributes,
    ColumnVariant,
    ErrorPosition,
    RoutineRef,
    SchemaRef,
    Synonym,
    TableColumn,
    TableRef,
    Trigger,
    TriggerRef,
)
from hanameta.meta.columns import build_column, select_column_variant
from hanameta.meta.formatting import format_sql
from hanameta.meta.generic import GenericMetadataProvider

if TYPE_CHECKING:
    from hanameta.datasource import DataSource

logger = logging.getLogger(__name__)

VIEW_NOT_FOUND = "-- HANA view definition not found"
TRIGGER_NOT_FOUND = "-- HANA trigger source not found"

AUTO_INCREMENT_CLAUSE = "GENERATED ALWAYS AS IDENTITY"
SYSTEM_OBJECT_PREFIX = "_SYS_"

# The driver reports a one-based character offset, never a line.
_ERROR_POSITION_RE = re.compile(r" \(at pos ([0-9]+)\)")

_VIEW_SQL = "SELECT DEFINITION FROM SYS.VIEWS WHERE SCHEMA_NAME = ? AND VIEW_NAME = ?"
_TABLE_SQL = "CALL get_object_definition(?, ?)"
# Matches the subject table schema as well as its name.
_TRIGGERS_SQL = (
    "SELECT TRIGGER_NAME FROM SYS.TRIGGERS "
    "WHERE SUBJECT_TABLE_SCHEMA = ? AND SUBJECT_TABLE_NAME = ? "
    "ORDER BY TRIGGER_NAME"
)
_TRIGGER_SQL = (
    "SELECT SCHEMA_NAME, TRIGGER_NAME, DEFINITION FROM SYS.TRIGGERS "
    "WHERE SCHEMA_NAME = ? AND TRIGGER_NAME = ?"
)
_SYNONYMS_SQL = (
    "SELECT SYNONYM_NAME, OBJECT_SCHEMA, OBJECT_NAME FROM SYS.SYNONYMS "
    "WHERE SCHEMA_NAME = ? ORDER BY SYNONYM_NAME"
)


def routine_not_found(routine: RoutineRef) -> str:
    return f"-- HANA {routine.kind.label} source not found"


def routine_sql(routine: RoutineRef) -> str:
    # kind comes from the closed RoutineKind enum, never from user input
    kind = routine.kind.value
    return (
        f"SELECT SCHEMA_NAME, {kind}_NAME, DEFINITION FROM SYS.{kind}S "
        f"WHERE SCHEMA_NAME = ? AND {kind}_NAME = ?"
    )


def extract_error_position(message: str | None) -> ErrorPosition | None:
    """Find the ' (at pos N)' marker in a HANA error message.

    N is one-based; the returned position is zero-based.
    """
    if not message:
        return None
    match = _ERROR_POSITION_RE.search(message)
    if match is None:
        return None
    pos = int(match.group(1))
    if pos < 1:
        return None
    return ErrorPosition(line=UNKNOWN_LINE, position=pos - 1)


def _error_message(error: BaseException) -> str:
    # hdbcli errors keep the server text in `errortext`
    text = getattr(error, "errortext", None)
    if isinstance(text, str) and text:
        return text
    return str(error)


class HanaMetadataProvider(GenericMetadataProvider):
    """Metadata provider for SAP HANA."""

    def get_view_ddl(
        self, data_source: DataSource, view: TableRef, options: dict[str, object] | None = None
    ) -> str:
        try:
            with data_source.meta_session("Read HANA view source") as session:
                row = session.query_one(_VIEW_SQL, (view.schema, view.name))
        except SessionError as e:
            raise MetadataError(
                f"HANA view source read failed: {e}", data_source=data_source
            ) from e
        # DEFINITION is NULL for objects whose source is not readable.
        if row is None or row[0] is None:
            return VIEW_NOT_FOUND
        return f"CREATE VIEW {view.qualified_name} AS\n{row[0]}"

    def get_routine_ddl(self, data_source: DataSource, routine: RoutineRef) -> str:
        try:
            with data_source.meta_session(f"Read HANA {routine.kind.label} source") as session:
                row = session.query_one(routine_sql(routine), (routine.schema, routine.name))
        except SessionError as e:
            raise MetadataError(
                f"HANA {routine.kind.label} source read failed: {e}", data_source=data_source
            ) from e
        if row is None or row[2] is None:
            return routine_not_found(routine)
        return row[2]

    def get_table_ddl(
        self, data_source: DataSource, table: TableRef, options: dict[str, object] | None = None
    ) -> str:
        # Falls back to the generic DDL on any failure, not only driver errors.
        try:
            with data_source.meta_session("Read HANA table DDL") as session:
                rows = session.query_dicts(_TABLE_SQL, (table.schema, table.name))
            ddl = "".join(
                str(row["OBJECT_CREATION_STATEMENT"])
                for row in rows
                if row.get("OBJECT_CREATION_STATEMENT") is not None
            )
            if ddl:
                return format_sql(ddl)
        except Exception:
            logger.debug("Error reading DDL from HANA server", exc_info=True)

        return super().get_table_ddl(data_source, table, options)

    def supports_table_ddl_split(self, table: TableRef) -> bool:
        return False

    def supports_triggers(self, data_source: DataSource) -> bool:
        return True

    def list_triggers(
        self, data_source: DataSource, container: SchemaRef, table: TableRef | None = None
    ) -> list[Trigger]:
        if table is None:
            return []
        try:
            with data_source.meta_session("Read triggers") as session:
                rows = session.query(_TRIGGERS_SQL, (table.schema, table.name))
        except SessionError as e:
            raise MetadataError(
                f"HANA trigger list read failed: {e}", data_source=data_source
            ) from e
        return [Trigger(schema=container.name, name=name, table=table.name) for (name,) in rows]

    def get_trigger_ddl(self, data_source: DataSource, trigger: TriggerRef) -> str:
        try:
            with data_source.meta_session("Read HANA trigger source") as session:
                row = session.query_one(_TRIGGER_SQL, (trigger.schema, trigger.name))
        except SessionError as e:
            raise MetadataError(
                f"HANA trigger source read failed: {e}", data_source=data_source
            ) from e
        if row is None or row[2] is None:
            return TRIGGER_NOT_FOUND
        return row[2]

    def supports_synonyms(self, data_source: DataSource) -> bool:
        return True

    def list_synonyms(self, data_source: DataSource, container: SchemaRef) -> list[Synonym]:
        # TODO: PUBLIC synonyms have no schema of their own and are not listed yet.
        try:
            with data_source.meta_session("Read synonyms") as session:
                rows = session.query(_SYNONYMS_SQL, (container.name,))
        except SessionError as e:
            raise MetadataError(
                f"HANA synonym list read failed: {e}", data_source=data_source
            ) from e
        return [
            Synonym(
                schema=container.name,
                name=name,
                target_schema=target_schema,
                target_object=target_object,
            )
            for name, target_schema, target_object in rows
        ]

    def get_auto_increment_clause(self, column: ColumnAttributes) -> str | None:
        return AUTO_INCREMENT_CLAUSE

    def is_system_table(self, table: TableRef) -> bool:
        # Only the object name is checked, not the schema.
        return table.name.startswith(SYSTEM_OBJECT_PREFIX)

    def get_error_position(self, error: BaseException) -> ErrorPosition | None:
        return extract_error_position(_error_message(error))

    def create_table_column(
        self, data_source: DataSource, table: TableRef, attrs: ColumnAttributes
    ) -> TableColumn:
        variant = select_column_variant(table)
        if variant is ColumnVariant.SYSTEM_VIEW:
            data_source.sys_view_units.ensure(data_source)
            unit = data_source.sys_view_units.unit_for(table.name, attrs.name)
            return build_column(attrs, variant, unit)
        return build_column(attrs)
