"""Column object construction."""

from __future__ import annotations

from dataclasses import fields

from hanameta.meta._types import ColumnAttributes, ColumnVariant, TableColumn, TableRef

SYSTEM_SCHEMA = "SYS"


def select_column_variant(table: TableRef) -> ColumnVariant:
    """Columns of views in the SYS schema carry units; everything else is generic."""
    if table.schema == SYSTEM_SCHEMA and table.is_view:
        return ColumnVariant.SYSTEM_VIEW
    return ColumnVariant.GENERIC


def build_column(
    attrs: ColumnAttributes,
    variant: ColumnVariant = ColumnVariant.GENERIC,
    unit: str | None = None,
) -> TableColumn:
    values = {f.name: getattr(attrs, f.name) for f in fields(ColumnAttributes)}
    return TableColumn(**values, variant=variant, unit=unit)
