"""SQL pretty-printing for DDL read from the server."""

from __future__ import annotations

import sqlglot
from sqlglot import exp
from sqlglot.errors import SqlglotError


def format_sql(sql: str, *, dialect: str | None = None) -> str:
    """Pretty-print SQL statements.

    Text sqlglot cannot parse, or only parses as an opaque command, is
    returned unchanged. sqlglot has no SAP HANA dialect, so most server DDL
    (column store types, `CREATE COLUMN TABLE`, table options) passes
    through as-is; only plain ANSI-style DDL is reformatted.
    """
    if not sql.strip():
        return sql
    try:
        statements = sqlglot.parse(sql, read=dialect)
    except SqlglotError:
        return sql

    parsed = [s for s in statements if s is not None]
    if not parsed or any(isinstance(s, exp.Command) for s in parsed):
        return sql

    try:
        rendered = [s.sql(dialect=dialect, pretty=True) for s in parsed]
    except SqlglotError:
        return sql
    return ";\n\n".join(rendered)
