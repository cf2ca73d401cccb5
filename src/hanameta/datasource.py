"""Data sources and the scoped sessions metadata providers borrow from them."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator, Sequence
from typing import Any

from hanameta.adapters._base import ConnectionConfig, Connector, MetadataError, SessionError
from hanameta.adapters._registry import get_connector
from hanameta.meta.units import SysViewUnits

logger = logging.getLogger(__name__)


class Session:
    """One cursor, used for a single metadata call and then closed.

    Driver exceptions are re-raised as SessionError.
    """

    def __init__(self, cursor: Any, driver_error: type[Exception]) -> None:
        self._cursor = cursor
        self._driver_error = driver_error

    @contextlib.contextmanager
    def _driver_call(self) -> Iterator[None]:
        try:
            yield
        except self._driver_error as e:
            raise SessionError(str(e)) from e

    def execute(self, sql: str, params: Sequence[object] = ()) -> None:
        with self._driver_call():
            if params:
                self._cursor.execute(sql, list(params))
            else:
                self._cursor.execute(sql)

    def fetchone(self) -> tuple | None:
        with self._driver_call():
            row = self._cursor.fetchone()
        return tuple(row) if row is not None else None

    def fetchall(self) -> list[tuple]:
        with self._driver_call():
            rows = self._cursor.fetchall()
        return [tuple(row) for row in rows]

    @property
    def columns(self) -> list[str]:
        description = self._cursor.description
        return [desc[0] for desc in description] if description else []

    def query(self, sql: str, params: Sequence[object] = ()) -> list[tuple]:
        self.execute(sql, params)
        return self.fetchall()

    def query_one(self, sql: str, params: Sequence[object] = ()) -> tuple | None:
        self.execute(sql, params)
        return self.fetchone()

    def query_dicts(self, sql: str, params: Sequence[object] = ()) -> list[dict[str, object]]:
        """Run a query and key each row by upper-cased column name."""
        self.execute(sql, params)
        columns = [c.upper() for c in self.columns]
        return [dict(zip(columns, row, strict=True)) for row in self.fetchall()]

    def close(self) -> None:
        with contextlib.suppress(self._driver_error):
            self._cursor.close()


class DataSource:
    """A connected database plus the per-data-source state providers rely on."""

    def __init__(self, config: ConnectionConfig, connector: Connector | None = None) -> None:
        self.config = config
        self.sys_view_units = SysViewUnits()
        self._connector = connector
        self._conn: Any | None = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        if self.connected:
            return
        if self._connector is None:
            self._connector = get_connector(self.config.db_type)()
        self._conn = self._connector.connect(self.config)
        logger.debug("Connected data source '%s' (%s)", self.name, self.config.db_type.value)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed data source '%s'", self.name)

    def __enter__(self) -> DataSource:
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _ensure_conn(self) -> Any:
        if not self.connected:
            raise MetadataError("Not connected. Call connect() first.", data_source=self)
        return self._conn

    @contextlib.contextmanager
    def meta_session(self, purpose: str) -> Iterator[Session]:
        """Open a session for one metadata read; the cursor is closed on exit."""
        conn = self._ensure_conn()
        assert self._connector is not None
        driver_error = self._connector.driver_error
        try:
            cursor = conn.cursor()
        except driver_error as e:
            raise SessionError(f"{purpose}: {e}", data_source=self) from e

        session = Session(cursor, driver_error)
        logger.debug("Opened meta session '%s' on '%s'", purpose, self.name)
        try:
            yield session
        finally:
            session.close()
            logger.debug("Closed meta session '%s' on '%s'", purpose, self.name)
