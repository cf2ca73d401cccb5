"""Units of SYS monitoring view columns, loaded once per data source."""

from __future__ import annotations

import enum
import logging
import threading
from typing import TYPE_CHECKING

from hanameta.adapters._base import MetadataError

if TYPE_CHECKING:
    from hanameta.datasource import DataSource

logger = logging.getLogger(__name__)

UNITS_QUERY = (
    "SELECT VIEW_NAME, VIEW_COLUMN_NAME, UNIT "
    "FROM SYS.M_MONITOR_COLUMNS "
    "WHERE UNIT IS NOT NULL"
)


class InitState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class SysViewUnits:
    """One-time-initialized map of (view, column) -> unit.

    Concurrent first callers of ensure() block until the load has finished;
    the query runs at most once per instance.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = InitState.UNINITIALIZED
        self._units: dict[tuple[str, str], str] = {}

    @property
    def state(self) -> InitState:
        return self._state

    def ensure(self, data_source: DataSource) -> None:
        if self._state is InitState.READY:
            return
        with self._lock:
            if self._state is InitState.READY:
                return
            self._state = InitState.INITIALIZING
            try:
                self._units = self._load(data_source)
                logger.debug(
                    "Loaded %d SYS view column units for '%s'", len(self._units), data_source.name
                )
            except MetadataError as e:
                logger.warning("Error reading SYS view column units: %s", e)
                self._units = {}
            except Exception:
                self._state = InitState.UNINITIALIZED
                raise
            self._state = InitState.READY

    @staticmethod
    def _load(data_source: DataSource) -> dict[tuple[str, str], str]:
        with data_source.meta_session("Read SYS view column units") as session:
            rows = session.query(UNITS_QUERY)
        return {(view, column): unit for view, column, unit in rows if unit}

    def unit_for(self, view_name: str, column_name: str) -> str | None:
        return self._units.get((view_name, column_name))
