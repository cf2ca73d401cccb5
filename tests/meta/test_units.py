"""One-time loading of SYS view column units."""

from __future__ import annotations

import contextlib
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from hanameta.adapters._base import SessionError
from hanameta.meta import ColumnAttributes, ColumnVariant, HanaMetadataProvider, TableRef
from hanameta.meta.units import UNITS_QUERY, InitState, SysViewUnits


class _UnitsCatalog:
    """Data source stand-in that counts unit queries."""

    name = "units"

    def __init__(self, rows=None, error: Exception | None = None, delay: float = 0.0) -> None:
        self.rows = rows if rows is not None else [("M_MEMORY", "USED", "byte")]
        self.error = error
        self.delay = delay
        self.queries: list[str] = []
        self.sys_view_units = SysViewUnits()
        self._lock = threading.Lock()

    @contextlib.contextmanager
    def meta_session(self, purpose):
        yield self

    def query(self, sql, params=()):
        with self._lock:
            self.queries.append(sql)
        time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.rows


_VIEW = TableRef("SYS", "M_MEMORY", is_view=True)


def test_units_start_uninitialized():
    assert SysViewUnits().state is InitState.UNINITIALIZED


def test_ensure_loads_once():
    ds = _UnitsCatalog()
    units = ds.sys_view_units
    units.ensure(ds)
    units.ensure(ds)
    assert ds.queries == [UNITS_QUERY]
    assert units.state is InitState.READY
    assert units.unit_for("M_MEMORY", "USED") == "byte"
    assert units.unit_for("M_MEMORY", "FREE") is None


def test_concurrent_first_use_initializes_once():
    ds = _UnitsCatalog(delay=0.05)
    provider = HanaMetadataProvider()
    start = threading.Barrier(8)

    def build(_):
        start.wait()
        return provider.create_table_column(ds, _VIEW, ColumnAttributes("USED", "BIGINT"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        columns = list(pool.map(build, range(8)))

    assert len(ds.queries) == 1
    assert all(c.variant is ColumnVariant.SYSTEM_VIEW for c in columns)
    # Every caller saw the finished load, not an empty map.
    assert all(c.unit == "byte" for c in columns)


def test_units_are_per_data_source():
    provider = HanaMetadataProvider()
    first, second = _UnitsCatalog(), _UnitsCatalog(rows=[("M_MEMORY", "USED", "KB")])
    a = provider.create_table_column(first, _VIEW, ColumnAttributes("USED", "BIGINT"))
    b = provider.create_table_column(second, _VIEW, ColumnAttributes("USED", "BIGINT"))
    assert (a.unit, b.unit) == ("byte", "KB")
    assert len(first.queries) == len(second.queries) == 1


def test_failed_load_leaves_empty_units_and_does_not_retry():
    ds = _UnitsCatalog(error=SessionError("insufficient privilege"))
    provider = HanaMetadataProvider()

    column = provider.create_table_column(ds, _VIEW, ColumnAttributes("USED", "BIGINT"))
    provider.create_table_column(ds, _VIEW, ColumnAttributes("FREE", "BIGINT"))

    assert column.variant is ColumnVariant.SYSTEM_VIEW
    assert column.unit is None
    assert ds.sys_view_units.state is InitState.READY
    assert len(ds.queries) == 1


def test_unexpected_error_resets_state():
    ds = _UnitsCatalog(error=RuntimeError("driver crashed"))
    units = ds.sys_view_units
    try:
        units.ensure(ds)
    except RuntimeError:
        pass
    assert units.state is InitState.UNINITIALIZED
