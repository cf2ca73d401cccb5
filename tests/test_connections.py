"""Test named connections stored in a TOML file."""

import stat

import pytest

from hanameta.adapters._base import DatabaseType, MetadataError
from hanameta.connections import (
    connections_file,
    get_connection,
    list_connections,
    remove_connection,
    save_connection,
)


@pytest.fixture(autouse=True)
def conn_file(tmp_path, monkeypatch):
    path = tmp_path / "hanameta" / "connections.toml"
    monkeypatch.setenv("HANAMETA_CONNECTIONS", str(path))
    return path


def test_env_overrides_file(conn_file):
    assert connections_file() == conn_file


def test_empty_when_no_file():
    assert list_connections() == {}
    assert get_connection("prod") is None


def test_save_and_get(conn_file):
    path = save_connection("prod", DatabaseType.HANA, {"host": "hana", "password": 'p"w\\d'})
    assert path == conn_file

    config = get_connection("prod")
    assert config is not None
    assert config.name == "prod"
    assert config.db_type is DatabaseType.HANA
    assert config.params == {"host": "hana", "password": 'p"w\\d'}


def test_file_is_owner_only(conn_file):
    save_connection("local", DatabaseType.DUCKDB, {"path": ":memory:"})
    mode = stat.S_IMODE(conn_file.stat().st_mode)
    assert mode == stat.S_IRUSR | stat.S_IWUSR


def test_save_requires_host_for_hana():
    with pytest.raises(MetadataError, match="requires: host"):
        save_connection("prod", DatabaseType.HANA, {"user": "SYSTEM"})


def test_unknown_type_is_ignored(conn_file):
    conn_file.parent.mkdir(parents=True)
    conn_file.write_text('[old]\ntype = "postgres"\ndsn = "x"\n')
    assert get_connection("old") is None
    assert "old" in list_connections()


def test_invalid_toml(conn_file):
    conn_file.parent.mkdir(parents=True)
    conn_file.write_text("[broken\n")
    with pytest.raises(MetadataError, match="Invalid connections file"):
        list_connections()


def test_remove(conn_file):
    save_connection("a", DatabaseType.DUCKDB, {})
    save_connection("b", DatabaseType.DUCKDB, {"path": "b.duckdb"})
    assert remove_connection("a") is True
    assert list(list_connections()) == ["b"]
    assert remove_connection("b") is True
    assert not conn_file.exists()
    assert remove_connection("b") is False
