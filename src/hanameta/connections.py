"""Named connections: ~/.hanameta/connections.toml.

Set HANAMETA_CONNECTIONS to use a different file.
"""

from __future__ import annotations

import os
import stat
import tomllib
from pathlib import Path

from hanameta.adapters._base import ConnectionConfig, DatabaseType, MetadataError

_DEFAULT_FILE = Path.home() / ".hanameta" / "connections.toml"

# Params a connection of each type cannot work without.
REQUIRED_PARAMS: dict[DatabaseType, tuple[str, ...]] = {
    DatabaseType.HANA: ("host",),
    DatabaseType.DUCKDB: (),
}


def connections_file() -> Path:
    override = os.environ.get("HANAMETA_CONNECTIONS")
    return Path(override) if override else _DEFAULT_FILE


def _escape_toml_value(v: str) -> str:
    return v.replace("\\", "\\\\").replace('"', '\\"')


def _quote_toml_key(k: str) -> str:
    if k.replace("_", "").replace("-", "").isalnum():
        return k
    return f'"{_escape_toml_value(k)}"'


def _write_toml(path: Path, data: dict[str, dict]) -> None:
    """Write connections with owner-only permissions; entries are flat string tables."""
    lines: list[str] = []
    for conn_name, entry in data.items():
        lines.append(f"[{_quote_toml_key(conn_name)}]")
        for k, v in entry.items():
            lines.append(f'{_quote_toml_key(k)} = "{_escape_toml_value(str(v))}"')
        lines.append("")

    path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
    path.write_text("\n".join(lines))
    os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)


def _load_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        raise MetadataError(f"Invalid connections file {path}: {e}") from e


def list_connections() -> dict[str, dict]:
    """Return all named connections as {name: {type, ...params}}."""
    return _load_file(connections_file())


def validate_params(db_type: DatabaseType, params: dict[str, str]) -> None:
    missing = [p for p in REQUIRED_PARAMS.get(db_type, ()) if not params.get(p)]
    if missing:
        raise MetadataError(
            f"Connection type '{db_type.value}' requires: {', '.join(missing)}"
        )


def get_connection(name: str) -> ConnectionConfig | None:
    """Look up a named connection. Returns None if it is absent or has no valid type."""
    data = list_connections()
    entry = data.get(name)
    if not isinstance(entry, dict):
        return None

    try:
        db_type = DatabaseType(entry.get("type"))
    except ValueError:
        return None

    params = {k: str(v) for k, v in entry.items() if k != "type"}
    return ConnectionConfig(name=name, db_type=db_type, params=params)


def save_connection(name: str, db_type: DatabaseType, params: dict[str, str]) -> Path:
    validate_params(db_type, params)
    path = connections_file()
    data = _load_file(path)
    data[name] = {"type": db_type.value, **params}
    _write_toml(path, data)
    return path


def remove_connection(name: str) -> bool:
    """Remove a named connection. Returns False if it was not there."""
    path = connections_file()
    data = _load_file(path)
    if name not in data:
        return False
    del data[name]
    if data:
        _write_toml(path, data)
    else:
        path.unlink(missing_ok=True)
    return True
