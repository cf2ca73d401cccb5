"""CLI tests for `hanameta triggers`, `synonyms` and `errpos`."""

from __future__ import annotations

import json

from click.testing import CliRunner

from hanameta.cli import main


def test_triggers_text(snapshot_db) -> None:
    result = CliRunner().invoke(main, ["triggers", "SALES.ORDERS", "--db", snapshot_db])
    assert result.exit_code == 0
    assert result.output.strip().split("\n") == ["TRG_A", "TRG_B"]


def test_triggers_none(snapshot_db) -> None:
    result = CliRunner().invoke(main, ["triggers", "SALES.ITEMS", "--db", snapshot_db])
    assert result.exit_code == 0
    assert "No triggers on SALES.ITEMS." in result.output


def test_triggers_json(snapshot_db) -> None:
    result = CliRunner().invoke(main, [
        "triggers", "SALES.ORDERS", "--db", snapshot_db, "--format", "json",
    ])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"table": "SALES.ORDERS", "triggers": ["TRG_A", "TRG_B"]}


def test_synonyms_text_sorted(snapshot_db) -> None:
    result = CliRunner().invoke(main, ["synonyms", "APP", "--db", snapshot_db])
    assert result.exit_code == 0
    assert result.output.strip().split("\n") == [
        "CUSTOMERS -> CRM.CUSTOMERS",
        "ORDERS -> SALES.ORDERS",
    ]


def test_synonyms_json(snapshot_db) -> None:
    result = CliRunner().invoke(main, ["synonyms", "APP", "--db", snapshot_db, "--format", "json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert [s["name"] for s in data["synonyms"]] == ["CUSTOMERS", "ORDERS"]
    assert data["synonyms"][0]["target_schema"] == "CRM"


def test_synonyms_empty(snapshot_db) -> None:
    result = CliRunner().invoke(main, ["synonyms", "NONE", "--db", snapshot_db])
    assert result.exit_code == 0
    assert "No synonyms in 'NONE'." in result.output


def test_errpos_found() -> None:
    result = CliRunner().invoke(main, ["errpos", "syntax error (at pos 42)"])
    assert result.exit_code == 0
    assert result.output.strip() == "41"


def test_errpos_json() -> None:
    result = CliRunner().invoke(main, ["errpos", "--format", "json", "bad (at pos 1)"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"line": -1, "position": 0}


def test_errpos_missing() -> None:
    result = CliRunner().invoke(main, ["errpos", "table not found"])
    assert result.exit_code == 1
    assert "no position" in result.output
