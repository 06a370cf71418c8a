"""Tests for the ``growth-index`` command line entry point."""

from __future__ import annotations

import json

from growth_index.cli import main


def test_cli_json_output(capsys, monkeypatch):
    monkeypatch.delenv("GROWTH_INDEX_WEIGHTS", raising=False)
    exit_code = main(["ACME", "ROOKIE", "--source", "sample", "--json"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] is True
    assert [item["ticker"] for item in payload["data"]] == ["ACME"]
    assert payload["data"][0]["interpretation"]["label"] == "Moderate Growth"
    assert payload["failures"][0]["ticker"] == "ROOKIE"


def test_cli_table_output(capsys):
    exit_code = main(["acme", "pivot", "rookie", "--source", "sample", "--weights", "display"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert out.index("PIVOT") < out.index("ACME")
    assert "! ROOKIE: Need 4yr income statement data for ROOKIE, got 3" in out


def test_cli_total_failure(capsys):
    exit_code = main(["ROOKIE", "--source", "sample"])

    assert exit_code == 1
    assert capsys.readouterr().out.startswith("Error: Need 4yr")


def test_cli_max_count(capsys):
    exit_code = main(["ACME", "PIVOT", "--source", "sample", "--max-count", "1", "--json"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert [item["ticker"] for item in payload["data"]] == ["ACME"]


def test_cli_alpha_vantage_requires_key(capsys, monkeypatch):
    monkeypatch.delenv("ALPHA_VANTAGE_API_KEY", raising=False)
    exit_code = main(["ACME", "--source", "alphavantage"])

    assert exit_code == 2
    assert "API key required" in capsys.readouterr().err
