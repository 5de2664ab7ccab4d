"""Tests for the coachplan command line interface."""

import json

import pytest
from typer.testing import CliRunner

from coachplan.cli import app

runner = CliRunner()


@pytest.fixture
def document_file(tmp_path, academy_document):
    path = tmp_path / "elite.txt"
    path.write_text(academy_document, encoding="utf-8")
    return path


def test_extract_writes_json(document_file, tmp_path):
    output = tmp_path / "result.json"

    result = runner.invoke(app, ["extract", str(document_file), "--base-date", "2024-01-01", "--output", str(output)])

    assert result.exit_code == 0, result.output
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["organization_pattern"] == "weekly_with_days"
    assert payload["total_weeks"] == 2
    assert payload["source_document"] == "elite"
    assert payload["sessions"][0]["daily_sessions"][0]["date"] == "2024-01-01"


def test_extract_prints_schedule(document_file):
    result = runner.invoke(app, ["extract", str(document_file), "--base-date", "2024-01-01"])

    assert result.exit_code == 0, result.output
    assert "ELITE SOCCER ACADEMY" in result.output
    assert "Overall confidence" in result.output


def test_extract_missing_file(tmp_path):
    result = runner.invoke(app, ["extract", str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "cannot read" in result.output


def test_extract_bad_base_date(document_file):
    result = runner.invoke(app, ["extract", str(document_file), "--base-date", "01/02/2024"])

    assert result.exit_code == 1
    assert "--base-date must be YYYY-MM-DD" in result.output


def test_extract_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("   \n", encoding="utf-8")

    result = runner.invoke(app, ["extract", str(path)])

    assert result.exit_code == 1
    assert "EMPTY_DOCUMENT" in result.output


def test_detect(tmp_path, spanish_document):
    path = tmp_path / "semana.txt"
    path.write_text(spanish_document, encoding="utf-8")

    result = runner.invoke(app, ["detect", str(path)])

    assert result.exit_code == 0, result.output
    assert "Language: spanish" in result.output
    assert "Pattern: weekly_with_days" in result.output


def test_upcoming(document_file):
    result = runner.invoke(app, ["upcoming", str(document_file), "--base-date", "2024-01-01", "--limit", "3"])

    assert result.exit_code == 0, result.output
    assert "Upcoming sessions" in result.output
    assert "2024-01-01" in result.output
