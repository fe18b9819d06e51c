"""Tests for the command-line interface."""

import json
import os
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from school_insights import __version__
from school_insights.cli import app
from school_insights.clients import DirectoryError
from school_insights.models import SchoolDirectoryPage

runner = CliRunner()


@pytest.fixture
def school_file(tmp_path):
    path = tmp_path / "school.json"
    path.write_text(json.dumps({
        "id": 101,
        "name": "Lycee Pilote de Tunis",
        "school_code": "TN-0101",
        "school_type": "Lycée",
        "delegation": "Tunis",
        "cre": "Tunis 1",
        "teachers": 50,
        "students": 1000,
    }), encoding="utf-8")
    return path


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_estimate(school_file):
    result = runner.invoke(app, ["estimate", str(school_file), "--seed", "3"])
    assert result.exit_code == 0
    assert "Teachers" in result.output
    assert "Students" in result.output
    assert "1000" in result.output


def test_estimate_is_reproducible_with_seed(school_file):
    first = runner.invoke(app, ["estimate", str(school_file), "--seed", "11"])
    second = runner.invoke(app, ["estimate", str(school_file), "--seed", "11"])
    assert first.output == second.output


def test_analyze_offline(school_file):
    """Test offline analysis prints the locally composed report."""
    result = runner.invoke(app, ["analyze", str(school_file), "--offline", "--seed", "3"])
    assert result.exit_code == 0
    assert "Statistics" in result.output
    assert "Number of Teachers: 50" in result.output
    assert "Alerts" in result.output
    assert "Ministry of Education Tunisia" in result.output


def test_analyze_arabic(school_file):
    result = runner.invoke(app, ["analyze", str(school_file), "--offline", "--locale", "ar"])
    assert result.exit_code == 0
    assert "عدد المعلمين: 50 معلم" in result.output


def test_analyze_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, ["analyze", str(path), "--offline"])
    assert result.exit_code == 1
    assert "Could not read school record" in result.output


def test_analyze_missing_file(tmp_path):
    result = runner.invoke(app, ["estimate", str(tmp_path / "missing.json")])
    assert result.exit_code == 1


def test_schools_listing():
    page = SchoolDirectoryPage.model_validate({
        "schools": [{"id": 7, "name": "Ecole Sbiba", "cre": "Kasserine", "delegation": "Sbiba"}],
        "total_count": 1,
    })
    with patch("school_insights.cli.SchoolDirectoryClient.fetch_schools",
               new=AsyncMock(return_value=page)) as fetch:
        result = runner.invoke(app, ["schools", "--delegation", "Sbiba"])

    assert result.exit_code == 0
    assert "Ecole Sbiba" in result.output
    assert fetch.await_args.args == (None, "Sbiba", None, None)


def test_schools_listing_failure():
    with patch.dict(os.environ, {"INSIGHT_BASE_URL": "http://localhost:8000"}), \
            patch("school_insights.cli.SchoolDirectoryClient.fetch_schools",
                  new=AsyncMock(side_effect=DirectoryError("API error 401", status=401))):
        result = runner.invoke(app, ["schools"])

    assert result.exit_code == 1
    assert "Failed to load school map data" in result.output
