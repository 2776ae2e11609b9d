"""Tests for the life-weeks command line interface."""

import json
from datetime import date

import pytest
from typer.testing import CliRunner

from life_weeks.cli import app
from life_weeks.services.birth_date_store import BirthDateStore
from life_weeks.services.life_weeks_domain import TOTAL_WEEKS

runner = CliRunner()


@pytest.fixture(autouse=True)
def _settings(isolated_settings):
    return isolated_settings


def test_set_persists_and_renders(state_file):
    result = runner.invoke(app, ["set", "1990-05-15"])

    assert result.exit_code == 0, result.output
    assert BirthDateStore(state_file).load() == date(1990, 5, 15)
    assert "Life in Weeks" in result.output
    assert "days lived" in result.output


def test_set_rejects_invalid_date(state_file):
    result = runner.invoke(app, ["set", "1990-13-01"])

    assert result.exit_code != 0
    assert "Invalid" in result.output
    assert not state_file.exists()


def test_set_rejects_date_too_late_for_a_lifespan(state_file):
    result = runner.invoke(app, ["set", "9950-01-01"])

    assert result.exit_code != 0
    assert "range" in result.output
    assert not state_file.exists()


def test_set_requires_a_date():
    result = runner.invoke(app, ["set"])
    assert result.exit_code != 0


def test_show_without_birth_date_prompts():
    result = runner.invoke(app, ["show"])

    assert result.exit_code == 1
    assert "life-weeks set" in result.output


def test_show_uses_saved_date(state_file):
    BirthDateStore(state_file).save(date(2000, 1, 1))

    result = runner.invoke(app, ["show", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["birth_date"] == "2000-01-01"
    assert len(data["weeks"]) == TOTAL_WEEKS


def test_show_with_explicit_date_does_not_persist(state_file):
    BirthDateStore(state_file).save(date(1990, 5, 15))

    result = runner.invoke(app, ["show", "--date", "2000-01-01", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["birth_date"] == "2000-01-01"
    assert BirthDateStore(state_file).load() == date(1990, 5, 15)


def test_show_with_corrupt_state_prompts(state_file):
    state_file.parent.mkdir(parents=True)
    state_file.write_text("{broken")

    result = runner.invoke(app, ["show"])
    assert result.exit_code == 1


def test_show_renders_grid():
    result = runner.invoke(app, ["show", "--date", "2000-01-01"])

    assert result.exit_code == 0, result.output
    assert "2000" in result.output
    assert "% of 73 years" in result.output


def test_show_live_stops_after_seconds():
    result = runner.invoke(
        app, ["show", "--date", "2000-01-01", "--live", "--seconds", "0.05"]
    )

    assert result.exit_code == 0, result.output
    assert "remaining:" in result.output


def test_image_writes_png(tmp_path):
    out_dir = tmp_path / "png"
    result = runner.invoke(
        app, ["image", "--date", "2000-01-01", "--output", str(out_dir)]
    )

    assert result.exit_code == 0, result.output
    assert len(list(out_dir.glob("life-weeks-*.png"))) == 1


def test_image_uses_configured_output_dir(isolated_settings):
    result = runner.invoke(app, ["image", "--date", "2000-01-01"])

    assert result.exit_code == 0, result.output
    assert list(isolated_settings.image_output_path.glob("*.png"))


def test_clear_forgets_saved_date(state_file):
    BirthDateStore(state_file).save(date(1990, 5, 15))

    result = runner.invoke(app, ["clear"])

    assert result.exit_code == 0
    assert BirthDateStore(state_file).load() is None
