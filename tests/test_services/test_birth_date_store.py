"""Tests for the JSON birth date store."""

import json
from datetime import date

from life_weeks.services.birth_date_store import STORAGE_KEY, BirthDateStore


def test_load_missing_file_returns_none(state_file):
    assert BirthDateStore(state_file).load() is None


def test_save_then_load(state_file):
    store = BirthDateStore(state_file)
    store.save(date(1990, 5, 15))

    assert state_file.exists()
    assert json.loads(state_file.read_text()) == {STORAGE_KEY: "1990-05-15"}
    assert BirthDateStore(state_file).load() == date(1990, 5, 15)


def test_save_replaces_previous_value(state_file):
    store = BirthDateStore(state_file)
    store.save(date(1990, 5, 15))
    store.save(date(1985, 1, 2))
    assert store.load() == date(1985, 1, 2)


def test_save_keeps_unrelated_keys(state_file):
    state_file.parent.mkdir(parents=True)
    state_file.write_text(json.dumps({"theme": "dark"}))

    BirthDateStore(state_file).save(date(2000, 1, 1))

    data = json.loads(state_file.read_text())
    assert data == {"theme": "dark", STORAGE_KEY: "2000-01-01"}


def test_unparseable_date_is_treated_as_absent(state_file, caplog):
    state_file.parent.mkdir(parents=True)
    state_file.write_text(json.dumps({STORAGE_KEY: "not-a-date"}))

    assert BirthDateStore(state_file).load() is None
    assert "Ignoring persisted birth date" in caplog.text


def test_non_string_value_is_treated_as_absent(state_file):
    state_file.parent.mkdir(parents=True)
    state_file.write_text(json.dumps({STORAGE_KEY: 19900515}))
    assert BirthDateStore(state_file).load() is None


def test_corrupt_json_is_treated_as_absent(state_file):
    state_file.parent.mkdir(parents=True)
    state_file.write_text("{not json")
    assert BirthDateStore(state_file).load() is None


def test_non_object_json_is_treated_as_absent(state_file):
    state_file.parent.mkdir(parents=True)
    state_file.write_text(json.dumps(["1990-05-15"]))
    assert BirthDateStore(state_file).load() is None


def test_clear(state_file):
    store = BirthDateStore(state_file)
    store.save(date(1990, 5, 15))

    assert store.clear() is True
    assert store.load() is None
    assert store.clear() is False


def test_clear_without_file(state_file):
    assert BirthDateStore(state_file).clear() is False
    assert not state_file.exists()


def test_expands_user_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    store = BirthDateStore("~/lw/state.json")
    assert store.path == tmp_path / "lw" / "state.json"


def test_out_of_range_date_is_treated_as_absent(state_file, caplog):
    state_file.parent.mkdir(parents=True)
    state_file.write_text(json.dumps({STORAGE_KEY: "9950-01-01"}))

    assert BirthDateStore(state_file).load() is None
    assert "out of range" in caplog.text
