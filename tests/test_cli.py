from __future__ import annotations

import csv
import json
import sys

import pytest

import cli
from config.settings import get_settings
from conftest import SAMPLE_CSV


@pytest.fixture
def data_file(tmp_path, monkeypatch):
    path = tmp_path / "data.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    monkeypatch.setenv("DATA_FILE", str(path))
    get_settings.cache_clear()
    return path


def _run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["agency-directory", *argv])
    cli.main()


def _json_from(out: str):
    return json.loads(out[out.index("[\n"):])


def test_list_json_filters_and_sorts(data_file, tmp_path, monkeypatch, capsys):
    db = str(tmp_path / "cache.db")
    _run_cli(monkeypatch, "--db", db, "--source", "file_csv", "list", "--json",
             "--platform", "youtube", "--sort", "followers", "--desc")
    rows = _json_from(capsys.readouterr().out)
    assert [r["agency"] for r in rows] == ["Agency 10", "Ärzte Media"]
    assert rows[0]["platforms"] == ["YouTube", "Twitch"]


def test_list_uses_cached_dataset(data_file, tmp_path, monkeypatch, capsys):
    db = str(tmp_path / "cache.db")
    _run_cli(monkeypatch, "--db", db, "--source", "file_csv", "list", "--json")
    capsys.readouterr()

    # A fresh cache wins over the changed file until --no-cache
    data_file.write_text("agency\nOnly One\n", encoding="utf-8")
    _run_cli(monkeypatch, "--db", db, "--source", "file_csv", "list", "--json")
    assert len(_json_from(capsys.readouterr().out)) == 3

    _run_cli(monkeypatch, "--db", db, "--source", "file_csv", "--no-cache", "list", "--json")
    assert [r["agency"] for r in _json_from(capsys.readouterr().out)] == ["Only One"]


def test_list_table_output(data_file, tmp_path, monkeypatch, capsys):
    _run_cli(monkeypatch, "--db", str(tmp_path / "cache.db"), "--source", "file_csv", "list", "-q", "münchen")
    out = capsys.readouterr().out
    assert "AGENCY DIRECTORY" in out
    assert "Agency 2" in out
    assert "Agency 10" not in out


def test_export_writes_filtered_rows(data_file, tmp_path, monkeypatch, capsys):
    target = tmp_path / "export.csv"
    _run_cli(monkeypatch, "--db", str(tmp_path / "cache.db"), "--source", "file_csv",
             "export", "--status", "active", "-o", str(target))
    assert "Exported 2 agencies" in capsys.readouterr().out

    with target.open(encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["agency"] for r in rows] == ["Agency 2", "Agency 10"]
    assert rows[1]["focus"] == "Gaming, Tech"


def test_options_prints_filter_choices(data_file, tmp_path, monkeypatch, capsys):
    _run_cli(monkeypatch, "--db", str(tmp_path / "cache.db"), "--source", "file_csv", "options")
    out = capsys.readouterr().out
    choices = json.loads(out[out.index("{\n"):])
    assert choices["platforms"] == ["Instagram", "TikTok", "Twitch", "YouTube"]
    assert choices["legal_forms"] == ["GmbH", "GmbH & Co. KG", "UG"]


def test_missing_data_file_exits_with_error(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("DATA_FILE", str(tmp_path / "missing.csv"))
    get_settings.cache_clear()
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(monkeypatch, "--db", str(tmp_path / "cache.db"), "--source", "file_csv", "list")
    assert excinfo.value.code == 1
    assert "Error loading data:" in capsys.readouterr().out


def test_clear_cache_forces_refetch(data_file, tmp_path, monkeypatch, capsys):
    db = str(tmp_path / "cache.db")
    _run_cli(monkeypatch, "--db", db, "--source", "file_csv", "list", "--json")
    data_file.write_text("agency\nOnly One\n", encoding="utf-8")
    _run_cli(monkeypatch, "--db", db, "clear-cache")
    capsys.readouterr()
    _run_cli(monkeypatch, "--db", db, "--source", "file_csv", "list", "--json")
    assert [r["agency"] for r in _json_from(capsys.readouterr().out)] == ["Only One"]


def test_negative_min_followers_is_rejected_by_argparse(tmp_path, monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(monkeypatch, "--db", str(tmp_path / "cache.db"), "list", "--min-followers", "-5")
    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert "must be >= 0" in err
    assert "ValidationError" not in err
