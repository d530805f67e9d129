from __future__ import annotations

import json
import logging

import pytest

from cli.commands import extract as extract_command
from cli.commands import extract_batch as extract_batch_command
from cli.commands import inspect as inspect_command
from conftest import GUID_A, pathname, write_package
from core.config import config


@pytest.fixture
def package(tmp_path):
    return write_package(tmp_path / "Props.unitypackage", [
        (f"{GUID_A}/asset", b"mesh"),
        (f"{GUID_A}/pathname", pathname("Assets/Models/crate.fbx")),
    ])


def test_extract_success(package, tmp_path, capsys):
    out = tmp_path / "out"

    assert extract_command.main([package, str(out)]) == 0

    assert (out / "Props" / "Assets" / "Models" / "crate.fbx").read_bytes() == b"mesh"
    assert "1 asset(s) extracted" in capsys.readouterr().out


def test_extract_defaults_to_current_directory(package, tmp_path, monkeypatch):
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)

    assert extract_command.main([package, "--quiet"]) == 0

    assert (work / "Props" / "Assets" / "Models" / "crate.fbx").exists()


def test_extract_uses_config_output_dir(package, tmp_path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"storage": {"output_dir": str(tmp_path / "from-config")}}))

    assert extract_command.main([package, "--config", str(cfg), "-q"]) == 0

    assert (tmp_path / "from-config" / "Props" / "Assets" / "Models" / "crate.fbx").exists()


def test_extract_draws_progress_bar(package, tmp_path, capsys):
    config.set("progress", "min_archive_size_mb", 0)

    assert extract_command.main([package, str(tmp_path / "out")]) == 0

    assert "100.0%" in capsys.readouterr().out


def test_extract_bad_extension_exits_non_zero(tmp_path, caplog):
    with pytest.raises(SystemExit) as excinfo:
        extract_command.main([str(tmp_path / "archive.zip"), str(tmp_path)])

    assert excinfo.value.code == 1
    assert "ERROR: The input file must end with .unitypackage" in caplog.text


def test_extract_format_violation_exits_non_zero(tmp_path, caplog):
    bad = write_package(tmp_path / "Bad.unitypackage", [
        (f"{GUID_A}/pathname", pathname("../../evil.txt")),
        (f"{GUID_A}/asset", b"x"),
    ])

    with pytest.raises(SystemExit) as excinfo:
        extract_command.main([bad, str(tmp_path / "out"), "-q"])

    assert excinfo.value.code == 1
    assert "ERROR:" in caplog.text


def test_make_progress_bar_respects_threshold():
    config.set("progress", "min_archive_size_mb", 1)
    assert extract_command.make_progress_bar(10) is None

    config.set("progress", "enabled", False)
    assert extract_command.make_progress_bar(10 * 1024 * 1024) is None


def test_extract_batch(package, tmp_path):
    out = tmp_path / "batch-out"

    assert extract_batch_command.main([str(tmp_path), "-o", str(out), "-w", "1"]) == 0

    assert (out / "Props" / "Assets" / "Models" / "crate.fbx").exists()


def test_extract_batch_failure_exits_non_zero(tmp_path):
    write_package(tmp_path / "Bad.unitypackage", [
        (f"{GUID_A}/pathname", pathname("/absolute/path.txt")),
    ])

    with pytest.raises(SystemExit) as excinfo:
        extract_batch_command.main([str(tmp_path), "-o", str(tmp_path / "out")])

    assert excinfo.value.code == 1


def test_inspect_command(package, capsys):
    assert inspect_command.main([package, "-v"]) == 0
    assert "Assets/Models/crate.fbx" in capsys.readouterr().out


def test_inspect_command_missing_file(tmp_path, caplog):
    with pytest.raises(SystemExit) as excinfo:
        inspect_command.main([str(tmp_path / "Missing.unitypackage")])

    assert excinfo.value.code == 1
    assert "ERROR:" in caplog.text


def test_extract_failure_is_reported_once(tmp_path, caplog):
    bad = write_package(tmp_path / "Dupe.unitypackage", [
        (f"{GUID_A}/pathname", pathname("Assets/a.txt")),
        (f"{GUID_A}/pathname", pathname("Assets/b.txt")),
    ])

    with pytest.raises(SystemExit):
        extract_command.main([bad, str(tmp_path / "out"), "-q"])

    errors = [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert len(errors) == 1
    assert errors[0].getMessage().startswith("ERROR: Duplicate pathname record")
