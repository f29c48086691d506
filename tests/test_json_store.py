from __future__ import annotations

import json
import stat

import pytest

from json_store import atomic_write_json, read_json


def test_read_json_missing_and_blank_files(tmp_path):
    assert read_json(tmp_path / "missing.json") is None

    blank = tmp_path / "blank.json"
    blank.write_text("   \n", encoding="utf-8")
    assert read_json(blank) is None


def test_read_json_invalid_raises(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")

    with pytest.raises(ValueError):
        read_json(bad)


def test_atomic_write_json_creates_parents_and_formats(tmp_path):
    path = tmp_path / "nested" / "dir" / "doc.json"

    atomic_write_json(path, {"b": 1, "a": [1, 2]})

    text = path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert text.index('"a"') < text.index('"b"')
    assert json.loads(text) == {"a": [1, 2], "b": 1}
    assert not path.with_suffix(".json.tmp").exists()


def test_atomic_write_json_is_not_world_writable(tmp_path):
    path = tmp_path / "doc.json"

    atomic_write_json(path, {})

    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_atomic_write_json_refuses_non_finite_numbers(tmp_path):
    path = tmp_path / "doc.json"
    atomic_write_json(path, {"v": 1.5})

    with pytest.raises(ValueError):
        atomic_write_json(path, {"v": float("nan")})

    assert path.read_text(encoding="utf-8").strip() == '{\n  "v": 1.5\n}'
    assert not path.with_suffix(".json.tmp").exists()


def test_atomic_write_json_keeps_old_content_on_failure(tmp_path):
    path = tmp_path / "doc.json"
    atomic_write_json(path, {"v": 1})

    with pytest.raises(TypeError):
        atomic_write_json(path, {"v": object()})

    assert json.loads(path.read_text(encoding="utf-8")) == {"v": 1}
    assert not path.with_suffix(".json.tmp").exists()
