from __future__ import annotations

import json

import pytest

from json_store import atomic_write_json, dumps_json, read_json


def test_read_json_tolerates_missing_empty_and_invalid(tmp_path):
    assert read_json(tmp_path / "nope.json") is None

    empty = tmp_path / "empty.json"
    empty.write_text("   \n", encoding="utf-8")
    assert read_json(empty) is None

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert read_json(bad) is None


def test_formatting_styles():
    doc = {"b": 1, "a": {"c": [1, 2]}}
    assert dumps_json(doc, formatting="compact") == '{"b":1,"a":{"c":[1,2]}}'

    expanded = dumps_json(doc, formatting="expanded")
    assert expanded.startswith('{\n  "b": 1,')
    assert json.loads(expanded) == doc

    with pytest.raises(ValueError):
        dumps_json(doc, formatting="pretty")  # type: ignore[arg-type]


def test_atomic_write_creates_parents_and_leaves_no_temp_file(tmp_path):
    path = tmp_path / "nested" / "dir" / "db.json"
    atomic_write_json(path, {"k": "v"})

    assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}
    assert not path.with_suffix(".json.tmp").exists()
