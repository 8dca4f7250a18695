"""State file persistence tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from state_reconciler.state_writing import (
    ResourceState,
    StateFileError,
    load_state_file,
    write_state_file,
)


def test_missing_state_file_is_an_empty_state(tmp_path: Path) -> None:
    state = load_state_file(tmp_path / "absent.json")

    assert state.values == {}
    assert state.resource_id is None


def test_state_file_is_written_and_read_back(tmp_path: Path) -> None:
    state = ResourceState(values={"display_name": "edge", "zones": ["a"]}, resource_id="fw-1")

    written = write_state_file(tmp_path / "nested" / "state.json", state)

    document = json.loads(written.read_text(encoding="utf-8"))
    assert document == {"id": "fw-1", "values": {"display_name": "edge", "zones": ["a"]}}
    loaded = load_state_file(written)
    assert loaded == state


def test_null_document_is_an_empty_state(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("null", encoding="utf-8")

    assert load_state_file(path) == ResourceState()


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("{not json", "Invalid state file"),
        ("[1, 2]", "root must be an object"),
        ('{"values": [1]}', "'values' must be an object"),
        ('{"id": 5, "values": {}}', "'id' must be a string"),
    ],
)
def test_malformed_state_files_raise(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "state.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(StateFileError, match=message):
        load_state_file(path)


def test_snapshot_is_independent_of_state() -> None:
    state = ResourceState(values={"zones": ["a"]})

    snapshot = state.snapshot()
    state.values["zones"].append("b")

    assert snapshot == {"zones": ["a"]}
