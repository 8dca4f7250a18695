"""JSON persistence of resource state files."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from .resource_state import ResourceState


class StateFileError(Exception):
    """Raised when a state file cannot be read or has an unexpected layout."""


def load_state_file(state_path: Path | str) -> ResourceState:
    """Read a state file; a missing file is an empty state (first read)."""
    path = Path(state_path)
    if not path.exists():
        return ResourceState()
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise StateFileError(f"Invalid state file {path}: {exc}") from exc

    if document is None:
        return ResourceState()
    if not isinstance(document, Mapping):
        raise StateFileError(f"State file root must be an object: {path}")
    values = document.get("values") or {}
    if not isinstance(values, Mapping):
        raise StateFileError(f"State file 'values' must be an object: {path}")
    resource_id = document.get("id")
    if resource_id is not None and not isinstance(resource_id, str):
        raise StateFileError(f"State file 'id' must be a string: {path}")
    return ResourceState(values=dict(values), resource_id=resource_id)


def write_state_file(state_path: Path | str, state: ResourceState) -> Path:
    """Write ``state`` as JSON and return the resolved destination."""
    path = Path(state_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    document = {"id": state.resource_id, "values": state.values}
    path.write_text(
        json.dumps(document, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return path.resolve()
