"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any


class ChangeStatus(str, Enum):
    """Rendered status of one top-level property in the report."""

    UNCHANGED = "UNCHANGED"
    ADDED = "ADDED"
    UPDATED = "UPDATED"
    REMOVED = "REMOVED"
    WRITE_ONLY = "WRITE_ONLY"


@dataclass(frozen=True)
class PropertyChange:
    """Previous and merged state value of one schema property."""

    state_name: str
    status: ChangeStatus
    previous: Any
    merged: Any

    @property
    def is_change(self) -> bool:
        return self.status not in (ChangeStatus.UNCHANGED, ChangeStatus.WRITE_ONLY)


@dataclass(frozen=True)
class RunMetadata:  # pylint: disable=too-many-instance-attributes
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    resource_name: str
    resource_id: str | None
    remote_path: Path
    state_path: Path
    output_path: Path
    timeout_seconds: int
    data_source: bool
