"""Persisted local state entities."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ResourceState:
    """Local state of one resource instance, keyed by state property names."""

    values: dict[str, Any] = field(default_factory=dict)
    resource_id: str | None = None

    def set_id(self, resource_id: str) -> None:
        self.resource_id = resource_id

    def snapshot(self) -> dict[str, Any]:
        """Return a deep copy of the stored values."""
        return copy.deepcopy(self.values)
