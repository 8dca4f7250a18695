"""Run execution entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from state_reconciler.configuration.runtime_settings import Configuration
from state_reconciler.schema_management.schema_models import ResourceSchema
from state_reconciler.state_writing.resource_state import ResourceState


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one reconciliation run."""

    config_path: str
    remote_path: str
    state_path: str
    output_path: str | None = None
    report_path: str | None = None
    data_source: bool = False


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    output_path: Path
    resource_id: str | None
    report_path: Path | None
    changed_properties: tuple[str, ...]


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded domain artifacts required during run execution."""

    configuration: Configuration
    schema: ResourceSchema
    remote_payload: Mapping[str, Any]
    prior_state: ResourceState
