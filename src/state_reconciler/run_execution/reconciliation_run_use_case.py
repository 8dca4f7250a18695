"""Reconciliation run use-case service."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from state_reconciler.configuration import ConfigurationError, load_configuration
from state_reconciler.results_writing import (
    RunMetadata,
    diff_states,
    write_reconciliation_report,
)
from state_reconciler.schema_management import SchemaError, load_resource_schema
from state_reconciler.state_merging import MergeError, MissingIdentifierError
from state_reconciler.state_writing import (
    ResourceState,
    StateFileError,
    load_state_file,
    set_state_identifier,
    update_data_source_state_with_payload,
    update_state_with_payload,
    write_state_file,
)

from .deadline_guard import ReconciliationTimeoutError, run_with_deadline
from .run_contracts import RunArtifacts, RunOutcome, RunRequest

_LOGGER = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_reconciliation_run(request: RunRequest) -> RunOutcome:
    """Reconcile one remote payload with the stored state and persist the result."""
    artifacts = _load_run_artifacts(request)
    settings = artifacts.configuration.reconciliation
    run_start = datetime.now(UTC)
    _LOGGER.info(
        "Reconciling '%s' from %s against %s.",
        settings.resource_name,
        request.remote_path,
        request.state_path,
    )

    try:
        merged_state = run_with_deadline(
            lambda: _reconcile(artifacts, data_source=request.data_source),
            timeout_seconds=settings.timeout_seconds,
            resource_name=settings.resource_name,
            operation_label="data source read" if request.data_source else "read",
        )
    except (MergeError, SchemaError, ReconciliationTimeoutError) as exc:
        raise RunExecutionError(str(exc)) from exc

    output_path = Path(request.output_path or request.state_path)
    try:
        resolved_output = write_state_file(output_path, merged_state)
    except OSError as exc:
        raise RunExecutionError(str(exc)) from exc

    changes = diff_states(artifacts.schema, artifacts.prior_state.values, merged_state.values)
    changed_properties = tuple(change.state_name for change in changes if change.is_change)
    _LOGGER.info(
        "Merged state written to %s (%d properties changed).",
        resolved_output,
        len(changed_properties),
    )

    report_path: Path | None = None
    if request.report_path:
        run_metadata = RunMetadata(
            run_start=run_start,
            resource_name=settings.resource_name,
            resource_id=merged_state.resource_id,
            remote_path=Path(request.remote_path).resolve(),
            state_path=Path(request.state_path).resolve(),
            output_path=resolved_output,
            timeout_seconds=settings.timeout_seconds,
            data_source=request.data_source,
        )
        try:
            report_path = write_reconciliation_report(
                request.report_path,
                changes,
                run_metadata,
                artifacts.configuration.schema,
            )
        except OSError as exc:
            raise RunExecutionError(str(exc)) from exc

    return RunOutcome(
        output_path=resolved_output,
        resource_id=merged_state.resource_id,
        report_path=report_path,
        changed_properties=changed_properties,
    )


def _load_run_artifacts(request: RunRequest) -> RunArtifacts:
    try:
        configuration = load_configuration(request.config_path)
        schema = load_resource_schema(configuration.schema)
        remote_payload = _read_remote_payload(Path(request.remote_path))
        prior_state = load_state_file(request.state_path)
    except (ConfigurationError, SchemaError, StateFileError, OSError, ValueError) as exc:
        raise RunExecutionError(str(exc)) from exc
    return RunArtifacts(
        configuration=configuration,
        schema=schema,
        remote_payload=remote_payload,
        prior_state=prior_state,
    )


def _read_remote_payload(path: Path) -> Mapping[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid remote payload {path}: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise ValueError(f"Remote payload root must be an object: {path}")
    return payload


def _reconcile(artifacts: RunArtifacts, *, data_source: bool) -> ResourceState:
    settings = artifacts.configuration.reconciliation
    state = ResourceState(
        values=artifacts.prior_state.snapshot(),
        resource_id=artifacts.prior_state.resource_id,
    )
    if data_source or not settings.ignore_list_order:
        update_data_source_state_with_payload(artifacts.schema, artifacts.remote_payload, state)
    else:
        update_state_with_payload(artifacts.schema, artifacts.remote_payload, state)

    try:
        set_state_identifier(artifacts.schema, state, artifacts.remote_payload)
    except (MissingIdentifierError, SchemaError):
        if settings.require_identifier:
            raise
        _LOGGER.info("Payload carries no identifier; keeping '%s'.", state.resource_id)
    return state
