"""Reconciliation report workbook writer tests."""

from __future__ import annotations

import hashlib
from datetime import UTC, datetime
from pathlib import Path

from openpyxl import load_workbook
from state_reconciler.configuration.runtime_settings import SchemaConfig
from state_reconciler.results_writing import (
    CHANGES_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    SCHEMA_SHEET_NAME,
    ChangeStatus,
    PropertyChange,
    RunMetadata,
    write_reconciliation_report,
)

_SCHEMA_TEXT = "properties:\n  - name: id\n    type: string"


def _run_metadata(tmp_path: Path) -> RunMetadata:
    return RunMetadata(
        run_start=datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
        resource_name="firewall",
        resource_id="fw-1",
        remote_path=tmp_path / "remote.json",
        state_path=tmp_path / "state.json",
        output_path=tmp_path / "state.json",
        timeout_seconds=30,
        data_source=False,
    )


def _changes() -> tuple[PropertyChange, ...]:
    return (
        PropertyChange("display_name", ChangeStatus.UPDATED, "old", "new"),
        PropertyChange("admin_password", ChangeStatus.WRITE_ONLY, "hunter2", "hunter2"),
        PropertyChange("zones", ChangeStatus.ADDED, None, ["b", "a"]),
        PropertyChange("owner", ChangeStatus.UNCHANGED, {"name": "ops"}, {"name": "ops"}),
    )


def test_writes_change_rows_and_masks_write_only_values(tmp_path: Path) -> None:
    output_path = write_reconciliation_report(
        tmp_path / "reports" / "report.xlsx",
        _changes(),
        _run_metadata(tmp_path),
        SchemaConfig(text=_SCHEMA_TEXT, source_path=None),
    )

    assert output_path == (tmp_path / "reports" / "report.xlsx").resolve()
    workbook = load_workbook(output_path)
    assert workbook.sheetnames == [CHANGES_SHEET_NAME, RUN_INFO_SHEET_NAME, SCHEMA_SHEET_NAME]
    rows = list(workbook[CHANGES_SHEET_NAME].iter_rows(values_only=True))
    assert rows == [
        ("Property", "Status", "Previous", "Merged"),
        ("display_name", "UPDATED", "old", "new"),
        ("admin_password", "WRITE_ONLY", "(write-only)", "(write-only)"),
        ("zones", "ADDED", None, '["b","a"]'),
        ("owner", "UNCHANGED", '{"name":"ops"}', '{"name":"ops"}'),
    ]
    assert "hunter2" not in str(rows)


def test_run_info_sheet_counts_statuses(tmp_path: Path) -> None:
    output_path = write_reconciliation_report(
        tmp_path / "report.xlsx",
        _changes(),
        _run_metadata(tmp_path),
        SchemaConfig(text=_SCHEMA_TEXT, source_path=None),
    )

    sheet = load_workbook(output_path)[RUN_INFO_SHEET_NAME]
    info = {row[0]: row[1] for row in sheet.iter_rows(values_only=True)}
    assert info["resource_name"] == "firewall"
    assert info["resource_id"] == "fw-1"
    assert info["timeout_seconds"] == 30
    assert info["data_source"] is False
    assert info["properties"] == 4
    assert info["updated"] == 1
    assert info["write_only"] == 1
    assert info["added"] == 1
    assert info["unchanged"] == 1
    assert info["removed"] == 0
    assert info["run_start"].startswith("2024-05-01T12:00:00")


def test_schema_sheet_records_source_and_hash(tmp_path: Path) -> None:
    schema_path = tmp_path / "schema.yaml"
    output_path = write_reconciliation_report(
        tmp_path / "report.xlsx",
        (),
        _run_metadata(tmp_path),
        SchemaConfig(text=_SCHEMA_TEXT, source_path=schema_path),
    )

    sheet = load_workbook(output_path)[SCHEMA_SHEET_NAME]
    info = {row[0]: row[1] for row in sheet.iter_rows(values_only=True)}
    assert info["schema_source"] == str(schema_path)
    assert info["schema_hash"] == hashlib.sha256(_SCHEMA_TEXT.encode("utf-8")).hexdigest()
    assert info["schema_text"] == _SCHEMA_TEXT
