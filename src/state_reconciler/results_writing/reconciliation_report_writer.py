"""Reconciliation report workbook writer service."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from state_reconciler.configuration.runtime_settings import SchemaConfig

from .report_models import ChangeStatus, PropertyChange, RunMetadata

CHANGES_SHEET_NAME = "Changes"
RUN_INFO_SHEET_NAME = "RunInfo"
SCHEMA_SHEET_NAME = "Schema"
CHANGE_COLUMNS: tuple[str, ...] = ("Property", "Status", "Previous", "Merged")
WRITE_ONLY_MASK = "(write-only)"


def write_reconciliation_report(
    output_path: Path | str,
    changes: Sequence[PropertyChange],
    run_metadata: RunMetadata,
    schema_config: SchemaConfig,
) -> Path:
    """Write the per-property change report and return its resolved path."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = CHANGES_SHEET_NAME

    _write_change_headers(sheet)
    for row, change in enumerate(changes, start=2):
        _write_change_row(sheet, row, change)

    _write_run_info_sheet(workbook, run_metadata, changes)
    _write_schema_sheet(workbook, schema_config)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_change_headers(sheet: Worksheet) -> None:
    widths = (30, 14, 50, 50)
    for column_index, (name, width) in enumerate(zip(CHANGE_COLUMNS, widths, strict=True), 1):
        cell = sheet.cell(row=1, column=column_index, value=name)
        cell.style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = width


def _write_change_row(sheet: Worksheet, row: int, change: PropertyChange) -> None:
    masked = change.status == ChangeStatus.WRITE_ONLY
    sheet.cell(row=row, column=1, value=change.state_name)
    sheet.cell(row=row, column=2, value=change.status.value)
    sheet.cell(
        row=row,
        column=3,
        value=WRITE_ONLY_MASK if masked else _normalize_output_value(change.previous),
    )
    sheet.cell(
        row=row,
        column=4,
        value=WRITE_ONLY_MASK if masked else _normalize_output_value(change.merged),
    )


def _write_run_info_sheet(
    workbook: Workbook, run_metadata: RunMetadata, changes: Sequence[PropertyChange]
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    counts = {status: 0 for status in ChangeStatus}
    for change in changes:
        counts[change.status] += 1

    entries: tuple[tuple[str, Any], ...] = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("resource_name", run_metadata.resource_name),
        ("resource_id", run_metadata.resource_id or ""),
        ("remote_path", str(run_metadata.remote_path)),
        ("state_path", str(run_metadata.state_path)),
        ("output_path", str(run_metadata.output_path)),
        ("timeout_seconds", run_metadata.timeout_seconds),
        ("data_source", run_metadata.data_source),
        ("properties", len(changes)),
        *((status.value.lower(), counts[status]) for status in ChangeStatus),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)


def _write_schema_sheet(workbook: Workbook, schema_config: SchemaConfig) -> None:
    sheet = workbook.create_sheet(SCHEMA_SHEET_NAME)
    schema_hash = hashlib.sha256(schema_config.text.encode("utf-8")).hexdigest()
    entries = (
        ("schema_source", str(schema_config.source_path) if schema_config.source_path else ""),
        ("schema_hash", schema_hash),
        ("schema_text", schema_config.text),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)


def _normalize_output_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return json.dumps(value, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return value
