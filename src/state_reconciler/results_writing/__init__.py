"""Results writing domain exports."""

from .reconciliation_report_writer import (
    CHANGES_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    SCHEMA_SHEET_NAME,
    write_reconciliation_report,
)
from .report_models import ChangeStatus, PropertyChange, RunMetadata
from .state_diff import diff_states

__all__ = [
    "CHANGES_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "SCHEMA_SHEET_NAME",
    "ChangeStatus",
    "PropertyChange",
    "RunMetadata",
    "diff_states",
    "write_reconciliation_report",
]
