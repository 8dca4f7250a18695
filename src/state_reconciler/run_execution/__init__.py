"""Run execution domain exports."""

from .deadline_guard import ReconciliationTimeoutError, run_with_deadline
from .reconciliation_run_use_case import RunExecutionError, execute_reconciliation_run
from .run_contracts import RunArtifacts, RunOutcome, RunRequest

__all__ = [
    "RunRequest",
    "RunOutcome",
    "RunArtifacts",
    "RunExecutionError",
    "ReconciliationTimeoutError",
    "execute_reconciliation_run",
    "run_with_deadline",
]
