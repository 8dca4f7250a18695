"""Run one operation against a deadline on a background worker."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import TypeVar

_T = TypeVar("_T")


class ReconciliationTimeoutError(Exception):
    """Raised when an operation does not finish before its deadline."""


def run_with_deadline(
    operation: Callable[[], _T],
    *,
    timeout_seconds: float,
    resource_name: str,
    operation_label: str,
) -> _T:
    """Return the operation's result, or raise once ``timeout_seconds`` elapse.

    The operation itself is never interrupted; on timeout the worker is left to
    finish in the background and its result is discarded.
    """
    executor = ThreadPoolExecutor(max_workers=1)
    future = executor.submit(operation)
    try:
        return future.result(timeout=timeout_seconds)
    except FutureTimeoutError as exc:
        raise ReconciliationTimeoutError(
            f"context deadline exceeded: '{resource_name}' {operation_label} timeout is "
            f"{timeout_seconds}s"
        ) from exc
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
