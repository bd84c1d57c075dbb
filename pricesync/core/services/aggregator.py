"""Outcome bookkeeping for a batch run."""

from __future__ import annotations

import threading

from pricesync.core.models import BatchReport, OperationOutcome


class ReportAggregator:
    """Collect outcomes as they settle and build the :class:`BatchReport`.

    Failures are kept in settlement order. ``finalize`` must only be called once
    every submitted task has settled; the orchestrator guarantees this.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._success_count = 0
        self._failures: list[OperationOutcome] = []
        self._skipped_rows = 0
        self._unresolved: list[str] = []

    def record(self, outcome: OperationOutcome) -> None:
        with self._lock:
            if outcome.succeeded:
                self._success_count += 1
            else:
                self._failures.append(outcome)

    def note_skipped(self, count: int = 1) -> None:
        """Count rows dropped while parsing."""
        with self._lock:
            self._skipped_rows += count

    def note_unresolved(self, reference_code: str) -> None:
        with self._lock:
            self._unresolved.append(reference_code)

    def finalize(self) -> BatchReport:
        with self._lock:
            return BatchReport(
                success_count=self._success_count,
                failure_count=len(self._failures),
                failures=list(self._failures),
                skipped_rows=self._skipped_rows,
                unresolved=list(self._unresolved),
            )
