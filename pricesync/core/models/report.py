"""Outcome and report models."""

from typing import Any

from pydantic import BaseModel, Field
from pydantic import ConfigDict as PydanticConfigDict


class OperationOutcome(BaseModel):
    """Result of one attempted price mutation."""

    item_id: str
    reference_code: str | None = None
    amount_minor_units: int
    succeeded: bool
    http_status: int | None = None
    error_detail: Any | None = None
    error_code: str | None = None
    dry_run: bool = False

    model_config = PydanticConfigDict(frozen=True)


class BatchReport(BaseModel):
    """Aggregate result of a synchronization run.

    ``success_count`` and ``failure_count`` only count mutation attempts.
    Rows dropped while parsing and reference codes that failed to resolve are
    reported through ``skipped_rows`` and ``unresolved``.
    """

    success_count: int = 0
    failure_count: int = 0
    failures: list[OperationOutcome] = Field(default_factory=list)
    skipped_rows: int = 0
    unresolved: list[str] = Field(default_factory=list)

    @property
    def attempted(self) -> int:
        return self.success_count + self.failure_count

    def summary_rows(self) -> list[dict[str, object]]:
        """Flatten the counters for tabular rendering."""
        return [
            {"metric": "succeeded", "value": self.success_count},
            {"metric": "failed", "value": self.failure_count},
            {"metric": "skipped_rows", "value": self.skipped_rows},
            {"metric": "unresolved", "value": len(self.unresolved)},
        ]

    def failure_rows(self) -> list[dict[str, object]]:
        return [
            {
                "item_id": outcome.item_id,
                "reference_code": outcome.reference_code,
                "amount_minor_units": outcome.amount_minor_units,
                "http_status": outcome.http_status,
                "error": outcome.error_detail,
            }
            for outcome in self.failures
        ]
