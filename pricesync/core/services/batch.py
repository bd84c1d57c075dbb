"""Batch synchronization pipeline."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from enum import Enum
from functools import partial

from pricesync.core.config import SyncSettings
from pricesync.core.exceptions import ConfigurationError, ErrorCode, PriceSyncError, RecordSourceError
from pricesync.core.logging import get_logger, log_context
from pricesync.core.models import (
    BatchReport,
    OperationOutcome,
    ParsedUpdate,
    PricingMode,
    RawRecord,
    ResolvedUpdate,
)
from pricesync.core.services.aggregator import ReportAggregator
from pricesync.core.services.limiter import ConcurrencyLimiter
from pricesync.core.services.mutator import PriceMutator
from pricesync.core.services.pricing import format_minor_units, parse_price
from pricesync.core.services.resolver import IdentifierResolver
from pricesync.core.sources import RecordSource, as_record_source

logger = get_logger(__name__)


class BatchState(str, Enum):
    """批处理状态."""

    IDLE = "idle"
    VALIDATING = "validating"
    LOADING = "loading"
    RESOLVING = "resolving"
    MUTATING = "mutating"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


class BatchOrchestrator:
    """Run one price synchronization from records to report.

    Every resolution and mutation goes through the same
    :class:`ConcurrencyLimiter`. The resolving and mutating stages run one after
    the other, so the cap applies to each stage and to the whole run.

    Examples:
        >>> orchestrator = BatchOrchestrator(settings, CsvRecordSource(path), mutator)
        >>> report = await orchestrator.run()
    """

    def __init__(
        self,
        settings: SyncSettings,
        source: RecordSource | Iterable[RawRecord],
        mutator: PriceMutator,
        resolver: IdentifierResolver | None = None,
        limiter: ConcurrencyLimiter | None = None,
        on_report: Callable[[BatchReport], None] | None = None,
    ):
        """初始化批处理编排器.

        Args:
            settings: 运行配置
            source: 记录源
            mutator: 价格更新器
            resolver: 标识解析器, 仅在 reference_lookup 模式下需要
            limiter: 并发限制器, 默认按 ``settings.rate_limit`` 创建
            on_report: 报告生成后的回调
        """
        self.settings = settings
        self.source = as_record_source(source)
        self.mutator = mutator
        self.resolver = resolver
        self.limiter = limiter
        self.on_report = on_report
        self.aggregator = ReportAggregator()
        self.state = BatchState.IDLE
        self.history: list[BatchState] = [BatchState.IDLE]

    def _transition(self, state: BatchState) -> None:
        logger.debug(f"Batch state {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    async def run(self) -> BatchReport:
        """Execute the pipeline and return the final report.

        Raises:
            ConfigurationError: settings or source invalid; no call was made.
            RecordSourceError: the source failed while loading.
        """
        if self.state is not BatchState.IDLE:
            raise RuntimeError("BatchOrchestrator.run() can only be called once")

        with log_context(account=self.settings.account_name, mode=self.settings.pricing_mode.value):
            self._transition(BatchState.VALIDATING)
            try:
                self.validate()
            except ConfigurationError:
                self._transition(BatchState.FAILED)
                raise

            self._transition(BatchState.LOADING)
            try:
                updates = self.load()
            except PriceSyncError:
                self._transition(BatchState.FAILED)
                raise

            if not updates:
                logger.warning("No valid products found in source")
                return self._report()

            if self.settings.pricing_mode is PricingMode.REFERENCE_LOOKUP:
                self._transition(BatchState.RESOLVING)
                resolved = await self.resolve_all(updates)
            else:
                resolved = [ResolvedUpdate.direct(update) for update in updates]

            self._transition(BatchState.MUTATING)
            await self.mutate_all(resolved)
            return self._report()

    def validate(self) -> None:
        self.settings.require()
        if self.settings.pricing_mode is PricingMode.REFERENCE_LOOKUP and self.resolver is None:
            raise ConfigurationError("reference_lookup mode requires an identifier resolver")
        if self.limiter is None:
            self.limiter = ConcurrencyLimiter(self.settings.rate_limit)
        self.source.validate()

    def _require_limiter(self) -> ConcurrencyLimiter:
        if self.limiter is None:
            raise RuntimeError("validate() must run before requests are fanned out")
        return self.limiter

    def load(self) -> list[ParsedUpdate]:
        """Materialise every parsable record; unparsable rows are counted and dropped."""
        updates: list[ParsedUpdate] = []
        try:
            for record in self.source.read():
                amount = parse_price(record.price_text, self.settings.price_units)
                if not record.reference_code or amount is None:
                    logger.debug(f"Skipping row {record.line_number}: {record.reference_code!r} {record.price_text!r}")
                    self.aggregator.note_skipped()
                    continue
                updates.append(ParsedUpdate(reference_code=record.reference_code, amount_minor_units=amount))
        except (OSError, ValueError) as exc:
            raise RecordSourceError(f"Failed to load records: {exc}") from exc

        logger.info(f"Found {len(updates)} products to update")
        return updates

    async def resolve_all(self, updates: list[ParsedUpdate]) -> list[ResolvedUpdate]:
        """Resolve every reference code; unresolved ones are noted and dropped."""
        if self.resolver is None:
            raise ConfigurationError("reference_lookup mode requires an identifier resolver")
        limiter = self._require_limiter()

        tasks = [limiter.run(partial(self._resolve_one, update)) for update in updates]
        results = await asyncio.gather(*tasks)

        resolved = [result for result in results if result is not None]
        logger.info(f"Resolved {len(resolved)}/{len(updates)} reference codes")
        return resolved

    async def _resolve_one(self, update: ParsedUpdate) -> ResolvedUpdate | None:
        try:
            item_id = await self.resolver.resolve(update.reference_code)
        except Exception as exc:  # noqa: BLE001 - a failing lookup must not affect siblings
            logger.error(f"Unexpected lookup error for {update.reference_code}: {exc}")
            item_id = None

        if item_id is None:
            self.aggregator.note_unresolved(update.reference_code)
            return None
        return ResolvedUpdate(
            item_id=item_id,
            reference_code=update.reference_code,
            amount_minor_units=update.amount_minor_units,
        )

    async def mutate_all(self, updates: list[ResolvedUpdate]) -> list[OperationOutcome]:
        """Fan out every mutation and wait until all of them settled."""
        limiter = self._require_limiter()

        total = len(updates)
        logger.info(f"Updating {total} prices with a concurrency limit of {limiter.capacity}")
        tasks = [
            limiter.run(partial(self._mutate_one, update, index, total))
            for index, update in enumerate(updates, start=1)
        ]
        return list(await asyncio.gather(*tasks))

    async def _mutate_one(self, update: ResolvedUpdate, index: int, total: int) -> OperationOutcome:
        try:
            outcome = await self.mutator.update_price(update)
        except Exception as exc:  # noqa: BLE001 - converted into a failure outcome
            outcome = OperationOutcome(
                item_id=update.item_id,
                reference_code=update.reference_code,
                amount_minor_units=update.amount_minor_units,
                succeeded=False,
                error_detail=str(exc) or type(exc).__name__,
                error_code=ErrorCode.UNEXPECTED_ERROR.value,
            )

        self.aggregator.record(outcome)
        price = format_minor_units(update.amount_minor_units)
        if outcome.succeeded:
            logger.info(f"[{index}/{total}] Updated {update.item_id}: {price}")
        else:
            logger.warning(f"[{index}/{total}] Failed {update.item_id}: {outcome.error_detail}")
        return outcome

    def _report(self) -> BatchReport:
        self._transition(BatchState.REPORTING)
        report = self.aggregator.finalize()
        logger.info(
            f"Batch completed: {report.success_count} successful, {report.failure_count} failed, "
            f"{report.skipped_rows} skipped, {len(report.unresolved)} unresolved"
        )
        if self.on_report is not None:
            self.on_report(report)
        self._transition(BatchState.DONE)
        return report
