"""Wiring of the pipeline components for a single run."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import httpx

from pricesync.core.config import SyncSettings
from pricesync.core.http_adapter import CatalogClient
from pricesync.core.models import BatchReport, PricingMode, RawRecord
from pricesync.core.services import BatchOrchestrator, IdentifierResolver, PriceMutator
from pricesync.core.sources import CsvRecordSource, RecordSource


async def run_sync(
    settings: SyncSettings,
    source: RecordSource | Iterable[RawRecord] | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    on_report: Callable[[BatchReport], None] | None = None,
) -> BatchReport:
    """Synchronise prices described by ``source`` (the configured CSV by default).

    Raises:
        ConfigurationError: the settings cannot reach the catalog.
    """

    settings.require()
    record_source = source if source is not None else CsvRecordSource(settings.csv_file_path)
    async with CatalogClient.from_settings(settings, transport=transport) as client:
        resolver = IdentifierResolver(client) if settings.pricing_mode is PricingMode.REFERENCE_LOOKUP else None
        mutator = PriceMutator(client, mirror_cost_price=settings.mirror_cost_price, dry_run=settings.dry_run)
        orchestrator = BatchOrchestrator(settings, record_source, mutator, resolver=resolver, on_report=on_report)
        return await orchestrator.run()
