"""Pipeline services."""

from pricesync.core.services.aggregator import ReportAggregator
from pricesync.core.services.batch import BatchOrchestrator, BatchState
from pricesync.core.services.limiter import ConcurrencyLimiter
from pricesync.core.services.mutator import PriceMutator
from pricesync.core.services.pricing import format_minor_units, parse_price
from pricesync.core.services.resolver import IdentifierResolver

__all__ = [
    "BatchOrchestrator",
    "BatchState",
    "ConcurrencyLimiter",
    "IdentifierResolver",
    "PriceMutator",
    "ReportAggregator",
    "format_minor_units",
    "parse_price",
]
