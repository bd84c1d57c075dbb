"""Data models for pricesync."""

from .base import ParsedUpdate, RawRecord, ResolvedUpdate
from .modes import EndpointLayout, PriceUnits, PricingMode
from .report import BatchReport, OperationOutcome

__all__ = [
    "RawRecord",
    "ParsedUpdate",
    "ResolvedUpdate",
    "OperationOutcome",
    "BatchReport",
    "PricingMode",
    "PriceUnits",
    "EndpointLayout",
]
