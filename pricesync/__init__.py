"""pricesync - bulk catalog price updates from spreadsheet exports.

Reads (identifier, price) rows, optionally resolves reference codes to catalog
item ids, and replaces each price under a bounded number of concurrent calls.
"""

__version__ = "0.1.0"

from pricesync.core.config import SyncSettings, load_settings  # noqa: E402
from pricesync.core.models import BatchReport, OperationOutcome, PriceUnits, PricingMode  # noqa: E402
from pricesync.core.runner import run_sync  # noqa: E402
from pricesync.core.services import parse_price  # noqa: E402

__all__ = [
    "__version__",
    "BatchReport",
    "OperationOutcome",
    "PriceUnits",
    "PricingMode",
    "SyncSettings",
    "load_settings",
    "parse_price",
    "run_sync",
]
