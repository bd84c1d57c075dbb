"""Exception handling module."""

from pricesync.core.exceptions.base import ConfigurationError, PriceSyncError, RecordSourceError
from pricesync.core.exceptions.codes import ErrorCode

__all__ = [
    "PriceSyncError",
    "ConfigurationError",
    "RecordSourceError",
    "ErrorCode",
]
