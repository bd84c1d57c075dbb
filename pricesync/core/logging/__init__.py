"""Logging utilities for the synchronization pipeline."""

from pricesync.core.logging.config import LogConfig
from pricesync.core.logging.logger import configure_logging, get_logger, log_context

__all__ = [
    "LogConfig",
    "get_logger",
    "configure_logging",
    "log_context",
]
