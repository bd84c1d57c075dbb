"""Standardised error codes shared across pricesync."""

from enum import Enum


class ErrorCode(str, Enum):
    """错误代码枚举."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    RECORD_SOURCE_ERROR = "RECORD_SOURCE_ERROR"
    RESOLUTION_FAILED = "RESOLUTION_FAILED"
    MUTATION_FAILED = "MUTATION_FAILED"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
