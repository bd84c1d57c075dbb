"""pricesync核心异常类."""

from typing import Any

from pricesync.core.exceptions.codes import ErrorCode


class PriceSyncError(Exception):
    """pricesync基础异常类."""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.UNEXPECTED_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        """初始化异常.

        Args:
            message: 错误消息
            error_code: 错误代码
            details: 额外详情
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        """Return a serializable payload representing the error."""

        return {"code": self.error_code, "message": self.message, "details": dict(self.details)}


class ConfigurationError(PriceSyncError):
    """配置缺失或输入源不可读 (致命错误)."""

    def __init__(
        self,
        message: str,
        missing: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if missing:
            super_details["missing"] = list(missing)
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR.value, super_details)
        self.missing = list(missing or [])


class RecordSourceError(PriceSyncError):
    """读取记录源时发生的错误 (致命错误)."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if source:
            super_details["source"] = source
        super().__init__(message, ErrorCode.RECORD_SOURCE_ERROR.value, super_details)
        self.source = source
