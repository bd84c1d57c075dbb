"""Logging configuration primitives for structured logging."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


class LogConfig(BaseModel):
    """Configuration model used to initialise logging."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    level: str = "INFO"
    console_output: bool = True
    console_stream: Any = None
    console_format: str = DEFAULT_CONSOLE_FORMAT
    file_output: bool = False
    file_path: str | None = None
    serialize: bool = False
    colorize: bool | None = False
    extra: dict[str, Any] = Field(default_factory=dict)


__all__ = ["DEFAULT_CONSOLE_FORMAT", "LogConfig"]
