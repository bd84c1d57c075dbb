"""Structured logging utilities with trace propagation."""

from __future__ import annotations

import json
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from typing import IO, Any, Iterator
from uuid import uuid4

from loguru import logger

from pricesync.core.logging.config import LogConfig

_TRACE_ID_VAR: ContextVar[str | None] = ContextVar("pricesync_trace_id", default=None)
_CONTEXT_VAR: ContextVar[dict[str, Any]] = ContextVar("pricesync_log_context", default={})


def _ensure_trace_id() -> str:
    trace_id = _TRACE_ID_VAR.get()
    if trace_id is None:
        trace_id = uuid4().hex
        _TRACE_ID_VAR.set(trace_id)
    return trace_id


def _patch_record(record: dict[str, Any]) -> None:
    extra = record["extra"]
    if not extra.get("trace_id"):
        extra["trace_id"] = _ensure_trace_id()

    for key, value in _CONTEXT_VAR.get({}).items():
        extra.setdefault(key, value)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _format_payload(record: dict[str, Any]) -> dict[str, Any]:
    extra = record.get("extra", {})
    context = {k: v for k, v in extra.items() if k != "trace_id"}
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "trace_id": extra.get("trace_id"),
    }
    if context:
        payload["context"] = context
    exception = record.get("exception")
    if exception:
        payload["exception"] = str(exception.value)
    return payload


class _StreamJsonSink:
    """Sink writing structured JSON payloads to a text stream."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def __call__(self, message: Any) -> None:
        payload = _format_payload(message.record)
        self._stream.write(json.dumps(payload, default=_json_default))
        self._stream.write("\n")
        self._stream.flush()


class _StderrStream:
    """Text stream resolving ``sys.stderr`` at write time."""

    def write(self, message: str) -> None:
        sys.stderr.write(message)

    def flush(self) -> None:
        sys.stderr.flush()

    def isatty(self) -> bool:
        return sys.stderr.isatty()


class _FileJsonSink:
    """Sink persisting JSON lines to a file path."""

    def __init__(self, path: str) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._path = path

    def __call__(self, message: Any) -> None:  # pragma: no cover - simple file IO
        payload = _format_payload(message.record)
        with open(self._path, "a", encoding="utf-8") as file:
            file.write(json.dumps(payload, default=_json_default))
            file.write("\n")


def _configure_from_config(config: LogConfig) -> None:
    handlers: list[dict[str, Any]] = []
    if config.console_output:
        stream = config.console_stream or _StderrStream()
        if config.serialize:
            handlers.append({"sink": _StreamJsonSink(stream), "level": config.level})
        else:
            handlers.append(
                {
                    "sink": stream,
                    "level": config.level,
                    "format": config.console_format,
                    "colorize": config.colorize,
                }
            )
    if config.file_output and config.file_path:
        handlers.append({"sink": _FileJsonSink(config.file_path), "level": config.level})

    configure_kwargs: dict[str, Any] = {"handlers": handlers, "patcher": _patch_record}
    if config.extra:
        configure_kwargs["extra"] = config.extra
    logger.configure(**configure_kwargs)


def configure_logging(level: str = "INFO", **kwargs: Any) -> None:
    """Configure logging with the provided level and options."""

    _configure_from_config(LogConfig(level=level.upper(), **kwargs))


def get_logger(name: str | None = None) -> Any:
    """Return the logger optionally bound to ``name``."""

    if name:
        return logger.bind(logger_name=name)
    return logger


@contextmanager
def log_context(*, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
    """Context manager that propagates trace ids and additional metadata."""

    previous_context = _CONTEXT_VAR.get({})
    context_token = _CONTEXT_VAR.set({**previous_context, **extra})

    active_trace = trace_id or uuid4().hex
    trace_token = _TRACE_ID_VAR.set(active_trace)

    try:
        yield active_trace
    finally:
        _TRACE_ID_VAR.reset(trace_token)
        _CONTEXT_VAR.reset(context_token)


configure_logging()


__all__ = [
    "configure_logging",
    "get_logger",
    "log_context",
]
