"""Utility helpers shared across CLI commands."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, Sequence

import typer

from .formatters import OutputFormatter, create_formatter


@dataclass(slots=True)
class CLIOptions:
    """Resolved options derived from the Typer context."""

    format: str = "table"
    no_color: bool = False
    log_level: str | None = None
    log_json: bool = False


def get_cli_options(ctx: typer.Context) -> CLIOptions:
    """Extract :class:`CLIOptions` from the Typer context object."""

    ctx.ensure_object(dict)
    data = ctx.obj or {}
    return CLIOptions(
        format=str(data.get("format", "table")),
        no_color=bool(data.get("no_color", False)),
        log_level=data.get("log_level"),
        log_json=bool(data.get("log_json", False)),
    )


def get_formatter(ctx: typer.Context) -> OutputFormatter:
    options = get_cli_options(ctx)
    return create_formatter(options.format, no_color=options.no_color)


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = _sanitize_details(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


def _sanitize_details(details: Mapping[str, object]) -> Mapping[str, object]:
    sanitized: dict[str, object] = {}
    for key, value in details.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            sanitized[key] = value
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            sanitized[key] = [str(item) for item in value]
        else:
            sanitized[key] = str(value)
    return sanitized


__all__ = ["CLIOptions", "emit_error", "get_cli_options", "get_formatter"]
