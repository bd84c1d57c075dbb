"""Main entry point for the pricesync command line interface."""

from __future__ import annotations

import typer

from pricesync.core.logging import configure_logging

from .formatters import create_formatter
from .sync import register as register_sync_command


def create_app() -> typer.Typer:
    """Create a Typer application instance for pricesync."""

    app = typer.Typer(add_completion=False, help="Bulk catalog price updates")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "table",
            "--format",
            "-f",
            help="Output format (table or jsonl).",
            show_default=True,
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            help="Logging level (defaults to LOG_LEVEL or INFO).",
        ),
        log_json: bool = typer.Option(False, "--log-json", help="Emit log records as JSON lines."),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        ctx.obj.update(
            {"format": normalized_format, "no_color": no_color, "log_level": log_level, "log_json": log_json}
        )
        try:
            configure_logging(log_level or "INFO", serialize=log_json, colorize=None if not no_color else False)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

    register_sync_command(app)
    return app


app = create_app()
