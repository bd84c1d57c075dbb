"""The ``sync`` command: push spreadsheet prices to the catalog."""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import typer

from pricesync.core.config import SyncSettings, load_settings
from pricesync.core.exceptions import ConfigurationError, ErrorCode, PriceSyncError, RecordSourceError
from pricesync.core.logging import configure_logging, get_logger
from pricesync.core.models import BatchReport, EndpointLayout, PriceUnits, PricingMode
from pricesync.core.runner import run_sync

from .constants import SYSTEM_EXIT_CODE, VALIDATION_EXIT_CODE
from .utils import emit_error, get_cli_options, get_formatter

logger = get_logger(__name__)

FAILURE_COLUMNS = ["item_id", "reference_code", "amount_minor_units", "http_status", "error"]


def register(app: typer.Typer) -> None:
    """Register the sync command on the provided application."""

    app.command("sync")(sync_command)


def get_settings(env_file: Path | None, **overrides: object) -> SyncSettings:
    """Factory hook for obtaining the run settings."""

    return load_settings(env_file=env_file, **overrides)


def get_transport() -> httpx.AsyncBaseTransport | None:
    """Factory hook for the HTTP transport; ``None`` uses the network."""

    return None


def sync_command(
    ctx: typer.Context,
    csv_path: Path | None = typer.Option(None, "--csv", help="Input file (defaults to CSV_FILE_PATH)."),
    env_file: Path | None = typer.Option(Path(".env"), "--env-file", help="dotenv file with credentials."),
    mode: PricingMode | None = typer.Option(None, "--mode", help="How to interpret the identifier column."),
    units: PriceUnits | None = typer.Option(None, "--units", help="Price text conversion policy."),
    rate_limit: int | None = typer.Option(None, "--rate-limit", help="Maximum concurrent requests."),
    layout: EndpointLayout | None = typer.Option(None, "--layout", help="Catalog endpoint layout."),
    mirror_cost: bool | None = typer.Option(
        None, "--mirror-cost/--no-mirror-cost", help="Also send the base price as cost price."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Build requests without sending them."),
    report_path: Path | None = typer.Option(None, "--report", help="Write the batch report as JSON."),
) -> None:
    """Update catalog prices from a spreadsheet export."""

    formatter = get_formatter(ctx)
    try:
        settings = get_settings(
            env_file,
            csv_file_path=csv_path,
            pricing_mode=mode,
            price_units=units,
            rate_limit=rate_limit,
            endpoint_layout=layout,
            mirror_cost_price=mirror_cost,
            dry_run=dry_run or None,
        )
        _apply_settings_log_level(ctx, settings)
        logger.info("Starting price update process")
        report = asyncio.run(run_sync(settings, transport=get_transport()))
    except (ConfigurationError, RecordSourceError) as error:
        emit_error(error.message, error.error_code, details=error.details)
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from error
    except PriceSyncError as error:
        emit_error(error.message, error.error_code, details=error.details)
        raise typer.Exit(code=SYSTEM_EXIT_CODE) from error
    except Exception as error:  # pragma: no cover - safety net
        emit_error(str(error), ErrorCode.UNEXPECTED_ERROR.value)
        raise typer.Exit(code=SYSTEM_EXIT_CODE) from error

    stream = typer.get_text_stream("stdout")
    formatter.render(report.summary_rows(), stream=stream, columns=["metric", "value"], title="summary")
    if report.failures:
        formatter.render(report.failure_rows(), stream=stream, columns=FAILURE_COLUMNS, title="failures")
    if report_path is not None:
        _write_report(report, report_path)


def _write_report(report: BatchReport, path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    except OSError as exc:
        emit_error(f"Unable to write report '{path}': {exc}", "OUTPUT_WRITE_ERROR")
        raise typer.Exit(code=SYSTEM_EXIT_CODE) from exc
    logger.info(f"Report written to {path}")


def _apply_settings_log_level(ctx: typer.Context, settings: SyncSettings) -> None:
    """Use ``LOG_LEVEL`` from the settings unless ``--log-level`` was given."""

    options = get_cli_options(ctx)
    if options.log_level is not None or settings.log_level.upper() == "INFO":
        return
    try:
        configure_logging(
            settings.log_level,
            serialize=options.log_json,
            colorize=None if not options.no_color else False,
        )
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid LOG_LEVEL '{settings.log_level}'", details={"LOG_LEVEL": settings.log_level}
        ) from exc
