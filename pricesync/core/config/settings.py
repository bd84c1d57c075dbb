"""
Configuration management for pricesync.

Settings are read from the environment and an optional ``.env`` file using the
conventional VTEX variable names (``VTEX_ACCOUNT_NAME``,
``VTEX_APP_KEY``, ``VTEX_APP_TOKEN``, ``CSV_FILE_PATH``, ``RATE_LIMIT``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pricesync.core.exceptions import ConfigurationError
from pricesync.core.models import EndpointLayout, PriceUnits, PricingMode

DEFAULT_RATE_LIMIT = 2
DEFAULT_TIMEOUT = 30.0

_REQUIRED = {
    "account_name": "VTEX_ACCOUNT_NAME",
    "app_key": "VTEX_APP_KEY",
    "app_token": "VTEX_APP_TOKEN",
}


def _env(name: str, field_name: str) -> AliasChoices:
    return AliasChoices(name, field_name)


class SyncSettings(BaseSettings):
    """Runtime settings for a synchronization run."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    account_name: str | None = Field(None, validation_alias=_env("VTEX_ACCOUNT_NAME", "account_name"))
    app_key: str | None = Field(None, validation_alias=_env("VTEX_APP_KEY", "app_key"))
    app_token: str | None = Field(None, validation_alias=_env("VTEX_APP_TOKEN", "app_token"))
    csv_file_path: Path = Field(Path("./data.csv"), validation_alias=_env("CSV_FILE_PATH", "csv_file_path"))
    rate_limit: int = Field(DEFAULT_RATE_LIMIT, validation_alias=_env("RATE_LIMIT", "rate_limit"))

    pricing_mode: PricingMode = Field(PricingMode.DIRECT, validation_alias=_env("PRICING_MODE", "pricing_mode"))
    price_units: PriceUnits = Field(
        PriceUnits.MINOR_UNIT_ROUNDED, validation_alias=_env("PRICE_UNITS", "price_units")
    )
    endpoint_layout: EndpointLayout = Field(
        EndpointLayout.SINGLE, validation_alias=_env("ENDPOINT_LAYOUT", "endpoint_layout")
    )
    mirror_cost_price: bool = Field(False, validation_alias=_env("MIRROR_COST_PRICE", "mirror_cost_price"))
    request_timeout: float = Field(DEFAULT_TIMEOUT, validation_alias=_env("REQUEST_TIMEOUT", "request_timeout"))
    dry_run: bool = Field(False, validation_alias=_env("DRY_RUN", "dry_run"))
    log_level: str = Field("INFO", validation_alias=_env("LOG_LEVEL", "log_level"))

    @field_validator("account_name", "app_key", "app_token", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("rate_limit", mode="before")
    @classmethod
    def _default_rate_limit(cls, value: Any) -> Any:
        """Blank, non-numeric and zero values fall back to the default."""
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                return DEFAULT_RATE_LIMIT
        if value is None or value == 0:
            return DEFAULT_RATE_LIMIT
        return value

    @property
    def catalog_base_url(self) -> str:
        return f"https://{self.account_name}.vtexcommercestable.com.br/api"

    @property
    def pricing_base_url(self) -> str:
        if self.endpoint_layout is EndpointLayout.SPLIT:
            return f"https://api.vtex.com/{self.account_name}"
        return self.catalog_base_url

    def missing_required(self) -> list[str]:
        """Return the environment names of unset required settings."""
        return [env_name for field_name, env_name in _REQUIRED.items() if not getattr(self, field_name)]

    def require(self) -> None:
        """Raise :class:`ConfigurationError` unless the run can talk to the catalog."""
        missing = self.missing_required()
        if missing:
            raise ConfigurationError(
                "Missing required environment variables: " + ", ".join(missing),
                missing=missing,
            )
        if self.rate_limit < 1:
            raise ConfigurationError(
                f"RATE_LIMIT must be a positive integer, got {self.rate_limit}",
                details={"rate_limit": self.rate_limit},
            )
        if self.request_timeout <= 0:
            raise ConfigurationError(
                f"REQUEST_TIMEOUT must be positive, got {self.request_timeout}",
                details={"request_timeout": self.request_timeout},
            )


def load_settings(env_file: Path | str | None = ".env", **overrides: Any) -> SyncSettings:
    """Load settings from the environment, translating validation failures.

    Args:
        env_file: dotenv file to read in addition to the process environment.
        **overrides: field values taking precedence over both sources.
    """
    try:
        settings = SyncSettings(_env_file=env_file)
    except ValidationError as exc:
        fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(fields)}",
            details={"errors": [error["msg"] for error in exc.errors()]},
        ) from exc

    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        settings = settings.model_copy(update=updates)
    return settings
