"""Pytest configuration for pricesync test suite."""

from __future__ import annotations

import pytest

from pricesync.core.config import SyncSettings


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--pricesync-run-integration",
        action="store_true",
        default=False,
        help="Run pricesync integration tests that require a catalog account.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker for pricesync tests."""

    config.addinivalue_line(
        "markers",
        "integration: marks pricesync tests requiring network or external services",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--pricesync-run-integration"):
        return

    skip_integration = pytest.mark.skip(
        reason="integration tests require --pricesync-run-integration",
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


_ENV_NAMES = (
    "VTEX_ACCOUNT_NAME",
    "VTEX_APP_KEY",
    "VTEX_APP_TOKEN",
    "CSV_FILE_PATH",
    "RATE_LIMIT",
    "PRICING_MODE",
    "PRICE_UNITS",
    "ENDPOINT_LAYOUT",
    "MIRROR_COST_PRICE",
    "REQUEST_TIMEOUT",
    "DRY_RUN",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep the developer's environment and .env file out of the tests."""

    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


@pytest.fixture
def settings() -> SyncSettings:
    return SyncSettings(
        _env_file=None,
        account_name="acme",
        app_key="key-123",
        app_token="token-456",
        rate_limit=2,
    )
