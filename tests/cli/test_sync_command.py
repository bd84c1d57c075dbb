from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from pricesync.cli import sync as sync_module
from pricesync.cli.main import create_app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VTEX_ACCOUNT_NAME", "acme")
    monkeypatch.setenv("VTEX_APP_KEY", "key")
    monkeypatch.setenv("VTEX_APP_TOKEN", "token")


@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    path = tmp_path / "prices.csv"
    path.write_text('Parte, Precio Base.\nA1,"$10.00"\nB2,20\nC3,n/a\n', encoding="utf-8")
    return path


class CatalogStub:
    """Mock catalog failing price updates for selected item ids."""

    def __init__(self, fail: set[str] | None = None, refs: dict[str, str] | None = None) -> None:
        self.fail = fail or set()
        self.refs = refs or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            ref = request.url.params["fq"].split(":", 1)[1]
            item_id = self.refs.get(ref)
            products = [{"productId": "p", "items": [{"itemId": item_id}]}] if item_id else []
            return httpx.Response(200, json=products)
        item_id = request.url.path.rsplit("/", 1)[-1]
        if item_id in self.fail:
            return httpx.Response(400, json={"error": f"invalid {item_id}"})
        return httpx.Response(200)

    @property
    def put_paths(self) -> list[str]:
        return sorted(r.url.path for r in self.requests if r.method == "PUT")


def _use_stub(monkeypatch: pytest.MonkeyPatch, stub: CatalogStub) -> None:
    monkeypatch.setattr(sync_module, "get_transport", lambda: httpx.MockTransport(stub))


def _json_lines(output: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_sync_table_output(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, credentials: None, csv_file: Path
) -> None:
    stub = CatalogStub(fail={"B2"})
    _use_stub(monkeypatch, stub)

    result = runner.invoke(create_app(), ["--no-color", "sync", "--csv", str(csv_file)])

    assert result.exit_code == 0, result.output
    assert "summary" in result.output
    assert "succeeded" in result.output
    assert "B2" in result.output
    assert stub.put_paths == ["/api/pricing/prices/A1", "/api/pricing/prices/B2"]


def test_sync_jsonl_output_and_report_file(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, credentials: None, csv_file: Path, tmp_path: Path
) -> None:
    _use_stub(monkeypatch, CatalogStub(fail={"B2"}))
    report_path = tmp_path / "out" / "report.json"

    result = runner.invoke(
        create_app(),
        ["--format", "jsonl", "--log-level", "ERROR", "sync", "--csv", str(csv_file), "--report", str(report_path)],
    )

    assert result.exit_code == 0, result.output
    rows = _json_lines(result.output)
    summary = {row["metric"]: row["value"] for row in rows if row["section"] == "summary"}
    assert summary == {"succeeded": 1, "failed": 1, "skipped_rows": 1, "unresolved": 0}
    failures = [row for row in rows if row["section"] == "failures"]
    assert failures[0]["item_id"] == "B2"
    assert failures[0]["http_status"] == 400

    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["success_count"] == 1
    assert report["failures"][0]["error_detail"] == {"error": "invalid B2"}


def test_sync_reference_lookup_mode(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, credentials: None, csv_file: Path
) -> None:
    stub = CatalogStub(refs={"A1": "1001"})
    _use_stub(monkeypatch, stub)

    result = runner.invoke(
        create_app(),
        ["--format", "jsonl", "--log-level", "ERROR", "sync", "--csv", str(csv_file), "--mode", "reference_lookup"],
    )

    assert result.exit_code == 0, result.output
    summary = {row["metric"]: row["value"] for row in _json_lines(result.output)}
    assert summary["succeeded"] == 1
    assert summary["unresolved"] == 1
    assert stub.put_paths == ["/api/pricing/prices/1001"]


def test_sync_dry_run_sends_nothing(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, credentials: None, csv_file: Path
) -> None:
    stub = CatalogStub()
    _use_stub(monkeypatch, stub)

    result = runner.invoke(create_app(), ["--log-level", "ERROR", "sync", "--csv", str(csv_file), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert stub.requests == []


def test_sync_missing_credentials_exit_code(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, csv_file: Path
) -> None:
    stub = CatalogStub()
    _use_stub(monkeypatch, stub)

    result = runner.invoke(create_app(), ["sync", "--csv", str(csv_file)])

    assert result.exit_code == 10
    assert "CONFIGURATION_ERROR" in result.output
    assert "VTEX_ACCOUNT_NAME" in result.output
    assert stub.requests == []


def test_sync_missing_csv_exit_code(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, credentials: None, tmp_path: Path
) -> None:
    _use_stub(monkeypatch, CatalogStub())

    result = runner.invoke(create_app(), ["sync", "--csv", str(tmp_path / "missing.csv")])

    assert result.exit_code == 10
    assert "CSV file not found" in result.output


def test_sync_rejects_unknown_format(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["--format", "xml", "sync"])

    assert result.exit_code == 2


def test_sync_rejects_unknown_log_level_setting(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, credentials: None, csv_file: Path
) -> None:
    stub = CatalogStub()
    _use_stub(monkeypatch, stub)
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    result = runner.invoke(create_app(), ["sync", "--csv", str(csv_file)])

    assert result.exit_code == 10
    assert "Invalid LOG_LEVEL" in result.output
    assert stub.requests == []
