"""Tests for the CSV record source."""

from __future__ import annotations

from pathlib import Path

import pytest

from pricesync.core.exceptions import ConfigurationError, RecordSourceError
from pricesync.core.sources import CsvRecordSource, InMemoryRecordSource, as_record_source
from pricesync.core.sources.csv_source import find_column, normalize_header


def _write(tmp_path: Path, text: str, name: str = "data.csv", encoding: str = "utf-8") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding=encoding)
    return path


@pytest.mark.parametrize(
    ("header", "expected"),
    [(" Precio Base.", "precio base"), ("Precio Base", "precio base"), ("  Parte ", "parte"), (None, "")],
)
def test_normalize_header(header: str | None, expected: str) -> None:
    assert normalize_header(header) == expected


def test_find_column_respects_candidate_priority() -> None:
    assert find_column(["price", " Precio Base."], ["precio base", "price"]) == " Precio Base."
    assert find_column(["foo"], ["precio base"]) is None


def test_reads_legacy_spanish_headers(tmp_path: Path) -> None:
    path = _write(tmp_path, 'Parte, Precio Base.\nA1,"$10.00"\nB2,not-a-number\n')

    records = list(CsvRecordSource(path).read())

    assert [(r.reference_code, r.price_text) for r in records] == [("A1", "$10.00"), ("B2", "not-a-number")]
    assert records[0].line_number == 2


def test_reads_semicolon_delimited_with_bom(tmp_path: Path) -> None:
    path = _write(tmp_path, "\ufeffitemId;basePrice\n 42 ;1.234,00\n7;5\n", encoding="utf-8")

    records = list(CsvRecordSource(path).read())

    assert [r.reference_code for r in records] == ["42", "7"]
    assert records[0].price_text == "1.234,00"


def test_missing_columns_raise_source_error(tmp_path: Path) -> None:
    path = _write(tmp_path, "name,quantity\nfoo,1\n")

    with pytest.raises(RecordSourceError) as excinfo:
        list(CsvRecordSource(path).read())

    assert excinfo.value.details["headers"] == ["name", "quantity"]


def test_undecodable_file_raises_source_error(tmp_path: Path) -> None:
    path = tmp_path / "data.csv"
    path.write_bytes(b"Parte,Precio Base\n\xff\xfe\xfa,1\n")

    with pytest.raises(RecordSourceError):
        list(CsvRecordSource(path).read())


def test_validate_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="CSV file not found"):
        CsvRecordSource(tmp_path / "nope.csv").validate()


def test_validate_existing_file(tmp_path: Path) -> None:
    CsvRecordSource(_write(tmp_path, "Parte,Precio Base\n")).validate()


def test_in_memory_source_wraps_iterables() -> None:
    source = as_record_source(iter([]))

    assert isinstance(source, InMemoryRecordSource)
    assert list(source.read()) == []
    assert as_record_source(source) is source
