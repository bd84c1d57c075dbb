"""CSV record source tolerant of the header spellings seen in price exports."""

from __future__ import annotations

import csv
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from pricesync.core.exceptions import ConfigurationError, RecordSourceError
from pricesync.core.logging import get_logger
from pricesync.core.models import RawRecord

logger = get_logger(__name__)

IDENTIFIER_HEADERS = (
    "parte",
    "itemid",
    "item id",
    "_skuid",
    "skuid",
    "sku id",
    "sku",
    "refid",
    "_skureferencecode",
    "reference code",
    "referencecode",
)
PRICE_HEADERS = (
    "precio base",
    "baseprice",
    "base price",
    "precio",
    "price",
)
_DELIMITERS = ",;\t"


def normalize_header(header: str | None) -> str:
    """``" Precio Base."`` -> ``"precio base"``."""
    if header is None:
        return ""
    return " ".join(header.strip().rstrip(".").split()).casefold()


def find_column(fieldnames: Sequence[str], candidates: Sequence[str]) -> str | None:
    """Return the first header matching a candidate, in candidate priority order."""
    normalized = {normalize_header(name): name for name in reversed(fieldnames)}
    for candidate in candidates:
        if candidate in normalized:
            return normalized[candidate]
    return None


class CsvRecordSource:
    """Read (identifier, price) rows from a delimited text file with a header."""

    def __init__(self, path: Path | str, encoding: str = "utf-8-sig"):
        self.path = Path(path)
        self.encoding = encoding

    def validate(self) -> None:
        if not self.path.is_file():
            raise ConfigurationError(f"CSV file not found: {self.path}", details={"path": str(self.path)})
        if not os.access(self.path, os.R_OK):
            raise ConfigurationError(f"CSV file is not readable: {self.path}", details={"path": str(self.path)})

    def read(self) -> Iterator[RawRecord]:
        try:
            with open(self.path, newline="", encoding=self.encoding) as handle:
                sample = handle.read(4096)
                handle.seek(0)
                reader = csv.DictReader(handle, dialect=self._sniff(sample))
                id_column, price_column = self._columns(reader.fieldnames or [])

                for row in reader:
                    yield RawRecord(
                        reference_code=(row.get(id_column) or "").strip(),
                        price_text=row.get(price_column) or "",
                        line_number=reader.line_num,
                    )
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise RecordSourceError(f"Failed to read {self.path}: {exc}", source=str(self.path)) from exc

    def _sniff(self, sample: str) -> type[csv.Dialect] | str:
        try:
            return csv.Sniffer().sniff(sample, delimiters=_DELIMITERS)
        except csv.Error:
            return "excel"

    def _columns(self, fieldnames: Sequence[str]) -> tuple[str, str]:
        id_column = find_column(fieldnames, IDENTIFIER_HEADERS)
        price_column = find_column(fieldnames, PRICE_HEADERS)
        if id_column is None or price_column is None:
            raise RecordSourceError(
                f"{self.path} is missing an identifier or base price column",
                source=str(self.path),
                details={"headers": list(fieldnames)},
            )
        logger.debug(f"Using columns {id_column!r} and {price_column!r} from {self.path}")
        return id_column, price_column
