"""Record source abstractions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Protocol, runtime_checkable

from pricesync.core.models import RawRecord


@runtime_checkable
class RecordSource(Protocol):
    """Producer of raw (identifier, price text) records."""

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` when the source cannot be read."""
        ...

    def read(self) -> Iterator[RawRecord]:
        """Yield records, raising :class:`RecordSourceError` on read failures."""
        ...


class InMemoryRecordSource:
    """Record source over records already held in memory."""

    def __init__(self, records: Iterable[RawRecord]):
        self._records = list(records)

    def validate(self) -> None:
        return None

    def read(self) -> Iterator[RawRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)


def as_record_source(source: RecordSource | Iterable[RawRecord]) -> RecordSource:
    if isinstance(source, RecordSource):
        return source
    return InMemoryRecordSource(source)
