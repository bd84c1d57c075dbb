"""Record sources feeding the pipeline."""

from pricesync.core.sources.base import InMemoryRecordSource, RecordSource, as_record_source
from pricesync.core.sources.csv_source import CsvRecordSource

__all__ = ["CsvRecordSource", "InMemoryRecordSource", "RecordSource", "as_record_source"]
