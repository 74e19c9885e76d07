"""Source adapters: read structured input into one dict per record."""

from payments_ingestion.adapters.base import SourceAdapter
from payments_ingestion.adapters.csv_adapter import (
    CsvSourceAdapter,
    open_source,
    wrap_binary,
)

__all__ = ["CsvSourceAdapter", "SourceAdapter", "open_source", "wrap_binary"]
