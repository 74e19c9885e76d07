"""
Source adapter protocol.

Contract:
    SourceAdapter.read() yields one dict per source record (streaming).
    SourceAdapter.read_path() does the same for a file on disk.
    SourceAdapter.read_numbered() pairs each record with its line number and
    reports unreadable rows as ParseError values instead of raising.

Architecture: payments_ingestion/adapters. I/O only, no kernel imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Protocol, TextIO, runtime_checkable

from payments_ingestion.exceptions import ParseError


@runtime_checkable
class SourceAdapter(Protocol):
    """Protocol for reading structured sources into record dicts."""

    def read(self, stream: TextIO, options: dict[str, Any]) -> Iterator[dict[str, Any]]:
        """Yield one dict per source record. Streams; does not load the whole input."""
        ...

    def read_path(self, source_path: Path, options: dict[str, Any]) -> Iterator[dict[str, Any]]:
        """Open ``source_path`` and stream its records."""
        ...

    def read_numbered(
        self, stream: TextIO, options: dict[str, Any]
    ) -> Iterator[tuple[int, dict[str, Any] | ParseError]]:
        """Yield ``(line_number, record)``; a ParseError stands in for an unreadable row."""
        ...
