"""
CSV source adapter.

Uses csv.reader. Configurable: delimiter, encoding, has_header, columns.
Handles BOM via utf-8-sig when encoding is utf-8. Streams rows.

Rows are trimmed and flexible: surrounding whitespace is stripped from every
header and cell, blank lines are skipped, extra trailing cells are dropped
and missing trailing cells read as None.

A row that cannot be read (malformed quoting, a field over the csv module's
size limit, bytes that do not decode) is reported as a ParseError in place
of its record and reading continues with the next row.
"""

from __future__ import annotations

import csv
import io
import re
from pathlib import Path
from typing import Any, BinaryIO, Iterator, TextIO

from payments_ingestion.exceptions import ParseError

# Undecodable bytes read with errors="surrogateescape" land here.
_UNDECODABLE = re.compile("[\udc80-\udcff]")


def _get_encoding(options: dict[str, Any]) -> str:
    enc = options.get("encoding", "utf-8")
    if enc.lower() == "utf-8":
        return "utf-8-sig"  # Strip BOM if present
    return enc


def open_source(source_path: Path, options: dict[str, Any]) -> TextIO:
    """Open a CSV file so that bad bytes fail their own row, not the read."""
    return source_path.open(
        "r", encoding=_get_encoding(options), errors="surrogateescape", newline=""
    )


def wrap_binary(buffer: BinaryIO, options: dict[str, Any]) -> TextIO:
    """Text view of a byte stream (such as stdin) decoded the same way as open_source."""
    return io.TextIOWrapper(
        buffer, encoding=_get_encoding(options), errors="surrogateescape", newline=""
    )


def _cells(row: list[str]) -> list[str]:
    return [cell.strip() for cell in row]


class CsvSourceAdapter:
    """Read CSV input as one dict per row. Streams; does not load entire input."""

    def read(self, stream: TextIO, options: dict[str, Any]) -> Iterator[dict[str, Any]]:
        """Yield records. Raises ParseError on the first unreadable row."""
        for _, record in self.read_numbered(stream, options):
            if isinstance(record, ParseError):
                raise record
            yield record

    def read_path(self, source_path: Path, options: dict[str, Any]) -> Iterator[dict[str, Any]]:
        with open_source(source_path, options) as f:
            yield from self.read(f, options)

    def read_numbered(
        self, stream: TextIO, options: dict[str, Any]
    ) -> Iterator[tuple[int, dict[str, Any] | ParseError]]:
        """
        Yield ``(line_number, record)`` pairs; line numbers are 1-indexed.

        An unreadable row yields a ParseError instead of a record. Never
        raises for bad input.
        """
        delimiter = options.get("delimiter", ",")
        has_header = options.get("has_header", True)
        columns: tuple[str, ...] | None = None
        if not has_header:
            given = options.get("columns")
            if given:
                columns = tuple(given)

        reader = csv.reader(stream, delimiter=delimiter)
        while True:
            try:
                row = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                yield reader.line_num, ParseError(str(e), reader.line_num)
                continue

            cells = _cells(row)
            if not any(cells):
                continue
            if any(_UNDECODABLE.search(cell) for cell in cells):
                yield reader.line_num, ParseError(
                    "invalid byte sequence for the input encoding", reader.line_num
                )
                continue
            if columns is None:
                if has_header:
                    columns = tuple(cells)
                    continue
                columns = tuple(f"field_{i}" for i in range(len(cells)))
            record = {
                name: (cells[i] if i < len(cells) else None)
                for i, name in enumerate(columns)
            }
            yield reader.line_num, record
