"""
Engine service: source records -> ledger -> account snapshot.

Orchestrates the CSV source adapter, the record mapping and the kernel
ledger. Records are processed strictly in arrival order, one at a time.
A row that cannot be mapped, or a transaction the ledger rejects, is logged
and counted; the run always continues with the next record.

Uses structured logging (LogContext, get_logger("services.engine")).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, TextIO
from uuid import uuid4

from payments_config.schema import EngineConfig
from payments_ingestion.adapters.base import SourceAdapter
from payments_ingestion.adapters.csv_adapter import CsvSourceAdapter, open_source
from payments_ingestion.export import write_accounts
from payments_ingestion.exceptions import ParseError
from payments_ingestion.mapping.engine import MappingOutcome, map_records
from payments_kernel.domain.ledger import Ledger
from payments_kernel.exceptions import PaymentsKernelError
from payments_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.engine")


@dataclass
class ProcessingReport:
    """Outcome of one engine run: the ledger plus per-run counters."""

    ledger: Ledger
    run_id: str = ""
    records_read: int = 0
    transactions_applied: int = 0
    records_rejected: int = 0
    transactions_rejected: int = 0
    rejections_by_code: Counter[str] = field(default_factory=Counter)

    @property
    def rejected(self) -> int:
        return self.records_rejected + self.transactions_rejected


class EngineService:
    """Feeds records through the ledger and writes the resulting accounts."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        ledger: Ledger | None = None,
        adapter: SourceAdapter | None = None,
    ):
        self._config = config or EngineConfig()
        self._ledger = ledger if ledger is not None else Ledger()
        self._adapter = adapter or CsvSourceAdapter()

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    def run_stream(self, stream: TextIO) -> ProcessingReport:
        """Process a CSV text stream."""
        return self.run(self._adapter.read_numbered(stream, self._config.source_options))

    def run_path(self, source_path: Path) -> ProcessingReport:
        """
        Process a CSV file.

        Raises:
            OSError: if the file cannot be opened.
        """
        with open_source(source_path, self._config.source_options) as f:
            return self.run_stream(f)

    def run(
        self, records: Iterable[tuple[int | None, dict[str, Any] | ParseError]]
    ) -> ProcessingReport:
        """Map and apply ``(source_row, record)`` pairs in order."""
        report = ProcessingReport(ledger=self._ledger, run_id=uuid4().hex)
        with LogContext.bind(run_id=report.run_id):
            logger.info("run_started")
            for outcome in map_records(records):
                report.records_read += 1
                self._process(outcome, report)
            logger.info(
                "run_completed",
                extra={
                    "records_read": report.records_read,
                    "transactions_applied": report.transactions_applied,
                    "records_rejected": report.records_rejected,
                    "transactions_rejected": report.transactions_rejected,
                    "accounts": len(self._ledger.accounts),
                },
            )
        return report

    def write(self, report: ProcessingReport, stream: TextIO) -> int:
        """Write the account snapshot as CSV. Returns the number of accounts."""
        return write_accounts(
            report.ledger.snapshot(),
            stream,
            decimal_places=self._config.output_decimal_places,
            rounding=self._config.output_rounding,
        )

    def _process(self, outcome: MappingOutcome, report: ProcessingReport) -> None:
        if outcome.error is not None:
            report.records_rejected += 1
            report.rejections_by_code[outcome.error.code] += 1
            with LogContext.bind(source_row=outcome.source_row):
                logger.warning(
                    "record_rejected",
                    extra={"error_code": outcome.error.code, "reason": str(outcome.error)},
                )
            return

        transaction = outcome.transaction
        with LogContext.bind(
            source_row=outcome.source_row,
            client=transaction.client,
            tx=transaction.tx,
            transaction_type=transaction.type.value,
        ):
            try:
                self._ledger.apply(transaction)
            except PaymentsKernelError as e:
                report.transactions_rejected += 1
                report.rejections_by_code[e.code] += 1
                logger.warning(
                    "transaction_rejected",
                    extra={"error_code": e.code, "reason": str(e)},
                )
                return
            report.transactions_applied += 1
            logger.debug("transaction_applied")
