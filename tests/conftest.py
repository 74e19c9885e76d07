"""
Pytest fixtures for the payments ledger test suite.

Provides:
- Fresh ledgers and accounts
- Structured logging capture (JSON lines in a StringIO)
"""

import json
import logging
from io import StringIO

import pytest

from payments_kernel.domain.account import Account
from payments_kernel.domain.ledger import Ledger
from payments_kernel.domain.values import ClientId
from payments_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


@pytest.fixture
def ledger() -> Ledger:
    return Ledger()


@pytest.fixture
def account() -> Account:
    return Account(client=ClientId(1))


@pytest.fixture(autouse=True)
def _clean_logging():
    """Every test starts with unconfigured logging and an empty context."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


class LogCapture:
    """Collects structured log lines emitted under payments_kernel."""

    def __init__(self) -> None:
        self.stream = StringIO()

    @property
    def records(self) -> list[dict]:
        return [json.loads(line) for line in self.stream.getvalue().splitlines() if line]

    def messages(self) -> list[str]:
        return [r["message"] for r in self.records]

    def by_message(self, message: str) -> list[dict]:
        return [r for r in self.records if r["message"] == message]


@pytest.fixture
def log_capture() -> LogCapture:
    capture = LogCapture()
    handler = logging.StreamHandler(capture.stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(level=logging.DEBUG, handler=handler)
    return capture
