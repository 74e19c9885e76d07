"""
Record mapping: raw CSV record -> Transaction.

Pure: no I/O. Each record is a dict of trimmed strings (or None) keyed by
column name, as produced by CsvSourceAdapter. Columns: type, client, tx,
amount. The amount column is read only for deposits and withdrawals; a
stray amount on a dispute, resolve or chargeback row is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Iterator

from payments_kernel.domain.transaction import Transaction, TransactionType
from payments_kernel.domain.values import Amount, ClientId, TxId
from payments_kernel.exceptions import AmountError

from payments_ingestion.exceptions import (
    InputMappingError,
    InvalidFieldError,
    MissingAmountError,
    MissingFieldError,
    ParseError,
    UnknownTransactionTypeError,
)

CLIENT_ID_MAX = 2**16 - 1
TX_ID_MAX = 2**32 - 1

_TYPES_BY_NAME = {t.value: t for t in TransactionType}


@dataclass(frozen=True)
class MappingOutcome:
    """Result of mapping one record: a transaction or the reason it was dropped."""

    source_row: int | None
    transaction: Transaction | None = None
    error: InputMappingError | None = None

    @property
    def is_valid(self) -> bool:
        return self.transaction is not None


def _text(record: dict[str, Any], field: str) -> str | None:
    value = record.get(field)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_type(value: str | None, source_row: int | None = None) -> TransactionType:
    t = _TYPES_BY_NAME.get(value.lower()) if value else None
    if t is None:
        raise UnknownTransactionTypeError(value, source_row)
    return t


def parse_id(
    record: dict[str, Any],
    field: str,
    maximum: int,
    source_row: int | None = None,
) -> int:
    """Parse an unsigned integer id in ``0..maximum``; plain ASCII digits only."""
    value = _text(record, field)
    if value is None:
        raise MissingFieldError(field, source_row)
    if not (value.isascii() and value.isdigit()):
        raise InvalidFieldError(field, value, "not an unsigned integer", source_row)
    # Length first; int() refuses very long digit strings
    digits = value.lstrip("0") or "0"
    if len(digits) > len(str(maximum)) or int(digits) > maximum:
        raise InvalidFieldError(field, value, f"out of range 0..{maximum}", source_row)
    return int(digits)


def parse_amount(value: str, source_row: int | None = None) -> Amount:
    """Parse a non-negative decimal amount, keeping its full precision."""
    if not value.isascii() or "_" in value:
        raise InvalidFieldError("amount", value, "not a decimal number", source_row)
    try:
        return Amount.of(Decimal(value))
    except InvalidOperation:
        raise InvalidFieldError("amount", value, "not a decimal number", source_row) from None
    except AmountError as e:
        raise InvalidFieldError("amount", value, str(e), source_row) from e


def map_record(record: dict[str, Any], source_row: int | None = None) -> Transaction:
    """
    Map one raw record to a Transaction.

    Raises:
        UnknownTransactionTypeError: type is missing or not a known kind.
        MissingFieldError: client or tx is missing.
        MissingAmountError: deposit or withdrawal without an amount.
        InvalidFieldError: unparseable or out-of-range value.
    """
    t_type = parse_type(_text(record, "type"), source_row)
    client = ClientId(parse_id(record, "client", CLIENT_ID_MAX, source_row))
    tx = TxId(parse_id(record, "tx", TX_ID_MAX, source_row))

    if not t_type.carries_amount:
        return Transaction(t_type, client, tx)

    raw_amount = _text(record, "amount")
    if raw_amount is None:
        raise MissingAmountError(t_type.value, client, tx, source_row)
    return Transaction(t_type, client, tx, parse_amount(raw_amount, source_row))


def map_records(
    records: Iterable[tuple[int | None, dict[str, Any] | ParseError]],
) -> Iterator[MappingOutcome]:
    """
    Map ``(source_row, record)`` pairs, one outcome per record, in order.

    A ParseError from the source adapter passes straight through as the
    outcome's error.
    """
    for source_row, record in records:
        if isinstance(record, ParseError):
            yield MappingOutcome(source_row=source_row, error=record)
            continue
        try:
            transaction = map_record(record, source_row)
        except InputMappingError as e:
            yield MappingOutcome(source_row=source_row, error=e)
        else:
            yield MappingOutcome(source_row=source_row, transaction=transaction)
