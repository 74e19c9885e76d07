"""
Typed exceptions for record mapping.

A mapping error means a raw row could not become a Transaction. The ledger
never sees such rows; the driver logs and drops them.

    InputMappingError (base)
    +-- ParseError
    +-- UnknownTransactionTypeError
    +-- MissingFieldError
    |   +-- MissingAmountError
    +-- InvalidFieldError
"""

from __future__ import annotations


class InputMappingError(Exception):
    """Base exception for rows that cannot be mapped to a transaction."""

    code: str = "INPUT_MAPPING_ERROR"

    def __init__(self, message: str, source_row: int | None = None):
        self.source_row = source_row
        if source_row is not None:
            message = f"line {source_row}: {message}"
        super().__init__(message)


class ParseError(InputMappingError):
    """A source row could not be read: malformed CSV or undecodable bytes."""

    code: str = "PARSE_ERROR"

    def __init__(self, reason: str, source_row: int | None = None):
        self.reason = reason
        super().__init__(f"unreadable row: {reason}", source_row)


class UnknownTransactionTypeError(InputMappingError):
    """The ``type`` column holds no known transaction kind."""

    code: str = "UNKNOWN_TRANSACTION_TYPE"

    def __init__(self, value: str | None, source_row: int | None = None):
        self.value = value
        super().__init__(f"unknown transaction type {value!r}", source_row)


class MissingFieldError(InputMappingError):
    """A mandatory column is absent or empty."""

    code: str = "MISSING_FIELD"

    def __init__(self, field: str, source_row: int | None = None):
        self.field = field
        super().__init__(f"missing mandatory field {field!r}", source_row)


class MissingAmountError(MissingFieldError):
    """A deposit or withdrawal row has no amount."""

    code: str = "MISSING_AMOUNT"

    def __init__(
        self,
        transaction_type: str,
        client: int,
        tx: int,
        source_row: int | None = None,
    ):
        self.transaction_type = transaction_type
        self.client = client
        self.tx = tx
        InputMappingError.__init__(
            self,
            f"missing mandatory amount for {transaction_type} tx {tx} client {client}",
            source_row,
        )
        self.field = "amount"


class InvalidFieldError(InputMappingError):
    """A column value cannot be parsed or is out of range."""

    code: str = "INVALID_FIELD"

    def __init__(self, field: str, value: str | None, reason: str, source_row: int | None = None):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"invalid {field} {value!r}: {reason}", source_row)
