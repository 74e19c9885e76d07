"""
Pure domain layer.

This module contains the ledger engine with NO dependencies on:
- File or network I/O
- Parsing or serialization
- Time/clock

Values and transactions are immutable; Balance, DepositRecord, Account and
Ledger are the only mutable state, and only through their operations.
"""

from payments_kernel.domain.account import Account
from payments_kernel.domain.balance import Balance
from payments_kernel.domain.ledger import Ledger
from payments_kernel.domain.transaction import (
    DepositRecord,
    DisputeStatus,
    Transaction,
    TransactionType,
)
from payments_kernel.domain.values import Amount, ClientId, TxId

__all__ = [
    "Account",
    "Amount",
    "Balance",
    "ClientId",
    "DepositRecord",
    "DisputeStatus",
    "Ledger",
    "Transaction",
    "TransactionType",
    "TxId",
]
