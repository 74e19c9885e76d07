"""
Transaction -- the immutable input value, and the stored deposit record.

Responsibility:
    Transaction is what the ledger consumes: one of five kinds, always bound
    to a client and a tx id. Deposits and withdrawals carry an amount;
    disputes, resolves and chargebacks never do, because the amount they
    move is always read back from the stored DepositRecord.

    DepositRecord is what an account keeps for each applied deposit so that
    it can later be disputed. It owns the two-state dispute flag.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Failure modes:
    - ValueError when a Transaction's amount does not match its kind
    - AlreadyDisputedError / NotDisputedError on illegal dispute transitions
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from payments_kernel.domain.values import Amount, ClientId, TxId
from payments_kernel.exceptions import AlreadyDisputedError, NotDisputedError


class TransactionType(str, Enum):
    """Kind of a transaction. Values match the input ``type`` column."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class DisputeStatus(str, Enum):
    """Dispute state of a stored deposit."""

    CLOSED = "closed"
    OPENED = "opened"


@dataclass(frozen=True, slots=True)
class Transaction:
    """
    One ledger transaction.

    Contract:
        ``amount`` is set for DEPOSIT and WITHDRAWAL and is None for the
        three dispute kinds. Use the factory classmethods rather than the
        constructor.
    """

    type: TransactionType
    client: ClientId
    tx: TxId
    amount: Amount | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, TransactionType):
            raise ValueError(f"Invalid transaction type: {self.type!r}")
        if self.type.carries_amount:
            if not isinstance(self.amount, Amount):
                raise ValueError(f"{self.type.value} requires an amount (tx {self.tx})")
        elif self.amount is not None:
            raise ValueError(f"{self.type.value} must not carry an amount (tx {self.tx})")

    @classmethod
    def deposit(cls, client: int, tx: int, amount: Amount) -> Transaction:
        return cls(TransactionType.DEPOSIT, ClientId(client), TxId(tx), amount)

    @classmethod
    def withdrawal(cls, client: int, tx: int, amount: Amount) -> Transaction:
        return cls(TransactionType.WITHDRAWAL, ClientId(client), TxId(tx), amount)

    @classmethod
    def dispute(cls, client: int, tx: int) -> Transaction:
        return cls(TransactionType.DISPUTE, ClientId(client), TxId(tx))

    @classmethod
    def resolve(cls, client: int, tx: int) -> Transaction:
        return cls(TransactionType.RESOLVE, ClientId(client), TxId(tx))

    @classmethod
    def chargeback(cls, client: int, tx: int) -> Transaction:
        return cls(TransactionType.CHARGEBACK, ClientId(client), TxId(tx))


@dataclass(slots=True)
class DepositRecord:
    """
    A deposit as stored by its account, with its dispute state.

    CLOSED -> OPENED on open_dispute(); OPENED -> CLOSED on close_dispute().
    Records are never deleted, so a resolved deposit can be disputed again.
    """

    tx: TxId
    amount: Amount
    dispute_status: DisputeStatus = DisputeStatus.CLOSED

    @property
    def is_disputed(self) -> bool:
        return self.dispute_status is DisputeStatus.OPENED

    def open_dispute(self) -> None:
        if self.dispute_status is DisputeStatus.OPENED:
            raise AlreadyDisputedError(self.tx)
        self.dispute_status = DisputeStatus.OPENED

    def close_dispute(self) -> None:
        if self.dispute_status is DisputeStatus.CLOSED:
            raise NotDisputedError(self.tx)
        self.dispute_status = DisputeStatus.CLOSED
