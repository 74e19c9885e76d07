"""
Account -- one client's balance, lock flag and disputable deposits.

Responsibility:
    Interprets each transaction kind against the account's own state. This
    is the core state machine of the ledger.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - A transaction for another client is rejected before anything else.
    - A locked account rejects every transaction kind; nothing unlocks it.
    - Balance fields never go negative (delegated to Balance preconditions).
    - The amount moved by dispute, resolve and chargeback is always the
      stored deposit amount.

Partial commits:
    Two transitions are not atomic with the balance operation that follows
    them, and callers rely on that:
    - DISPUTE opens the dispute before holding funds. If the hold fails
      (the funds were already withdrawn) the deposit stays OPENED.
    - CHARGEBACK locks the account before reimbursing held funds. The lock
      stays even if the reimbursement fails.

Failure modes:
    - UnauthorizedTransactionError, AccountLockedError
    - InsufficientFundsError, InsufficientHeldFundsError
    - DepositNotFoundError, AlreadyDisputedError, NotDisputedError
"""

from __future__ import annotations

from dataclasses import dataclass, field

from payments_kernel.domain.balance import Balance
from payments_kernel.domain.transaction import (
    DepositRecord,
    Transaction,
    TransactionType,
)
from payments_kernel.domain.values import Amount, ClientId, TxId
from payments_kernel.exceptions import (
    AccountLockedError,
    DepositNotFoundError,
    InsufficientFundsError,
    InsufficientHeldFundsError,
    UnauthorizedTransactionError,
)


@dataclass
class Account:
    """State of one client account."""

    client: ClientId
    balance: Balance = field(default_factory=Balance)
    locked: bool = False
    deposits: dict[TxId, DepositRecord] = field(default_factory=dict)

    def apply(self, transaction: Transaction) -> None:
        """
        Apply one transaction to this account.

        Steps run in order: ownership check, lock check, dispatch on kind.
        Raises a PaymentsKernelError subclass on rejection; the account then
        reflects exactly the steps that completed.
        """
        if transaction.client != self.client:
            raise UnauthorizedTransactionError(
                self.client, transaction.client, transaction.tx
            )
        if self.locked:
            raise AccountLockedError(self.client, transaction.tx)

        match transaction.type:
            case TransactionType.DEPOSIT:
                self._deposit(transaction.tx, transaction.amount)
            case TransactionType.WITHDRAWAL:
                self._withdraw(transaction.tx, transaction.amount)
            case TransactionType.DISPUTE:
                self._dispute(transaction.tx)
            case TransactionType.RESOLVE:
                self._resolve(transaction.tx)
            case TransactionType.CHARGEBACK:
                self._chargeback(transaction.tx)

    # ------------------------------------------------------------------
    # Per-kind handlers
    # ------------------------------------------------------------------

    def _deposit(self, tx: TxId, amount: Amount) -> None:
        self.balance.credit(amount)
        # A repeated tx replaces the earlier record
        self.deposits[tx] = DepositRecord(tx=tx, amount=amount)

    def _withdraw(self, tx: TxId, amount: Amount) -> None:
        try:
            self.balance.debit(amount)
        except InsufficientFundsError as e:
            raise InsufficientFundsError(
                amount.value, self.balance.available.value, tx=tx
            ) from e

    def _dispute(self, tx: TxId) -> None:
        deposit = self._get_deposit(tx)
        deposit.open_dispute()
        try:
            self.balance.hold(deposit.amount)
        except InsufficientFundsError as e:
            # Funds already withdrawn; the dispute stays open.
            raise InsufficientFundsError(
                deposit.amount.value, self.balance.available.value, tx=tx
            ) from e

    def _resolve(self, tx: TxId) -> None:
        deposit = self._get_deposit(tx)
        deposit.close_dispute()
        try:
            self.balance.release(deposit.amount)
        except InsufficientHeldFundsError as e:
            raise InsufficientHeldFundsError(
                deposit.amount.value, self.balance.held.value, tx=tx
            ) from e

    def _chargeback(self, tx: TxId) -> None:
        deposit = self._get_deposit(tx)
        deposit.close_dispute()
        self.locked = True
        try:
            self.balance.reimburse(deposit.amount)
        except InsufficientHeldFundsError as e:
            raise InsufficientHeldFundsError(
                deposit.amount.value, self.balance.held.value, tx=tx
            ) from e

    def _get_deposit(self, tx: TxId) -> DepositRecord:
        deposit = self.deposits.get(tx)
        if deposit is None:
            raise DepositNotFoundError(self.client, tx)
        return deposit
