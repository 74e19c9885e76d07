"""
Typed Exception Hierarchy for the Payments Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Every rejected transaction must be reported precisely so that the driver can
log it, count it, and move on to the next one. Callers catch by type, never
by message text, and read structured attributes instead of parsing strings:

    try:
        ledger.apply(transaction)
    except AccountLockedError as e:
        log.warning("locked", extra={"client": e.client})
    except PaymentsKernelError as e:
        log.warning("rejected", extra={"code": e.code})

Requirements:
  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable)
  3. Exceptions carry structured DATA (not just a message string)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from PaymentsKernelError:

    PaymentsKernelError (base)
    |
    +-- AmountError
    |   +-- NegativeAmountError
    |   +-- InvalidAmountError
    |
    +-- AccountError
    |   +-- UnauthorizedTransactionError
    |   +-- AccountLockedError
    |
    +-- BalanceError
    |   +-- InsufficientFundsError
    |   +-- InsufficientHeldFundsError
    |
    +-- DisputeError
        +-- DepositNotFoundError
        +-- AlreadyDisputedError
        +-- NotDisputedError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Amount          | NEGATIVE_AMOUNT             | Amount constructed from a negative value
                | INVALID_AMOUNT              | Amount from float, NaN or infinity
----------------|-----------------------------|-----------------------------------------
Account         | UNAUTHORIZED                | Transaction client != account client
                | ACCOUNT_LOCKED              | Any transaction on a locked account
----------------|-----------------------------|-----------------------------------------
Balance         | INSUFFICIENT_FUNDS          | Debit or hold exceeds available funds
                | INSUFFICIENT_HELD_FUNDS     | Release or reimburse exceeds held funds
----------------|-----------------------------|-----------------------------------------
Dispute         | DEPOSIT_NOT_FOUND           | Dispute/resolve/chargeback of unknown tx
                | ALREADY_DISPUTED            | Dispute of a deposit already disputed
                | NOT_DISPUTED                | Resolve/chargeback of undisputed deposit

===============================================================================
PROPAGATION
===============================================================================

Every error is local to one transaction. The ledger raises it to the caller
and keeps no trace of the failure; the ledger itself stays usable. The driver
(payments_services.engine_service) catches PaymentsKernelError per
transaction, logs it and continues with the stream.
"""

from __future__ import annotations

from decimal import Decimal


class PaymentsKernelError(Exception):
    """
    Base exception for all payments kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PAYMENTS_KERNEL_ERROR"


# Amount-related exceptions


class AmountError(PaymentsKernelError):
    """Base exception for amount construction errors."""

    code: str = "AMOUNT_ERROR"


class NegativeAmountError(AmountError):
    """Amounts can never be negative."""

    code: str = "NEGATIVE_AMOUNT"

    def __init__(self, value: Decimal):
        self.value = str(value)
        super().__init__(f"Negative amounts are not allowed: {value}")


class InvalidAmountError(AmountError):
    """Amount source value is not a finite decimal."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, value: object, reason: str):
        self.value = repr(value)
        self.reason = reason
        super().__init__(f"Invalid amount {value!r}: {reason}")


# Account-related exceptions


class AccountError(PaymentsKernelError):
    """Base exception for account-level rejections."""

    code: str = "ACCOUNT_ERROR"


class UnauthorizedTransactionError(AccountError):
    """
    Transaction client does not own the account it was applied to.

    Unreachable through Ledger routing; guards direct Account.apply calls.
    """

    code: str = "UNAUTHORIZED"

    def __init__(self, account_client: int, transaction_client: int, tx: int):
        self.account_client = account_client
        self.transaction_client = transaction_client
        self.tx = tx
        super().__init__(
            f"Client {transaction_client} is not authorized on account "
            f"{account_client} (tx {tx})"
        )


class AccountLockedError(AccountError):
    """Account was locked by a chargeback and accepts no more transactions."""

    code: str = "ACCOUNT_LOCKED"

    def __init__(self, client: int, tx: int):
        self.client = client
        self.tx = tx
        super().__init__(f"Account {client} is locked (tx {tx})")


# Balance-related exceptions


class BalanceError(PaymentsKernelError):
    """Base exception for balance sufficiency errors."""

    code: str = "BALANCE_ERROR"


class InsufficientFundsError(BalanceError):
    """Debit or hold requested more than the available funds."""

    code: str = "INSUFFICIENT_FUNDS"

    def __init__(self, requested: Decimal, available: Decimal, tx: int | None = None):
        self.requested = str(requested)
        self.available = str(available)
        self.tx = tx
        message = f"Insufficient funds: requested {requested}, available {available}"
        if tx is not None:
            message = f"{message} for tx {tx}"
        super().__init__(message)


class InsufficientHeldFundsError(BalanceError):
    """Release or reimburse requested more than the held funds."""

    code: str = "INSUFFICIENT_HELD_FUNDS"

    def __init__(self, requested: Decimal, held: Decimal, tx: int | None = None):
        self.requested = str(requested)
        self.held = str(held)
        self.tx = tx
        message = f"Insufficient funds on hold: requested {requested}, held {held}"
        if tx is not None:
            message = f"{message} for tx {tx}"
        super().__init__(message)


# Dispute-related exceptions


class DisputeError(PaymentsKernelError):
    """Base exception for dispute lifecycle errors."""

    code: str = "DISPUTE_ERROR"


class DepositNotFoundError(DisputeError):
    """No deposit is stored under the referenced tx for this account."""

    code: str = "DEPOSIT_NOT_FOUND"

    def __init__(self, client: int, tx: int):
        self.client = client
        self.tx = tx
        super().__init__(f"No deposit for tx {tx} on account {client}")


class AlreadyDisputedError(DisputeError):
    """Deposit already has an open dispute."""

    code: str = "ALREADY_DISPUTED"

    def __init__(self, tx: int):
        self.tx = tx
        super().__init__(
            f"Deposit {tx} is already disputed; "
            "resolve or charge back the open dispute first"
        )


class NotDisputedError(DisputeError):
    """Deposit has no open dispute to resolve or charge back."""

    code: str = "NOT_DISPUTED"

    def __init__(self, tx: int):
        self.tx = tx
        super().__init__(f"Deposit {tx} has no open dispute")
