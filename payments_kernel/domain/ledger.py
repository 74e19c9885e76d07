"""
Ledger -- routes transactions to client accounts.

The ledger owns the client -> account map. Accounts are created on first
reference to a client and never removed, so every client ever seen has
exactly one account. Errors raised by an account propagate unchanged; the
ledger stays usable after any of them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from payments_kernel.domain.account import Account
from payments_kernel.domain.transaction import Transaction
from payments_kernel.domain.values import ClientId
from payments_kernel.logging_config import get_logger

logger = get_logger("domain.ledger")


@dataclass
class Ledger:
    """In-memory ledger of client accounts."""

    accounts: dict[ClientId, Account] = field(default_factory=dict)

    def apply(self, transaction: Transaction) -> None:
        """Apply a transaction to its client's account."""
        self.account_for(transaction.client).apply(transaction)

    def account_for(self, client: ClientId) -> Account:
        """Return the account of ``client``, creating it if needed."""
        account = self.accounts.get(client)
        if account is None:
            account = Account(client=client)
            self.accounts[client] = account
            logger.debug("account_created", extra={"account_client": client})
        return account

    def snapshot(self) -> list[Account]:
        """All accounts ordered by client id."""
        return [self.accounts[client] for client in sorted(self.accounts)]
