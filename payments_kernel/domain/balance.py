"""
Balance -- available and held funds of one account.

Every operation checks its precondition before touching either field, so a
failing operation leaves the balance exactly as it was and neither field can
ever drop below zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from payments_kernel.domain.values import Amount
from payments_kernel.exceptions import (
    InsufficientFundsError,
    InsufficientHeldFundsError,
)


@dataclass(slots=True)
class Balance:
    """Available and held funds; total is derived."""

    available: Amount = field(default_factory=Amount.zero)
    held: Amount = field(default_factory=Amount.zero)

    @property
    def total(self) -> Amount:
        return self.available + self.held

    def credit(self, amount: Amount) -> None:
        """Add funds to available. Never fails."""
        self.available = self.available + amount

    def debit(self, amount: Amount) -> None:
        """Remove funds from available."""
        if self.available < amount:
            raise InsufficientFundsError(amount.value, self.available.value)
        self.available = self.available - amount

    def hold(self, amount: Amount) -> None:
        """Move funds from available to held."""
        if self.available < amount:
            raise InsufficientFundsError(amount.value, self.available.value)
        self.available = self.available - amount
        self.held = self.held + amount

    def release(self, amount: Amount) -> None:
        """Move funds from held back to available."""
        if self.held < amount:
            raise InsufficientHeldFundsError(amount.value, self.held.value)
        self.held = self.held - amount
        self.available = self.available + amount

    def reimburse(self, amount: Amount) -> None:
        """Remove held funds from the account entirely."""
        if self.held < amount:
            raise InsufficientHeldFundsError(amount.value, self.held.value)
        self.held = self.held - amount
