"""
Account export: project accounts into flat records and write them as CSV.

Amounts are exact inside the kernel; this is the only place they are
rounded, to a fixed number of fractional digits for display.
"""

from __future__ import annotations

import csv
import decimal
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, TextIO

from payments_kernel.domain.account import Account
from payments_kernel.domain.values import Amount, ClientId

OUTPUT_COLUMNS = ("client", "available", "held", "total", "locked")
DEFAULT_DECIMAL_PLACES = 4
DEFAULT_ROUNDING = decimal.ROUND_HALF_EVEN

_ROUNDING_MODES = frozenset(
    {
        decimal.ROUND_CEILING,
        decimal.ROUND_DOWN,
        decimal.ROUND_FLOOR,
        decimal.ROUND_HALF_DOWN,
        decimal.ROUND_HALF_EVEN,
        decimal.ROUND_HALF_UP,
        decimal.ROUND_UP,
        decimal.ROUND_05UP,
    }
)


def validate_rounding(rounding: str) -> str:
    if rounding not in _ROUNDING_MODES:
        raise ValueError(f"Unknown rounding mode: {rounding!r}")
    return rounding


@dataclass(frozen=True)
class AccountRecord:
    """Flat output view of one account."""

    client: ClientId
    available: Amount
    held: Amount
    total: Amount
    locked: bool

    @classmethod
    def from_account(cls, account: Account) -> AccountRecord:
        return cls(
            client=account.client,
            available=account.balance.available,
            held=account.balance.held,
            total=account.balance.total,
            locked=account.locked,
        )


def format_amount(
    amount: Amount,
    places: int = DEFAULT_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> str:
    """Render ``amount`` with exactly ``places`` fractional digits."""
    if places < 0:
        raise ValueError(f"places must be non-negative, got {places}")
    quantum = Decimal(1).scaleb(-places)
    with decimal.localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.value.adjusted() + places + 2)
        return f"{amount.value.quantize(quantum, rounding=rounding):f}"


def to_row(
    record: AccountRecord,
    places: int = DEFAULT_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> list[str]:
    return [
        str(record.client),
        format_amount(record.available, places, rounding),
        format_amount(record.held, places, rounding),
        format_amount(record.total, places, rounding),
        "true" if record.locked else "false",
    ]


def write_accounts(
    accounts: Iterable[Account],
    stream: TextIO,
    decimal_places: int = DEFAULT_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> int:
    """Write a header and one row per account. Returns the number of rows."""
    validate_rounding(rounding)
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_COLUMNS)
    count = 0
    for account in accounts:
        writer.writerow(to_row(AccountRecord.from_account(account), decimal_places, rounding))
        count += 1
    return count
