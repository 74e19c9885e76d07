"""
Values -- Immutable, self-validating domain value objects.

Responsibility:
    Provides the identifier types and the Amount value type used by every
    ledger computation. Amount replaces raw Decimal wherever money appears
    in domain logic.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every other domain module.

Invariants enforced:
    - An Amount is never negative: construction from a negative value fails.
    - Amount arithmetic is Decimal-only, never float, and never rounds.
    - Raw subtraction floors at zero. Balance transitions never rely on it;
      they check sufficiency first and fail instead.

Failure modes:
    - NegativeAmountError on construction from a negative value
    - InvalidAmountError on construction from float, NaN or infinity,
      or from an out-of-bounds value via Amount.of
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import (
    Context,
    Decimal,
    Inexact,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import NewType

from payments_kernel.exceptions import InvalidAmountError, NegativeAmountError

ClientId = NewType("ClientId", int)
"""Opaque client identifier; the routing key of the ledger."""

TxId = NewType("TxId", int)
"""Opaque transaction identifier; keys deposits inside an account."""

# Bounds on amounts accepted from outside the kernel. An amount has at most
# MAX_INTEGER_DIGITS digits before the point and MAX_SCALE after it.
MAX_INTEGER_DIGITS = 64
MAX_SCALE = 64

# Wide enough to add any two bounded amounts exactly, with headroom for sums
# of up to 10**30 of them. Inexact is trapped so a result is never rounded.
_AMOUNT_CONTEXT = Context(
    prec=MAX_INTEGER_DIGITS + MAX_SCALE + 32,
    traps=[Inexact, InvalidOperation, Overflow],
)


@dataclass(frozen=True, slots=True, order=True)
class Amount:
    """
    Non-negative monetary amount.

    Contract:
        Wraps an exact Decimal that is finite and >= 0. Equality and ordering
        follow the wrapped decimal, so Amount.of("1.0") == Amount.of("1.00").

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - value is always a finite, non-negative Decimal
        - a + b is exact and never negative
        - a - b floors at zero
        - of() only accepts values within MAX_INTEGER_DIGITS and MAX_SCALE

    Non-goals:
        - Does NOT carry a currency
        - Does NOT round; display formatting belongs to the output adapter
    """

    value: Decimal

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, bool) or isinstance(value, float):
            raise InvalidAmountError(value, "float and bool are not accepted")
        if not isinstance(value, Decimal):
            try:
                value = Decimal(str(value))
            except (InvalidOperation, ValueError) as e:
                raise InvalidAmountError(self.value, "not a decimal number") from e
            object.__setattr__(self, "value", value)
        if not value.is_finite():
            raise InvalidAmountError(value, "amount must be finite")
        if value < 0:
            raise NegativeAmountError(value)
        # Normalize -0 so equal amounts print the same way
        if value.is_signed():
            object.__setattr__(self, "value", value.copy_abs())

    @classmethod
    def of(cls, value: Decimal | str | int) -> Amount:
        """
        Factory method for creating an Amount.

        Raises:
            NegativeAmountError: if value is negative.
            InvalidAmountError: if value is a float or not a finite decimal,
                or lies outside the accepted digit bounds.
        """
        amount = cls(value)
        amount._check_bounds()
        return amount

    @classmethod
    def zero(cls) -> Amount:
        """The zero amount."""
        return cls(Decimal("0"))

    def _check_bounds(self) -> None:
        if self.value.as_tuple().exponent < -MAX_SCALE:
            raise InvalidAmountError(
                self.value, f"more than {MAX_SCALE} fractional digits"
            )
        if self.value and self.value.adjusted() >= MAX_INTEGER_DIGITS:
            raise InvalidAmountError(
                self.value, f"more than {MAX_INTEGER_DIGITS} integer digits"
            )

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    def __add__(self, other: Amount) -> Amount:
        if not isinstance(other, Amount):
            return NotImplemented
        with localcontext(_AMOUNT_CONTEXT):
            return Amount(self.value + other.value)

    def __sub__(self, other: Amount) -> Amount:
        """Subtract, clipping at zero."""
        if not isinstance(other, Amount):
            return NotImplemented
        if self.value < other.value:
            return Amount.zero()
        with localcontext(_AMOUNT_CONTEXT):
            return Amount(self.value - other.value)

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Amount({str(self.value)!r})"
