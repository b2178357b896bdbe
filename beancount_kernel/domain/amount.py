"""
Amounts -- numeric values paired with a commodity.

Responsibility:
    Provides ``Amount`` (both parts known) and ``IncompleteAmount`` (either
    part may still be missing, pending booking logic outside this kernel),
    and the conversions between them.

Architecture position:
    Kernel > Domain -- pure value objects, zero I/O.

Invariants enforced:
    - Amount -> IncompleteAmount always succeeds and loses nothing.
    - IncompleteAmount -> Amount succeeds iff both parts are present.
    - Amounts of different commodities never compare numerically.

Failure modes:
    - IncompleteAmountError from ``IncompleteAmount.to_amount``.
    - CurrencyMismatchError from ordering operators across commodities.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from beancount_kernel.exceptions import CurrencyMismatchError, IncompleteAmountError

# A commodity code such as "USD" or "HOOL".
Currency = str


def _as_decimal(value: Decimal | int | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _cmp(left: Decimal | None, right: Decimal | None) -> int:
    # None sorts before any number, mirroring optional ordering.
    if left == right:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1
    return -1 if left < right else 1


@dataclass(frozen=True, slots=True)
class Amount:
    """
    A number of units of a commodity.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - Comparable only against an Amount of the same currency
    """

    num: Decimal
    currency: Currency

    @classmethod
    def of(cls, num: Decimal | int | str, currency: Currency) -> Amount:
        """
        Factory accepting Decimal, int or numeric string.

        Raises:
            decimal.InvalidOperation: If ``num`` is not numeric.
        """
        return cls(num=_as_decimal(num), currency=currency)

    def to_incomplete(self) -> IncompleteAmount:
        return IncompleteAmount(num=self.num, currency=self.currency)

    def partial_cmp(self, other: Amount) -> int | None:
        """
        Three-way comparison, or None when the currencies differ.

        Returns -1, 0 or 1 for same-currency amounts.
        """
        if self.currency != other.currency:
            return None
        return _cmp(self.num, other.num)

    def _check_currency(self, other: Amount) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def __lt__(self, other: Amount) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        self._check_currency(other)
        return self.num < other.num

    def __le__(self, other: Amount) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        self._check_currency(other)
        return self.num <= other.num

    def __gt__(self, other: Amount) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        self._check_currency(other)
        return self.num > other.num

    def __ge__(self, other: Amount) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        self._check_currency(other)
        return self.num >= other.num

    def __str__(self) -> str:
        return f"{self.num:f} {self.currency}"


@dataclass(frozen=True, slots=True)
class IncompleteAmount:
    """
    An amount whose number and/or currency may still be unknown.

    Both fields default to None, so ``IncompleteAmount()`` is the fully
    elided amount of a posting the booking step will fill in.
    """

    num: Decimal | None = None
    currency: Currency | None = None

    @classmethod
    def from_amount(cls, amount: Amount) -> IncompleteAmount:
        return amount.to_incomplete()

    @property
    def is_complete(self) -> bool:
        return self.num is not None and self.currency is not None

    def try_to_amount(self) -> Amount | None:
        """Return the completed Amount, or None when a part is missing."""
        if self.num is None or self.currency is None:
            return None
        return Amount(num=self.num, currency=self.currency)

    def to_amount(self) -> Amount:
        """
        Complete this amount.

        Raises:
            IncompleteAmountError: If the number or the currency is absent.
        """
        amount = self.try_to_amount()
        if amount is None:
            raise IncompleteAmountError(self.num, self.currency)
        return amount

    def partial_cmp(self, other: IncompleteAmount) -> int | None:
        """Compare numbers when currencies agree (including both absent)."""
        if self.currency != other.currency:
            return None
        return _cmp(self.num, other.num)
