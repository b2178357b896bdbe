"""
Postings -- single account legs of a transaction.

A posting moves an amount into or out of one account, optionally at a
cost and/or a price:

    2012-11-03 * "Transfer to account in Canada"
        Assets:MyBank:Checking            -400.00 USD @ 1.09 CAD
        Assets:FR:SocGen:Checking          436.01 CAD

``@`` gives a per-unit price, ``@@`` a total price for the whole leg.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from beancount_kernel.domain.account import Account
from beancount_kernel.domain.amount import IncompleteAmount
from beancount_kernel.domain.flags import Flag
from beancount_kernel.domain.metadata import Meta, freeze_meta
from beancount_kernel.domain.position import CostSpec


class PriceKind(str, Enum):
    """The two price syntaxes."""

    PER_UNIT = "@"
    TOTAL = "@@"


@dataclass(frozen=True, slots=True)
class PriceSpec:
    """A ``@ price`` (per unit) or ``@@ price`` (total)."""

    kind: PriceKind
    amount: IncompleteAmount

    @classmethod
    def per_unit(cls, amount: IncompleteAmount) -> PriceSpec:
        return cls(kind=PriceKind.PER_UNIT, amount=amount)

    @classmethod
    def total(cls, amount: IncompleteAmount) -> PriceSpec:
        return cls(kind=PriceKind.TOTAL, amount=amount)


@dataclass(frozen=True, slots=True)
class Posting:
    """
    One leg of a transaction.

    Contract:
        ``units`` may be partially or fully elided; completing it is the
        job of booking logic outside this kernel. ``flag`` overrides the
        transaction flag for this leg only when set.
    """

    account: Account
    units: IncompleteAmount = field(default_factory=IncompleteAmount)
    cost: CostSpec | None = None
    price: PriceSpec | None = None
    flag: Flag | None = None
    meta: Meta = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))
