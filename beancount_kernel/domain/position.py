"""
Lots and positions.

``Cost`` is a resolved lot identity; ``CostSpec`` is the unresolved
``{...}`` / ``{{...}}`` specification written on a posting before lot
matching. Per-unit and total costs are always unsigned in the ledger
syntax; that is not checked here.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from beancount_kernel.domain.amount import Amount, Currency
from beancount_kernel.domain.date import Date


@dataclass(frozen=True, slots=True)
class Cost:
    """A resolved lot: per-unit number, currency, acquisition date, label."""

    number: Decimal
    currency: Currency
    date: Date
    label: str | None = None


@dataclass(frozen=True, slots=True)
class CostSpec:
    """
    An unresolved cost specification.

    Every field is optional. When ``number_total`` is present it governs
    display (double braces) over ``number_per``. ``merge_cost`` requests
    that matching lots be merged at their average cost.
    """

    number_per: Decimal | None = None
    number_total: Decimal | None = None
    currency: Currency | None = None
    date: Date | None = None
    label: str | None = None
    merge_cost: bool = False

    @property
    def is_total(self) -> bool:
        return self.number_total is not None

    @property
    def display_number(self) -> Decimal | None:
        """The number shown inside the braces."""
        if self.number_total is not None:
            return self.number_total
        return self.number_per


@dataclass(frozen=True, slots=True)
class Position:
    """Resolved units with an optional lot."""

    units: Amount
    cost: Cost | None = None
