"""
Directives -- the closed set of top-level ledger statements.

Responsibility:
    Defines one immutable value type per directive kind, the ``Booking``
    method enumeration used by ``open``, and the ``Directive`` union that
    every consumer must match exhaustively.

Architecture position:
    Kernel > Domain -- pure value objects, zero I/O.

Construction contract:
    Required fields are positional; every optional field has a documented
    default (empty collection, None, ``Flag.OKAY``). Construction never
    validates content: a transaction with an empty narration or an open
    with no currencies is representable. ``__post_init__`` only converts
    containers to their immutable forms (tuples, frozensets, read-only
    metadata views).

    Every directive except ``Unsupported`` carries ``source``, the original
    text fragment when the producer kept it.

Failure modes:
    - UnknownBookingMethodError from ``Booking.from_token``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TypeAlias

from beancount_kernel.domain.account import Account, AccountType
from beancount_kernel.domain.amount import Amount, Currency
from beancount_kernel.domain.date import Date
from beancount_kernel.domain.flags import Flag
from beancount_kernel.domain.metadata import Link, Meta, Tag, freeze_meta
from beancount_kernel.domain.posting import Posting
from beancount_kernel.exceptions import UnknownBookingMethodError


class Booking(str, Enum):
    """
    Lot-disambiguation policy of an account.

    The value is the upper-case token written in ``open`` directives.
    """

    # Reject ambiguous matches with an error.
    STRICT = "STRICT"
    # Strict, but an exact size match picks the oldest matching lot.
    STRICT_WITH_SIZE = "STRICT_WITH_SIZE"
    # No matching; mixed inventories are accepted.
    NONE = "NONE"
    # Merge all matching lots before and after.
    AVERAGE = "AVERAGE"
    # First-in first-out on ambiguity.
    FIFO = "FIFO"
    # Last-in first-out on ambiguity.
    LIFO = "LIFO"

    @classmethod
    def from_token(cls, token: str) -> Booking:
        """
        Map an upper-case token to its booking method.

        Raises:
            UnknownBookingMethodError: For any token outside the six known.
        """
        try:
            return cls(token)
        except ValueError:
            raise UnknownBookingMethodError(token) from None

    @property
    def token(self) -> str:
        return self.value


_ROOT_NAME_OPTIONS: dict[str, AccountType] = {
    "name_assets": AccountType.ASSETS,
    "name_liabilities": AccountType.LIABILITIES,
    "name_equity": AccountType.EQUITY,
    "name_income": AccountType.INCOME,
    "name_expenses": AccountType.EXPENSES,
}


def _tuple(values: Iterable) -> tuple:
    return values if isinstance(values, tuple) else tuple(values)


def _frozenset(values: Iterable) -> frozenset:
    return values if isinstance(values, frozenset) else frozenset(values)


@dataclass(frozen=True, slots=True)
class Open:
    """Opens an account, optionally constraining currencies and booking."""

    date: Date
    account: Account
    currencies: tuple[Currency, ...] = ()
    booking: Booking | None = None
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "currencies", _tuple(self.currencies))
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Close:
    date: Date
    account: Account
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Balance:
    """
    Asserts an account's balance at the start of ``date``.

    ``tolerance`` widens the check to ``amount ± tolerance``.
    """

    date: Date
    account: Account
    amount: Amount
    tolerance: Decimal | None = None
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Option:
    """An undated ``option "name" "value"`` statement."""

    name: str
    val: str
    source: str | None = None

    def root_name_change(self) -> tuple[AccountType, str] | None:
        """
        Decode a root-account rename option.

        Returns:
            ``(account type, new root name)`` for the five ``name_*``
            options, None for any other option.
        """
        ty = _ROOT_NAME_OPTIONS.get(self.name)
        if ty is None:
            return None
        return ty, self.val


@dataclass(frozen=True, slots=True)
class Commodity:
    date: Date
    name: Currency
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Custom:
    """A plugin-defined directive; ``args`` are pre-rendered tokens."""

    date: Date
    name: str
    args: tuple[str, ...] = ()
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", _tuple(self.args))
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Document:
    """Associates an external file with an account."""

    date: Date
    account: Account
    path: str
    tags: frozenset[Tag] = frozenset()
    links: frozenset[Link] = frozenset()
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", _frozenset(self.tags))
        object.__setattr__(self, "links", _frozenset(self.links))
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Event:
    """Records the value of a named variable (location, employer...) from a date."""

    date: Date
    name: str
    description: str
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Include:
    filename: str
    source: str | None = None


@dataclass(frozen=True, slots=True)
class Note:
    date: Date
    account: Account
    comment: str
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Pad:
    """Inserts a balancing transaction from ``pad_from_account``."""

    date: Date
    pad_to_account: Account
    pad_from_account: Account
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Plugin:
    module: str
    config: str | None = None
    source: str | None = None


@dataclass(frozen=True, slots=True)
class Price:
    """Observed price of one unit of ``currency`` on ``date``."""

    date: Date
    currency: Currency
    amount: Amount
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Query:
    date: Date
    name: str
    query_string: str
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Transaction:
    """
    A dated, flagged movement between accounts.

    Contract:
        ``postings`` keep their input order; it is the rendered order.
        ``tags`` and ``links`` are sets: uniqueness holds, order does not.
    """

    date: Date
    narration: str
    flag: Flag = Flag.OKAY
    payee: str | None = None
    tags: frozenset[Tag] = frozenset()
    links: frozenset[Link] = frozenset()
    postings: tuple[Posting, ...] = ()
    meta: Meta = field(default_factory=dict)
    source: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", _frozenset(self.tags))
        object.__setattr__(self, "links", _frozenset(self.links))
        object.__setattr__(self, "postings", _tuple(self.postings))
        object.__setattr__(self, "meta", freeze_meta(self.meta))


@dataclass(frozen=True, slots=True)
class Unsupported:
    """A directive the upstream parser could not classify. Never renderable."""


Directive: TypeAlias = (
    Open
    | Close
    | Balance
    | Option
    | Commodity
    | Custom
    | Document
    | Event
    | Include
    | Note
    | Pad
    | Plugin
    | Price
    | Query
    | Transaction
    | Unsupported
)

DIRECTIVE_TYPES: tuple[type, ...] = (
    Open,
    Close,
    Balance,
    Option,
    Commodity,
    Custom,
    Document,
    Event,
    Include,
    Note,
    Pad,
    Plugin,
    Price,
    Query,
    Transaction,
    Unsupported,
)
