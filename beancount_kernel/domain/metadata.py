"""
Metadata -- key/value annotations, tags and links.

Responsibility:
    Defines the closed set of metadata value variants attached to every
    directive and every posting, and the Tag/Link wrappers collected into
    sets on directives.

Architecture position:
    Kernel > Domain -- pure value objects, zero I/O.

Invariants enforced:
    - Metadata keys are unique (mapping semantics).
    - Metadata mappings are read-only once attached to an entity and are
      iterated in insertion order.
    - Metadata values holding an Account or Amount are independent values,
      never references into directive fields (all values are immutable).

Failure modes:
    - ``MetaValue.coerce`` raises InvalidMetaValueError for native values
      with no variant (floats, None, arbitrary objects).
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any

from beancount_kernel.domain.account import Account
from beancount_kernel.domain.amount import Amount, Currency
from beancount_kernel.domain.date import Date
from beancount_kernel.exceptions import InvalidMetaValueError


@dataclass(frozen=True, slots=True, order=True)
class Tag:
    """A ``#tag``. Holds the bare name; the sigil is added when rendered."""

    name: str

    def __str__(self) -> str:
        return f"#{self.name}"


@dataclass(frozen=True, slots=True, order=True)
class Link:
    """A ``^link``. Holds the bare name; the sigil is added when rendered."""

    name: str

    def __str__(self) -> str:
        return f"^{self.name}"


class MetaValueKind(str, Enum):
    """The closed set of metadata value variants."""

    ACCOUNT = "account"
    AMOUNT = "amount"
    BOOL = "bool"
    CURRENCY = "currency"
    DATE = "date"
    NUMBER = "number"
    TAG = "tag"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class MetaValue:
    """
    One metadata value, tagged with its variant.

    Build through the per-variant factories (``MetaValue.text("x")``) or
    ``MetaValue.coerce`` for plain Python values. The kind decides how the
    value renders; CURRENCY and TEXT both hold a ``str``.
    """

    kind: MetaValueKind
    value: Any

    @classmethod
    def account(cls, value: Account) -> MetaValue:
        return cls(MetaValueKind.ACCOUNT, value)

    @classmethod
    def amount(cls, value: Amount) -> MetaValue:
        return cls(MetaValueKind.AMOUNT, value)

    @classmethod
    def bool(cls, value: bool) -> MetaValue:
        return cls(MetaValueKind.BOOL, value)

    @classmethod
    def currency(cls, value: Currency) -> MetaValue:
        return cls(MetaValueKind.CURRENCY, value)

    @classmethod
    def date(cls, value: Date) -> MetaValue:
        return cls(MetaValueKind.DATE, value)

    @classmethod
    def number(cls, value: Decimal) -> MetaValue:
        return cls(MetaValueKind.NUMBER, value)

    @classmethod
    def tag(cls, value: Tag) -> MetaValue:
        return cls(MetaValueKind.TAG, value)

    @classmethod
    def text(cls, value: str) -> MetaValue:
        return cls(MetaValueKind.TEXT, value)

    @classmethod
    def coerce(cls, value: Any) -> MetaValue:
        """
        Wrap a native value in its metadata variant.

        ``str`` maps to TEXT (use ``MetaValue.currency`` for commodities),
        ``int``/``Decimal`` to NUMBER and ``datetime.date`` to DATE.

        Raises:
            InvalidMetaValueError: If no variant fits the value's type.
        """
        # bool before int: bool is an int subclass.
        if isinstance(value, MetaValue):
            return value
        if isinstance(value, bool):
            return cls.bool(value)
        if isinstance(value, Account):
            return cls.account(value)
        if isinstance(value, Amount):
            return cls.amount(value)
        if isinstance(value, Date):
            return cls.date(value)
        if isinstance(value, datetime.date):
            return cls.date(Date.from_date(value))
        if isinstance(value, Tag):
            return cls.tag(value)
        if isinstance(value, Decimal):
            return cls.number(value)
        if isinstance(value, int):
            return cls.number(Decimal(value))
        if isinstance(value, str):
            return cls.text(value)
        raise InvalidMetaValueError(type(value).__name__)


# Read-only mapping of unique keys to values, iterated in insertion order.
Meta = Mapping[str, MetaValue]

EMPTY_META: Meta = MappingProxyType({})


def freeze_meta(values: Mapping[str, MetaValue] | None) -> Meta:
    """Copy a metadata mapping into a read-only view."""
    if not values:
        return EMPTY_META
    return MappingProxyType(dict(values))


def meta(values: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Meta:
    """
    Build a read-only metadata mapping from native values.

    Example:
        meta(filename="main.bean", lineno=12, verified=True)
    """
    merged = dict(values or {})
    merged.update(kwargs)
    return MappingProxyType({key: MetaValue.coerce(v) for key, v in merged.items()})
