"""
Pure document model.

This package describes a ledger document as typed, immutable data with
NO dependencies on:
- the renderer
- configuration
- file or network I/O

Construction never fails. The only conversions that can fail are amount
completion, booking-token lookup, account-name parsing and metadata
coercion, each raising a typed ModelError.
"""

from beancount_kernel.domain.account import Account, AccountType
from beancount_kernel.domain.amount import Amount, Currency, IncompleteAmount
from beancount_kernel.domain.date import Date
from beancount_kernel.domain.directives import (
    DIRECTIVE_TYPES,
    Balance,
    Booking,
    Close,
    Commodity,
    Custom,
    Directive,
    Document,
    Event,
    Include,
    Note,
    Open,
    Option,
    Pad,
    Plugin,
    Price,
    Query,
    Transaction,
    Unsupported,
)
from beancount_kernel.domain.flags import Flag, FlagKind
from beancount_kernel.domain.ledger import Ledger
from beancount_kernel.domain.metadata import (
    Link,
    Meta,
    MetaValue,
    MetaValueKind,
    Tag,
    freeze_meta,
    meta,
)
from beancount_kernel.domain.position import Cost, CostSpec, Position
from beancount_kernel.domain.posting import Posting, PriceKind, PriceSpec

__all__ = [
    # Values
    "Account",
    "AccountType",
    "Amount",
    "Currency",
    "Date",
    "IncompleteAmount",
    "Flag",
    "FlagKind",
    # Lots and postings
    "Cost",
    "CostSpec",
    "Position",
    "Posting",
    "PriceKind",
    "PriceSpec",
    # Metadata
    "Link",
    "Meta",
    "MetaValue",
    "MetaValueKind",
    "Tag",
    "freeze_meta",
    "meta",
    # Directives
    "Balance",
    "Booking",
    "Close",
    "Commodity",
    "Custom",
    "DIRECTIVE_TYPES",
    "Directive",
    "Document",
    "Event",
    "Include",
    "Ledger",
    "Note",
    "Open",
    "Option",
    "Pad",
    "Plugin",
    "Price",
    "Query",
    "Transaction",
    "Unsupported",
]
