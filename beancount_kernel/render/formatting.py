"""
Formatting -- one canonical text rule per document-model entity.

Responsibility:
    Turns any document-model value into the ledger source text that
    represents it. Every function here is pure: it returns a ``str`` and
    never touches an output sink. Writing bytes is the renderer's job.

Architecture position:
    Kernel > Render -- pure functional core beneath ``renderer``.

Line shapes (each directive line ends with a newline, then metadata):
    DATE open ACCOUNT [CURRENCY...] ["BOOKING"]
    DATE close ACCOUNT
    DATE balance ACCOUNT<TAB>NUM [~ TOLERANCE]CURRENCY
    option "NAME" "VAL"
    DATE commodity NAME
    DATE custom "NAME" ARG ARG ...
    DATE document ACCOUNT "PATH"
    DATE event "NAME" "DESCRIPTION"
    include "FILENAME"
    DATE note ACCOUNT COMMENT
    DATE pad TO_ACCOUNT FROM_ACCOUNT
    plugin "MODULE" ["CONFIG"]
    DATE price CURRENCY AMOUNT
    DATE query "NAME" "SQL"
    DATE FLAG ["PAYEE"] "NARRATION" [TAG...] [LINK...]
        <TAB>[FLAG ]ACCOUNT<TAB>UNITS[ COST][ PRICE]   (one per posting)
    <TAB>KEY: VALUE                                   (one per metadata entry)

Quoting:
    Free text that the ledger grammar reads as a string is double-quoted:
    payees, narrations, cost labels, paths, option values and TEXT
    metadata. Note comments and Custom arguments are written verbatim.

Failure modes:
    - UnsupportedDirectiveError from ``format_directive`` for the
      ``Unsupported`` sentinel, raised before any text is produced.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import assert_never

from beancount_kernel.domain.account import Account
from beancount_kernel.domain.amount import Amount, IncompleteAmount
from beancount_kernel.domain.directives import (
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
from beancount_kernel.domain.flags import Flag
from beancount_kernel.domain.metadata import Link, Meta, MetaValue, MetaValueKind, Tag
from beancount_kernel.domain.position import Cost, CostSpec, Position
from beancount_kernel.domain.posting import Posting, PriceSpec
from beancount_kernel.exceptions import UnsupportedDirectiveError
from beancount_kernel.render.settings import DEFAULT_SETTINGS, MetaOrder, RenderSettings

INDENT = "\t"


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def format_number(num: Decimal) -> str:
    """Positional notation, keeping the Decimal's scale (``562.00``)."""
    return f"{num:f}"


def quote(text: str) -> str:
    return f'"{text}"'


def format_account(account: Account) -> str:
    return str(account)


def format_flag(flag: Flag) -> str:
    return flag.token


def format_booking(booking: Booking) -> str:
    return quote(booking.token)


def format_amount(amount: Amount) -> str:
    return f"{format_number(amount.num)} {amount.currency}"


def format_incomplete_amount(amount: IncompleteAmount) -> str:
    """Render only the parts that are present; nothing at all if neither."""
    parts = []
    if amount.num is not None:
        parts.append(format_number(amount.num))
    if amount.currency is not None:
        parts.append(amount.currency)
    return " ".join(parts)


def _tags_and_links(tags: Iterable[Tag], links: Iterable[Link]) -> str:
    # Sets have no order; sort so output is reproducible.
    tokens = [str(tag) for tag in sorted(tags)]
    tokens.extend(str(link) for link in sorted(links))
    return "".join(f" {token}" for token in tokens)


# ---------------------------------------------------------------------------
# Lots, prices, postings
# ---------------------------------------------------------------------------


def format_cost_spec(cost: CostSpec) -> str:
    """
    ``{...}`` normally, ``{{...}}`` when a total number is present.

    Interior fields in fixed order -- number/currency, date, label -- each
    only when present, joined by ``", "``.
    """
    fields = []
    number_currency = format_incomplete_amount(
        IncompleteAmount(num=cost.display_number, currency=cost.currency)
    )
    if number_currency:
        fields.append(number_currency)
    if cost.date is not None:
        fields.append(str(cost.date))
    if cost.label is not None:
        fields.append(quote(cost.label))
    body = ", ".join(fields)
    if cost.is_total:
        return f"{{{{{body}}}}}"
    return f"{{{body}}}"


def format_cost(cost: Cost) -> str:
    return format_cost_spec(
        CostSpec(
            number_per=cost.number,
            currency=cost.currency,
            date=cost.date,
            label=cost.label,
        )
    )


def format_position(position: Position) -> str:
    text = format_amount(position.units)
    if position.cost is not None:
        text += " " + format_cost(position.cost)
    return text


def format_price_spec(price: PriceSpec) -> str:
    return f"{price.kind.value} {format_incomplete_amount(price.amount)}"


def format_posting(posting: Posting, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = INDENT
    if posting.flag is not None:
        line += f"{format_flag(posting.flag)} "
    line += f"{format_account(posting.account)}{INDENT}"
    line += format_incomplete_amount(posting.units)
    if posting.cost is not None:
        line += " " + format_cost_spec(posting.cost)
    if posting.price is not None:
        line += " " + format_price_spec(posting.price)
    return line + "\n" + format_meta(posting.meta, settings)


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def format_meta_value(value: MetaValue) -> str:
    match value.kind:
        case MetaValueKind.ACCOUNT:
            return format_account(value.value)
        case MetaValueKind.AMOUNT:
            return format_amount(value.value)
        case MetaValueKind.BOOL:
            return "true" if value.value else "false"
        case MetaValueKind.NUMBER:
            return format_number(value.value)
        case MetaValueKind.TEXT:
            return quote(value.value)
        case MetaValueKind.CURRENCY | MetaValueKind.DATE | MetaValueKind.TAG:
            return str(value.value)
        case _:
            assert_never(value.kind)


def format_meta(meta: Meta, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    """One ``<TAB>KEY: VALUE`` line per entry."""
    keys: Iterable[str] = meta
    if settings.metadata_order is MetaOrder.SORTED:
        keys = sorted(meta)
    return "".join(
        f"{INDENT}{key}: {format_meta_value(meta[key])}\n" for key in keys
    )


# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------


def format_open(open_: Open, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = f"{open_.date} open {format_account(open_.account)}"
    line += "".join(f" {currency}" for currency in open_.currencies)
    if open_.booking is not None:
        line += " " + format_booking(open_.booking)
    return line + "\n" + format_meta(open_.meta, settings)


def format_close(close: Close, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = f"{close.date} close {format_account(close.account)}\n"
    return line + format_meta(close.meta, settings)


def format_balance(balance: Balance, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    # The currency follows the number (or tolerance) with no separator.
    line = f"{balance.date} balance {format_account(balance.account)}{INDENT}"
    line += format_number(balance.amount.num)
    if balance.tolerance is not None:
        line += f" ~ {format_number(balance.tolerance)}"
    line += f"{balance.amount.currency}\n"
    return line + format_meta(balance.meta, settings)


def format_option(option: Option) -> str:
    return f"option {quote(option.name)} {quote(option.val)}\n"


def format_commodity(commodity: Commodity, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = f"{commodity.date} commodity {commodity.name}\n"
    return line + format_meta(commodity.meta, settings)


def format_custom(custom: Custom, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = f"{custom.date} custom {quote(custom.name)}"
    if custom.args:
        line += " " + " ".join(custom.args)
    return line + "\n" + format_meta(custom.meta, settings)


def format_document(document: Document, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = (
        f"{document.date} document {format_account(document.account)}"
        f" {quote(document.path)}\n"
    )
    return line + format_meta(document.meta, settings)


def format_event(event: Event, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = f"{event.date} event {quote(event.name)} {quote(event.description)}\n"
    return line + format_meta(event.meta, settings)


def format_include(include: Include) -> str:
    return f"include {quote(include.filename)}\n"


def format_note(note: Note, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = f"{note.date} note {format_account(note.account)} {note.comment}\n"
    return line + format_meta(note.meta, settings)


def format_pad(pad: Pad, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = (
        f"{pad.date} pad {format_account(pad.pad_to_account)}"
        f" {format_account(pad.pad_from_account)}\n"
    )
    return line + format_meta(pad.meta, settings)


def format_plugin(plugin: Plugin) -> str:
    line = f"plugin {quote(plugin.module)}"
    if plugin.config is not None:
        line += f" {quote(plugin.config)}"
    return line + "\n"


def format_price(price: Price, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = f"{price.date} price {price.currency} {format_amount(price.amount)}\n"
    return line + format_meta(price.meta, settings)


def format_query(query: Query, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = f"{query.date} query {quote(query.name)} {quote(query.query_string)}\n"
    return line + format_meta(query.meta, settings)


def format_transaction(txn: Transaction, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    line = f"{txn.date} {format_flag(txn.flag)}"
    if txn.payee is not None:
        line += f" {quote(txn.payee)}"
    line += f" {quote(txn.narration)}"
    line += _tags_and_links(txn.tags, txn.links)
    postings = "".join(format_posting(posting, settings) for posting in txn.postings)
    return line + "\n" + postings + format_meta(txn.meta, settings)


def format_directive(directive: Directive, settings: RenderSettings = DEFAULT_SETTINGS) -> str:
    """
    Dispatch to the rule for the directive's kind.

    Raises:
        UnsupportedDirectiveError: For the ``Unsupported`` sentinel.
    """
    match directive:
        case Open():
            return format_open(directive, settings)
        case Close():
            return format_close(directive, settings)
        case Balance():
            return format_balance(directive, settings)
        case Option():
            return format_option(directive)
        case Commodity():
            return format_commodity(directive, settings)
        case Custom():
            return format_custom(directive, settings)
        case Document():
            return format_document(directive, settings)
        case Event():
            return format_event(directive, settings)
        case Include():
            return format_include(directive)
        case Note():
            return format_note(directive, settings)
        case Pad():
            return format_pad(directive, settings)
        case Plugin():
            return format_plugin(directive)
        case Price():
            return format_price(directive, settings)
        case Query():
            return format_query(directive, settings)
        case Transaction():
            return format_transaction(directive, settings)
        case Unsupported():
            raise UnsupportedDirectiveError()
        case _:
            assert_never(directive)
