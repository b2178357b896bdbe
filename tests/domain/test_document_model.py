"""
Tests for the document model.

These tests verify:
- Entities are immutable
- Optional fields take documented defaults and construction never fails
- Containers are normalised to immutable forms
- Option root-name decoding
- Metadata coercion and ordering
"""

import datetime
from decimal import Decimal
from types import MappingProxyType

import pytest

from beancount_kernel.domain import (
    DIRECTIVE_TYPES,
    Account,
    AccountType,
    Balance,
    Booking,
    Close,
    Commodity,
    Cost,
    CostSpec,
    Custom,
    Date,
    Document,
    Event,
    Flag,
    IncompleteAmount,
    Include,
    Ledger,
    Link,
    MetaValue,
    MetaValueKind,
    Note,
    Open,
    Option,
    Pad,
    Plugin,
    Position,
    Posting,
    Price,
    PriceKind,
    PriceSpec,
    Query,
    Tag,
    Transaction,
    Unsupported,
    meta,
)
from beancount_kernel.exceptions import InvalidMetaValueError
from beancount_kernel.render import format_directive
from tests.builders import account, amount, day, units


class TestImmutability:
    """Document-model values are frozen."""

    def test_transaction_is_frozen(self, mogador_transaction):
        with pytest.raises(AttributeError):
            mogador_transaction.narration = "changed"

    def test_posting_is_frozen(self):
        posting = Posting(account=account("Assets:Cash"))
        with pytest.raises(AttributeError):
            posting.flag = Flag.WARNING

    def test_metadata_is_read_only(self):
        close = Close(day("2016-11-28"), account("Assets:Cash"), meta=meta(note="x"))
        with pytest.raises(TypeError):
            close.meta["note"] = MetaValue.text("y")

    def test_metadata_is_copied_from_caller(self):
        source = {"note": MetaValue.text("x")}
        close = Close(day("2016-11-28"), account("Assets:Cash"), meta=source)
        source["other"] = MetaValue.text("y")
        assert list(close.meta) == ["note"]

    def test_read_only_view_from_caller_is_copied(self):
        backing = {"note": MetaValue.text("x")}
        open_ = Open(day("2014-01-01"), account("Assets:Cash"), meta=MappingProxyType(backing))
        before = format_directive(open_)
        backing["injected"] = MetaValue.text("y")
        assert list(open_.meta) == ["note"]
        assert format_directive(open_) == before

    def test_posting_metadata_is_copied(self):
        backing = {"note": MetaValue.text("x")}
        posting = Posting(account("Assets:Cash"), meta=MappingProxyType(backing))
        backing.clear()
        assert list(posting.meta) == ["note"]

    def test_ledger_is_frozen(self):
        ledger = Ledger()
        with pytest.raises(AttributeError):
            ledger.directives = ()


class TestDefaults:
    """Unspecified optional fields default rather than error."""

    def test_open_defaults(self):
        open_ = Open(day("1990-01-01"), account("Expenses:Restaurant"))
        assert open_.currencies == ()
        assert open_.booking is None
        assert dict(open_.meta) == {}
        assert open_.source is None

    def test_transaction_defaults(self):
        txn = Transaction(day("2014-05-05"), narration="")
        assert txn.flag == Flag.OKAY
        assert txn.payee is None
        assert txn.tags == frozenset()
        assert txn.links == frozenset()
        assert txn.postings == ()
        assert dict(txn.meta) == {}

    def test_posting_defaults(self):
        posting = Posting(account=account("Assets:Cash"))
        assert posting.units == IncompleteAmount()
        assert posting.cost is None
        assert posting.price is None
        assert posting.flag is None

    def test_cost_spec_defaults(self):
        spec = CostSpec()
        assert spec.number_per is None
        assert spec.number_total is None
        assert spec.currency is None
        assert spec.date is None
        assert spec.label is None
        assert spec.merge_cost is False

    def test_ledger_defaults_to_empty(self):
        assert len(Ledger()) == 0

    def test_invalid_states_are_representable(self):
        # Construction performs no semantic validation
        Transaction(day(""), narration="", postings=[Posting(Account(AccountType.ASSETS))])
        Balance(day("2014-08-09"), account("Assets:Cash"), amount("-0", ""))
        Custom(day("2014-07-09"), "")

    def test_every_directive_except_unsupported_has_source(self):
        for directive_type in DIRECTIVE_TYPES:
            fields = directive_type.__dataclass_fields__
            if directive_type is Unsupported:
                assert "source" not in fields
            else:
                assert "source" in fields


class TestContainerNormalisation:

    def test_lists_become_tuples(self):
        open_ = Open(day("2014-01-01"), account("Assets:Cash"), currencies=["USD", "CAD"])
        assert open_.currencies == ("USD", "CAD")

        custom = Custom(day("2014-07-09"), "budget", args=["Expenses:Food", "500 USD"])
        assert custom.args == ("Expenses:Food", "500 USD")

    def test_postings_keep_input_order(self):
        postings = [
            Posting(account=account("Assets:A")),
            Posting(account=account("Assets:B")),
            Posting(account=account("Assets:C")),
        ]
        txn = Transaction(day("2014-01-01"), narration="n", postings=postings)
        assert [p.account.leaf for p in txn.postings] == ["A", "B", "C"]

    def test_tags_and_links_are_unique(self):
        txn = Transaction(
            day("2014-01-01"),
            narration="n",
            tags=[Tag("trip"), Tag("trip")],
            links={Link("invoice-1")},
        )
        assert txn.tags == frozenset({Tag("trip")})
        assert txn.links == frozenset({Link("invoice-1")})

    def test_document_carries_tags_and_links(self):
        document = Document(
            day("2014-01-01"),
            account("Assets:Cash"),
            "/statements/jan.pdf",
            tags=[Tag("scan")],
            links=[Link("stmt")],
        )
        assert Tag("scan") in document.tags
        assert Link("stmt") in document.links

    def test_ledger_preserves_order_and_duplicates(self):
        include = Include("other.bean")
        ledger = Ledger([include, Option("title", "Test"), include])
        assert ledger.directives == (include, Option("title", "Test"), include)
        assert list(ledger) == list(ledger.directives)


class TestOptionRootNameChange:

    @pytest.mark.parametrize(
        "name,ty",
        [
            ("name_assets", AccountType.ASSETS),
            ("name_liabilities", AccountType.LIABILITIES),
            ("name_equity", AccountType.EQUITY),
            ("name_income", AccountType.INCOME),
            ("name_expenses", AccountType.EXPENSES),
        ],
    )
    def test_root_name_options(self, name, ty):
        assert Option(name, "Actif").root_name_change() == (ty, "Actif")

    @pytest.mark.parametrize("name", ["title", "operating_currency", "name_Assets", ""])
    def test_other_options_not_applicable(self, name):
        assert Option(name, "x").root_name_change() is None


class TestLotsAndPrices:

    def test_cost_spec_display_number_prefers_total(self):
        spec = CostSpec(number_per=Decimal("1.09"), number_total=Decimal("436.01"))
        assert spec.is_total
        assert spec.display_number == Decimal("436.01")

    def test_cost_spec_display_number_per_unit(self):
        spec = CostSpec(number_per=Decimal("1.09"))
        assert not spec.is_total
        assert spec.display_number == Decimal("1.09")

    def test_position_with_cost(self):
        cost = Cost(Decimal("510.00"), "USD", day("2014-01-01"), "lot-1")
        position = Position(units=amount("10", "HOOL"), cost=cost)
        assert position.cost.label == "lot-1"
        assert Position(units=amount("10", "HOOL")).cost is None

    def test_price_spec_kinds(self):
        price = units("1.09", "CAD")
        assert PriceSpec.per_unit(price).kind is PriceKind.PER_UNIT
        assert PriceSpec.total(price).kind is PriceKind.TOTAL
        assert PriceSpec.per_unit(price) != PriceSpec.total(price)


class TestMetadata:

    def test_coerce_native_values(self):
        cash = account("Assets:Cash")
        values = meta(
            bank=cash,
            limit=amount("500.00", "USD"),
            verified=True,
            opened=datetime.date(2014, 1, 1),
            statement=day("2014-02-01"),
            count=3,
            rate=Decimal("0.05"),
            trip=Tag("berlin"),
            note="monthly",
        )
        kinds = {key: value.kind for key, value in values.items()}
        assert kinds == {
            "bank": MetaValueKind.ACCOUNT,
            "limit": MetaValueKind.AMOUNT,
            "verified": MetaValueKind.BOOL,
            "opened": MetaValueKind.DATE,
            "statement": MetaValueKind.DATE,
            "count": MetaValueKind.NUMBER,
            "rate": MetaValueKind.NUMBER,
            "trip": MetaValueKind.TAG,
            "note": MetaValueKind.TEXT,
        }
        assert values["opened"].value == Date("2014-01-01")
        assert values["count"].value == Decimal(3)

    def test_bool_is_not_a_number(self):
        assert MetaValue.coerce(False).kind is MetaValueKind.BOOL

    def test_currency_needs_explicit_variant(self):
        assert MetaValue.coerce("USD").kind is MetaValueKind.TEXT
        assert MetaValue.currency("USD").kind is MetaValueKind.CURRENCY

    @pytest.mark.parametrize("value", [1.5, None, object(), ["a"]])
    def test_unsupported_native_values(self, value):
        with pytest.raises(InvalidMetaValueError):
            MetaValue.coerce(value)

    def test_meta_keeps_insertion_order(self):
        values = meta({"z": 1, "a": 2}, m=3)
        assert list(values) == ["z", "a", "m"]

    def test_meta_keys_unique(self):
        values = meta({"k": 1}, k=2)
        assert values["k"] == MetaValue.number(Decimal(2))

    def test_meta_account_is_an_independent_value(self):
        cash = account("Assets:Cash")
        note = Note(day("2014-01-01"), cash, "checked", meta=meta(other=cash))
        assert note.meta["other"].value == note.account


def test_every_kind_constructs_with_required_fields_only():
    date = day("2014-07-09")
    cash = account("Assets:Cash")
    directives = [
        Open(date, cash),
        Close(date, cash),
        Balance(date, cash, amount("1", "USD")),
        Option("title", "Ledger"),
        Commodity(date, "HOOL"),
        Custom(date, "budget"),
        Document(date, cash, "a.pdf"),
        Event(date, "location", "Paris"),
        Include("a.bean"),
        Note(date, cash, "note"),
        Pad(date, cash, account("Equity:Opening-Balances")),
        Plugin("beancount.plugins.auto"),
        Price(date, "HOOL", amount("579.18", "USD")),
        Query(date, "cash", "SELECT 1"),
        Transaction(date, narration="n"),
        Unsupported(),
    ]
    assert {type(d) for d in directives} == set(DIRECTIVE_TYPES)
    assert Booking.FIFO not in [getattr(d, "booking", None) for d in directives]
