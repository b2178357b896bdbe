"""Rendering of values nested inside directives: amounts, lots, prices, postings, metadata."""

import datetime
from decimal import Decimal

import pytest

from beancount_kernel.domain import (
    Account,
    AccountType,
    Booking,
    Cost,
    CostSpec,
    Flag,
    IncompleteAmount,
    Link,
    MetaValue,
    Position,
    Posting,
    PriceSpec,
    Tag,
    meta,
)
from beancount_kernel.render import BasicRenderer, render_to_string
from beancount_kernel.render.formatting import format_number
from tests.builders import account, amount, day, units


@pytest.fixture
def renderer() -> BasicRenderer:
    return BasicRenderer()


class TestScalars:

    def test_account(self, renderer):
        assert renderer.format(Account.of(AccountType.ASSETS, "US", "BofA")) == "Assets:US:BofA"

    def test_amount(self, renderer, usd_100):
        assert renderer.format(usd_100) == "100.00 USD"

    @pytest.mark.parametrize(
        "num,currency,expected",
        [
            ("10", "EUR", "10 EUR"),
            (None, "EUR", "EUR"),
            ("10", None, "10"),
            (None, None, ""),
        ],
    )
    def test_incomplete_amount_renders_present_parts(self, renderer, num, currency, expected):
        assert renderer.format(units(num, currency)) == expected

    @pytest.mark.parametrize(
        "num,expected",
        [
            ("562.00", "562.00"),
            ("-37.45", "-37.45"),
            ("1E+3", "1000"),
            ("1E-7", "0.0000001"),
            ("0", "0"),
        ],
    )
    def test_numbers_never_use_exponents(self, num, expected):
        assert format_number(Decimal(num)) == expected

    def test_booking_is_quoted(self, renderer):
        assert renderer.format(Booking.LIFO) == '"LIFO"'

    def test_flags(self, renderer):
        assert renderer.format(Flag.OKAY) == "*"
        assert renderer.format(Flag.WARNING) == "!"
        assert renderer.format(Flag.other("#")) == "#"

    def test_tag_and_link(self, renderer):
        assert renderer.format(Tag("trip")) == "#trip"
        assert renderer.format(Link("invoice")) == "^invoice"

    def test_unknown_value_is_type_error(self, renderer):
        with pytest.raises(TypeError):
            renderer.format(42)


class TestCostSpec:

    def test_total_only(self, renderer):
        spec = CostSpec(number_total=Decimal("436.01"), currency="CAD")
        assert renderer.format(spec) == "{{436.01 CAD}}"

    def test_total_governs_over_per_unit(self, renderer):
        spec = CostSpec(number_per=Decimal("1.09"), number_total=Decimal("436.01"), currency="CAD")
        assert renderer.format(spec) == "{{436.01 CAD}}"

    def test_per_unit(self, renderer):
        spec = CostSpec(number_per=Decimal("502.12"), currency="USD")
        assert renderer.format(spec) == "{502.12 USD}"

    def test_all_fields(self, renderer):
        spec = CostSpec(
            number_per=Decimal("502.12"),
            currency="USD",
            date=day("2014-05-05"),
            label="lot-1",
        )
        assert renderer.format(spec) == '{502.12 USD, 2014-05-05, "lot-1"}'

    def test_no_leading_comma(self, renderer):
        assert renderer.format(CostSpec(date=day("2014-05-05"))) == "{2014-05-05}"
        assert renderer.format(CostSpec(label="lot-1")) == '{"lot-1"}'

    def test_currency_only(self, renderer):
        assert renderer.format(CostSpec(currency="USD")) == "{USD}"

    def test_empty(self, renderer):
        assert renderer.format(CostSpec()) == "{}"

    def test_merge_cost_does_not_change_output(self, renderer):
        spec = CostSpec(number_per=Decimal("502.12"), currency="USD", merge_cost=True)
        assert renderer.format(spec) == "{502.12 USD}"


class TestLots:

    def test_cost(self, renderer):
        cost = Cost(Decimal("510.00"), "USD", day("2014-01-01"), "lot-1")
        assert renderer.format(cost) == '{510.00 USD, 2014-01-01, "lot-1"}'

    def test_position(self, renderer):
        position = Position(
            units=amount("10", "HOOL"),
            cost=Cost(Decimal("510.00"), "USD", day("2014-01-01")),
        )
        assert renderer.format(position) == "10 HOOL {510.00 USD, 2014-01-01}"

    def test_position_without_cost(self, renderer):
        assert renderer.format(Position(units=amount("10", "HOOL"))) == "10 HOOL"


class TestPriceSpec:

    def test_per_unit(self, renderer):
        assert renderer.format(PriceSpec.per_unit(units("1.09", "CAD"))) == "@ 1.09 CAD"

    def test_total(self, renderer):
        assert renderer.format(PriceSpec.total(units("436.01", "CAD"))) == "@@ 436.01 CAD"

    def test_elided_number(self, renderer):
        assert renderer.format(PriceSpec.per_unit(units(None, "CAD"))) == "@ CAD"


class TestPosting:

    def test_plain(self, renderer):
        posting = Posting(account("Assets:MyBank:Checking"), units("-400.00", "USD"))
        assert renderer.format(posting) == "\tAssets:MyBank:Checking\t-400.00 USD\n"

    def test_fully_elided_units(self, renderer):
        assert renderer.format(Posting(account("Expenses:Restaurant"))) == (
            "\tExpenses:Restaurant\t\n"
        )

    def test_flag_cost_and_price(self, renderer):
        posting = Posting(
            account("Assets:Broker"),
            units("10", "HOOL"),
            cost=CostSpec(number_per=Decimal("502.12"), currency="USD"),
            price=PriceSpec.per_unit(units("510.00", "USD")),
            flag=Flag.WARNING,
        )
        assert renderer.format(posting) == (
            "\t! Assets:Broker\t10 HOOL {502.12 USD} @ 510.00 USD\n"
        )

    def test_price_without_cost(self, renderer):
        posting = Posting(
            account("Assets:MyBank:Checking"),
            units("-400.00", "USD"),
            price=PriceSpec.per_unit(units("1.09", "CAD")),
        )
        assert renderer.format(posting) == "\tAssets:MyBank:Checking\t-400.00 USD @ 1.09 CAD\n"

    def test_metadata_lines_follow(self, renderer):
        posting = Posting(account("Assets:Cash"), units("1", "USD"), meta=meta(note="hello"))
        assert renderer.format(posting) == "\tAssets:Cash\t1 USD\n\tnote: \"hello\"\n"


class TestMetaValues:

    @pytest.mark.parametrize(
        "value,expected",
        [
            (MetaValue.bool(True), "true"),
            (MetaValue.bool(False), "false"),
            (MetaValue.account(Account.of(AccountType.INCOME, "Salary")), "Income:Salary"),
            (MetaValue.amount(amount("500.00", "USD")), "500.00 USD"),
            (MetaValue.currency("USD"), "USD"),
            (MetaValue.date(day("2014-01-01")), "2014-01-01"),
            (MetaValue.number(Decimal("0.05")), "0.05"),
            (MetaValue.tag(Tag("berlin")), "#berlin"),
            (MetaValue.text("free text"), '"free text"'),
        ],
    )
    def test_value_rules(self, renderer, value, expected):
        assert renderer.format(value) == expected

    def test_mapping_renders_as_lines(self, renderer):
        values = meta(opened=datetime.date(2014, 1, 1), count=3)
        assert renderer.format(values) == "\topened: 2014-01-01\n\tcount: 3\n"

    def test_render_to_string_accepts_nested_values(self):
        assert render_to_string(IncompleteAmount(Decimal("5"), "HOOL")) == "5 HOOL"
