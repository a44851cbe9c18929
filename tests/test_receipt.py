import csv
import io

import pytest

from billing import compute, make_catalog, make_discounts
from receipt import CURRENCIES, discount_text, format_price, receipt_csv, receipt_rows


class TestFormatPrice:
    @pytest.mark.parametrize("pence, expected", [
        (194, "£1.94"),
        (300, "£3.00"),
        (250, "£2.50"),
        (5, "£0.05"),
        (0, "£0.00"),
        (123456, "£1234.56"),
    ])
    def test_two_decimal_places(self, pence, expected):
        assert format_price(pence) == expected

    @pytest.mark.parametrize("currency, expected", [
        ("GBP", "£27.80"),
        ("EUR", "€27.80"),
        ("USD", "$27.80"),
    ])
    def test_currency_symbol(self, currency, expected):
        assert format_price(2780, currency) == expected

    def test_negative_amounts(self):
        assert format_price(-150) == "-£1.50"

    def test_unknown_currency(self):
        with pytest.raises(KeyError):
            format_price(100, "JPY")

    def test_all_currencies_have_symbols(self):
        assert set(CURRENCIES) == {"GBP", "EUR", "USD"}


class TestDiscountText:
    def test_positive_discount(self):
        assert discount_text(250, 3) == " (£2.50 off for buying 3)"

    def test_no_discount(self):
        assert discount_text(0, 3) == ""

    def test_currency_passed_through(self):
        assert discount_text(50, 3, "EUR") == " (€0.50 off for buying 3)"


@pytest.fixture
def result():
    catalog = make_catalog([(670, "Apples", 194), (1234, "Dry Sherry, 1lt", 1010)])
    discounts = make_discounts([(1234, 2, 250)])
    return compute([670, 1234, 1234, 1234, 670], catalog, discounts)


class TestReceiptRows:
    def test_rows_follow_bill_order(self, result):
        assert receipt_rows(result) == [
            {"Qty": 2, "Item": "Apples", "Line": "£3.88"},
            {"Qty": 3, "Item": "Dry Sherry, 1lt (£2.50 off for buying 3)", "Line": "£27.80"},
        ]

    def test_empty_bill(self):
        assert receipt_rows({"item_lines": [], "grand_total": 0}) == []

    def test_csv_has_header_and_rows(self, result):
        text = receipt_csv(receipt_rows(result, "USD"))
        parsed = list(csv.DictReader(io.StringIO(text)))
        assert text.splitlines()[0] == "Qty,Item,Line"
        assert parsed[1] == {"Qty": "3", "Item": "Dry Sherry, 1lt ($2.50 off for buying 3)", "Line": "$27.80"}

    def test_csv_of_no_rows_is_header_only(self):
        assert receipt_csv([]).splitlines() == ["Qty,Item,Line"]
