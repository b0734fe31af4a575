"""Tests for the Lidl receipt layout."""

from decimal import Decimal

import pytest

from data_models import DiscountRow, IgnoredRow, ItemRow, MissingDateAnchor, Unit
from parsers.lidl_parser import LidlParser

FOOTER = "PTU"


@pytest.fixture
def parser():
    return LidlParser()


class TestClassify:
    def test_item_row(self, parser):
        result = parser.classify(["Mleko", "1 x 3.99 3.99"])
        assert result == ItemRow(name="Mleko", quantity=Decimal("1"), unit=Unit.PIECE, price=Decimal("3.99"))

    def test_star_separator_and_tax_letter(self, parser):
        result = parser.classify(["Masło extra", "1 * 7.99 7.99 C"])
        assert result.price == Decimal("7.99")

    def test_weighed_quantity(self, parser):
        result = parser.classify(["Pomidory", "1,474kg x 3.99 5.88"])
        assert result.quantity == Decimal("1.474")
        assert result.unit == Unit.PIECE

    @pytest.mark.parametrize("name", ["Banany Luz", "Marchew luz"])
    def test_loose_goods_are_grams(self, parser, name):
        assert parser.classify([name, "0,652kg x 4.49 2.93"]).unit == Unit.GRAM

    @pytest.mark.parametrize("label", ["Lidl Plus rabat", "Lidl Plus voucher", "Lidl Plus kupon", "Rabat grupowy"])
    def test_discount_labels(self, parser, label):
        assert parser.classify([label, "-1,50"]) == DiscountRow(amount=Decimal("1.50"))

    def test_negative_amount_is_a_discount(self, parser):
        assert parser.classify(["Rabat", "-1.18"]) == DiscountRow(amount=Decimal("1.18"))

    def test_label_with_unreadable_amount_is_ignored(self, parser):
        assert isinstance(parser.classify(["Lidl Plus rabat", "???"]), IgnoredRow)

    def test_unparseable_item_is_ignored(self, parser):
        assert isinstance(parser.classify(["Jogurt 5B", "garbled text"]), IgnoredRow)

    def test_name_is_kept_verbatim(self, parser):
        assert parser.classify(["Jogurt 5B", "1 x 2.49 2.49"]).name == "Jogurt 5B"

    def test_rows_without_two_columns_are_ignored(self, parser):
        assert isinstance(parser.classify(["Mleko", "1 x 3.99 3.99", "A"]), IgnoredRow)


class TestParse:
    def test_full_receipt(self, parser, lidl_text):
        mleko, banany = parser.parse(lidl_text)

        assert mleko.name == "Mleko"
        assert (mleko.price, mleko.discount) == (Decimal("2.99"), 25)

        assert banany.name == "Banany Luz"
        assert (banany.quantity, banany.unit) == (Decimal("1.474"), Unit.GRAM)
        assert (banany.price, banany.discount) == (Decimal("4.70"), 20)

        assert mleko.date == banany.date == "2024-05-10"
        assert mleko.note == banany.note == "Lidl"

    def test_milk_with_loyalty_discount(self, parser, build_receipt):
        text = build_receipt([["Mleko", "1 x 3.99 3.99"], ["Lidl Plus rabat", "-1.00"]], footer=FOOTER)
        assert [r.as_dict() for r in parser.parse(text)] == [{
            'name': "Mleko", 'quantity': 1, 'unit': "pcs", 'price': 2.99, 'discount': 25,
            'category': "", 'date': "2024-01-31", 'note': "Lidl",
        }]

    def test_discount_goes_to_previous_item(self, parser, build_receipt):
        text = build_receipt([
            ["Chleb", "1 x 5.88 5.88"],
            ["Ser", "1 x 5.88 5.88"],
            ["Rabat", "-1.18"],
        ], footer=FOOTER)
        chleb, ser = parser.parse(text)
        assert (chleb.price, chleb.discount) == (Decimal("5.88"), 0)
        assert (ser.price, ser.discount) == (Decimal("4.70"), 20)

    def test_discounts_accumulate(self, parser, build_receipt):
        text = build_receipt([
            ["Kawa", "1 x 20.00 20.00"],
            ["Lidl Plus rabat", "-2.00"],
            ["Lidl Plus kupon", "-3.60"],
        ], footer=FOOTER)
        [kawa] = parser.parse(text)
        assert kawa.price == Decimal("14.40")
        assert kawa.discount == 30

    def test_same_names_are_not_merged(self, parser, build_receipt):
        text = build_receipt([["Mleko", "1 x 3.99 3.99"], ["Mleko", "1 x 3.99 3.99"]], footer=FOOTER)
        assert len(parser.parse(text)) == 2

    def test_leading_discount_is_dropped(self, parser, build_receipt):
        text = build_receipt([["Lidl Plus rabat", "-1.00"], ["Mleko", "1 x 3.99 3.99"]], footer=FOOTER)
        [mleko] = parser.parse(text)
        assert mleko.discount == 0

    def test_unparseable_row_produces_no_record(self, parser, build_receipt):
        assert parser.parse(build_receipt([["Jogurt 5B", "garbled text"]], footer=FOOTER)) == []

    def test_missing_date_raises(self, parser):
        with pytest.raises(MissingDateAnchor):
            parser.parse("Mleko  1 x 3.99 3.99\nPTU")

    def test_parsing_is_repeatable(self, parser, lidl_text):
        assert parser.parse(lidl_text) == parser.parse(lidl_text)


def test_dropped_item_row_is_reported(parser, capsys):
    parser.classify(["Jogurt 5B", "garbled text"])
    assert "Warning: Could not read amounts 'garbled text'" in capsys.readouterr().out


def test_empty_amount_column_is_dropped_quietly(parser, capsys):
    assert isinstance(parser.classify(["Jogurt 5B", ""]), IgnoredRow)
    assert capsys.readouterr().out == ""
