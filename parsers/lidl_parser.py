# parsers/lidl_parser.py

import re
from typing import List

from data_models import DiscountRow, IgnoredRow, ItemRow, RowClassification, Unit
from .base_parser import BaseParser
from .number_format import leading_number, to_decimal


class LidlParser(BaseParser):
    """
    Parses Lidl receipts.

    Item rows look like 'Mleko' / '1 * 7.99 7.99 C' or '1,474kg x 3.99 5.88 C'.
    Loyalty discounts, vouchers and any negative amount reduce the item printed
    right above them. Every item row is its own record.
    """

    store_name = "Lidl"
    footer = "PTU"
    require_date = True

    DISCOUNT_LABELS = ('Lidl Plus rabat', 'Lidl Plus voucher', 'Lidl Plus kupon', 'Rabat grupowy')
    AMOUNT_PATTERN = re.compile(
        r'([0-9]{1,2}(?:[,.][0-9]{1,3})?k?g?)\s*[x*]\s*([0-9]{1,3}[,.][0-9]{1,2})\s+([0-9]{1,3}[,.][0-9]{1,2})'
    )
    LOOSE_GOODS_MARKERS = ('Luz', 'luz')

    def classify(self, row: List[str]) -> RowClassification:
        if len(row) != 2:
            return IgnoredRow(row)
        name, amount_column = row

        amount = leading_number(amount_column)
        if name in self.DISCOUNT_LABELS or (amount is not None and amount < 0):
            if amount is None:
                print(f"   -> Warning: Could not read discount amount '{amount_column}' for '{name}'. Skipping.")
                return IgnoredRow(row)
            return DiscountRow(amount=abs(amount))

        match = self.AMOUNT_PATTERN.search(amount_column)
        if not match:
            if amount_column.strip():
                print(f"   -> Warning: Could not read amounts '{amount_column}' for '{name}'. Skipping.")
            return IgnoredRow(row)
        quantity_str, _, price_str = match.groups()

        unit = Unit.PIECE
        if any(marker in name for marker in self.LOOSE_GOODS_MARKERS):
            unit = Unit.GRAM

        return ItemRow(name=name, quantity=to_decimal(quantity_str), unit=unit, price=to_decimal(price_str))
