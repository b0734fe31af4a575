# parsers/auchan_parser.py

import re
from decimal import Decimal, InvalidOperation
from typing import List

from data_models import DiscountRow, IgnoredRow, ItemRow, RowClassification, Unit
from .base_parser import BaseParser
from .number_format import leading_number, to_decimal


class AuchanParser(BaseParser):
    """
    Parses Auchan receipts.

    Item rows look like 'Chleb 10A' / '1 x3,50 3,50A': the name carries a
    product code and the amount column ends with the tax category letter.
    Discounts come as 'Rabat <item name>' rows and are matched by name, so
    repeated purchases of one product are merged into a single record.
    """

    store_name = "Auchan"
    footer = "SPRZEDAŻ OPODATK"
    merge_by_name = True

    DISCOUNT_PREFIX = "Rabat "
    AMOUNT_PATTERN = re.compile(r'^([0-9,]+) x([0-9,]+) ([0-9,]+)[ABC]$')
    NAME_PATTERN = re.compile(r'^(.+?)\s+([0-9]+[A-C]?)$')

    def classify(self, row: List[str]) -> RowClassification:
        if len(row) != 2:
            return IgnoredRow(row)
        name, amount_column = row

        if name.startswith(self.DISCOUNT_PREFIX):
            # First and last characters are the sign and the currency marker
            amount = leading_number(amount_column[1:-1])
            if amount is None:
                print(f"   -> Warning: Could not read discount amount '{amount_column}' for '{name}'. Skipping.")
                return IgnoredRow(row)
            return DiscountRow(amount=abs(amount), target_name=name[len(self.DISCOUNT_PREFIX):])

        match = self.AMOUNT_PATTERN.match(amount_column)
        if match:
            quantity_str, _, price_str = match.groups()
            try:
                quantity, price = to_decimal(quantity_str), to_decimal(price_str)
            except InvalidOperation:
                match = None
        if not match:
            print(f"   -> Warning: Could not read amounts '{amount_column}' for '{name}'. Recording it with zero values.")
            quantity_str, quantity, price = "0", Decimal(0), Decimal(0)

        return ItemRow(
            name=self._strip_product_code(name),
            quantity=quantity,
            unit=Unit.KILOGRAM if ',' in quantity_str else Unit.PIECE,
            price=price,
        )

    def _strip_product_code(self, name: str) -> str:
        match = self.NAME_PATTERN.match(name)
        return match.group(1) if match else name.strip()
