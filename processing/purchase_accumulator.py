# processing/purchase_accumulator.py

from decimal import Decimal
from typing import Dict, List, Optional

from data_models import ItemRow, PurchaseRecord
from parsers.number_format import round_percent, round_price

MAX_DISCOUNT = 100


class PurchaseAccumulator:
    """
    Collects the purchase records of a single receipt while its rows are parsed.

    With merge_by_name, repeated item names add up into one record (Auchan).
    Without it every item row appends a record and discounts go to the most
    recent one (Lidl). One instance belongs to exactly one parse call.
    """

    def __init__(self, store_name: str, date: str, merge_by_name: bool):
        self.store_name = store_name
        self.date = date
        self.merge_by_name = merge_by_name
        self._records: List[PurchaseRecord] = []
        self._by_name: Dict[str, PurchaseRecord] = {}

    def upsert_item(self, item: ItemRow) -> PurchaseRecord:
        if self.merge_by_name and item.name in self._by_name:
            record = self._by_name[item.name]
            record.quantity += item.quantity
            record.price += item.price
            return record

        record = PurchaseRecord(
            name=item.name,
            quantity=item.quantity,
            unit=item.unit,
            price=item.price,
            date=self.date,
            note=self.store_name,
        )
        self._records.append(record)
        self._by_name.setdefault(item.name, record)
        return record

    def apply_discount(self, amount: Decimal, target_name: Optional[str] = None) -> bool:
        """Folds a discount into its record. Returns False when nothing could take it."""
        if target_name is not None:
            record = self._by_name.get(target_name)
        else:
            record = self._records[-1] if self._records else None

        if record is None or not record.price:
            return False

        old_price = record.price
        percent = round_percent(amount * 100 / old_price)
        record.price = round_price(old_price - amount)
        record.discount = min(MAX_DISCOUNT, record.discount + max(percent, 0))
        return True

    def finish(self) -> List[PurchaseRecord]:
        return list(self._records)
