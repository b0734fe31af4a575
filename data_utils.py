# data_utils.py

import collections
from decimal import Decimal
from typing import Dict, List

from data_models import PurchaseRecord

def apply_manual_date(records: List[PurchaseRecord], date_str: str) -> None:
    for record in records:
        record.date = date_str

def apply_categories(records: List[PurchaseRecord], category_map: Dict[str, str]) -> int:
    """Fills empty categories with the category known for the exact product name."""
    filled = 0
    for record in records:
        if record.category:
            continue
        category = category_map.get(record.name)
        if category:
            record.category = category
            filled += 1
    if filled > 0:
        print(f"Assigned categories to {filled} purchases.")
    missing = len([r for r in records if not r.category])
    if missing > 0:
        print(f"   -> {missing} purchases still have no category.")
    return filled

def total_spending(records: List[PurchaseRecord]) -> Decimal:
    return sum((record.price for record in records), Decimal(0))

def spending_by_store(records: List[PurchaseRecord]) -> Dict[str, Decimal]:
    totals: Dict[str, Decimal] = collections.defaultdict(Decimal)
    for record in records:
        totals[record.note] += record.price
    return dict(totals)
