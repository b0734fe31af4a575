#!/usr/bin/env python3

"""
Defines the core data structures for the application.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union


class MissingDateAnchor(ValueError):
    """Raised when a receipt layout needs its date as the crop anchor and none is present."""


class Unit(str, Enum):
    """Units the purchase consumer understands. Values are the stored literals."""
    PIECE = "pcs"
    KILOGRAM = "kg"
    GRAM = "g"


@dataclass
class PurchaseRecord:
    """Represents a single purchase recovered from a receipt."""
    name: str
    quantity: Decimal
    unit: Unit
    price: Decimal
    discount: int = 0
    category: str = ""
    date: str = ""
    note: str = ""

    def as_dict(self) -> dict:
        return {
            'name': self.name,
            'quantity': float(self.quantity),
            'unit': self.unit.value,
            'price': float(self.price),
            'discount': self.discount,
            'category': self.category,
            'date': self.date,
            'note': self.note,
        }


@dataclass
class CroppedReceipt:
    """The transactional region of a receipt, already split into column rows."""
    date: str
    rows: List[List[str]] = field(default_factory=list)


# --- Row classifications produced by the store parsers ---

@dataclass
class IgnoredRow:
    row: List[str] = field(default_factory=list)


@dataclass
class ItemRow:
    name: str
    quantity: Decimal
    unit: Unit
    price: Decimal


@dataclass
class DiscountRow:
    amount: Decimal
    # Only set when the row names the discounted item; otherwise the discount
    # belongs to the last appended record.
    target_name: Optional[str] = None


RowClassification = Union[IgnoredRow, ItemRow, DiscountRow]
