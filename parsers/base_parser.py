#!/usr/bin/env python3

"""
Defines the abstract base class for all receipt parsers.

Each shop-specific parser must inherit from BaseParser, describe its layout
through the class attributes and implement `classify`. The cropping and
accumulation steps are shared, so the main application gets the same
interface regardless of the shop.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from data_models import CroppedReceipt, DiscountRow, IgnoredRow, ItemRow, PurchaseRecord, RowClassification
from processing.purchase_accumulator import PurchaseAccumulator
from processing.receipt_cropper import ReceiptCropper


class BaseParser(ABC):
    """Abstract base class for all receipt parsers."""

    # Store literal written to every record's note
    store_name: str = ""
    # Marker that ends the item block
    footer: str = ""
    # Whether a receipt without a date is an error instead of a fallback to today
    require_date: bool = False
    # Whether repeated item names are summed into one record
    merge_by_name: bool = False

    @abstractmethod
    def classify(self, row: List[str]) -> RowClassification:
        """
        Decides what a single row of the item block is.

        Args:
            row: The columns of one receipt line.

        Returns:
            An ItemRow, a DiscountRow, or an IgnoredRow for anything that is
            not a two-column 'name / amount' line or cannot be parsed.
        """
        pass

    def crop(self, text: str, today: Optional[date] = None) -> CroppedReceipt:
        return ReceiptCropper(self.footer, require_date=self.require_date).crop(text, today=today)

    def parse(self, text: str, today: Optional[date] = None) -> List[PurchaseRecord]:
        """
        Parses all purchases from the raw OCR text.

        Args:
            text: The full raw text extracted from the receipt.
            today: Date used when the receipt carries none. Defaults to the current UTC date.

        Returns:
            The purchase records in the order they first appear on the receipt.

        Raises:
            MissingDateAnchor: If the layout requires a date and none is found.
        """
        receipt = self.crop(text, today=today)
        accumulator = PurchaseAccumulator(self.store_name, receipt.date, merge_by_name=self.merge_by_name)

        for row in receipt.rows:
            result = self.classify(row)
            if isinstance(result, ItemRow):
                accumulator.upsert_item(result)
            elif isinstance(result, DiscountRow):
                if not accumulator.apply_discount(result.amount, target_name=result.target_name):
                    target = result.target_name or "the previous item"
                    print(f"   -> Warning: Discount of {result.amount} has no item to apply to ({target}). Skipping.")
            elif not isinstance(result, IgnoredRow):
                raise TypeError(f"Unexpected row classification: {result!r}")

        return accumulator.finish()
