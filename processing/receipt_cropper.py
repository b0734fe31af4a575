# processing/receipt_cropper.py

"""
Locates the item block of a receipt between a header anchor and a footer
anchor and splits it into column rows.
"""

import re
from datetime import date, datetime, timezone
from typing import List, Optional

from data_models import CroppedReceipt, MissingDateAnchor

DATE_PATTERN = re.compile(r'\b([0-9]{4})-([0-9]{2})-([0-9]{2})\b')
COLUMN_GAP_PATTERN = re.compile(r' {2,}')


def find_receipt_date(text: str) -> Optional[re.Match]:
    """Returns the first YYYY-MM-DD occurrence in the text."""
    return DATE_PATTERN.search(text)


def split_rows(region: str) -> List[List[str]]:
    """
    Splits a cropped region into rows of columns.

    OCR renders column gaps as two or more spaces. The first line is the
    anchor line itself and never holds an item.
    """
    rows = [COLUMN_GAP_PATTERN.split(line) for line in region.split('\n')]
    return rows[1:]


class ReceiptCropper:
    """Crops raw OCR text to the rows between the receipt date and a footer marker."""

    def __init__(self, footer: str, require_date: bool = False):
        self.footer = footer
        self.require_date = require_date

    def crop(self, text: str, today: Optional[date] = None) -> CroppedReceipt:
        match = find_receipt_date(text)
        if match:
            year, month, day = match.groups()
            date_str = f"{year}-{month}-{day}"
            header = match.group(0)
            print(f"   -> Found receipt date '{date_str}'.")
        elif self.require_date:
            raise MissingDateAnchor("No YYYY-MM-DD date found to anchor the item block.")
        else:
            date_str = (today or datetime.now(timezone.utc).date()).isoformat()
            header = date_str
            print(f"   -> Warning: No date found on the receipt. Falling back to {date_str}.")

        start = text.find(header)
        if start == -1:
            print("   -> Warning: Header anchor not found. No rows to parse.")
            return CroppedReceipt(date=date_str, rows=[])

        region = text[start:]
        end = region.find(self.footer)
        if end == -1:
            print(f"   -> Warning: Footer '{self.footer}' not found. Reading rows to the end of the text.")
        else:
            region = region[:end]
        return CroppedReceipt(date=date_str, rows=split_rows(region))
