"""Shared receipt texts."""

import pytest

AUCHAN_TEXT = """AUCHAN POLSKA SP. Z O.O.
ul. Malborska 51, Kraków
NIP 527-10-10-144
PARAGON FISKALNY
2024-03-15  nr wydr. 123456
Chleb 10A  1 x3,50 3,50A
Rabat Chleb  -0,50zł
Mleko 123A  2 x1,99 3,98A
Banany 200C  0,856 x5,99 5,13C
Mleko 123A  1 x1,99 1,99A
Jogurt 5B  garbled text
SPRZEDAŻ OPODATK. A  10,00
SUMA PLN  13,10
"""

LIDL_TEXT = """LIDL sp. z o.o. sp. k.
ul. Poznańska 48, Jankowice
PARAGON FISKALNY
2024-05-10 18:22   Nr sys. 1234
Mleko  1 x 3.99 3.99
Lidl Plus rabat  -1.00
Banany Luz  1,474kg x 3.99 5.88
Rabat  -1.18
Jogurt  garbled text
SUMA PTU  1,23
SUMA PLN  7,69
"""


def receipt_text(rows, date="2024-01-31", footer=""):
    """Builds OCR text with a date line, the given column rows and a footer line."""
    lines = [f"{date}  header"] + ["  ".join(row) for row in rows] + [footer]
    return "\n".join(lines)


@pytest.fixture
def auchan_text():
    return AUCHAN_TEXT


@pytest.fixture
def lidl_text():
    return LIDL_TEXT


@pytest.fixture
def build_receipt():
    return receipt_text
