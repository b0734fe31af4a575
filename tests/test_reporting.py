"""Tests for purchase reports."""

from decimal import Decimal

import reporting
from data_models import PurchaseRecord, Unit


def make_records():
    return [
        PurchaseRecord("Banany Luz", Decimal("1.474"), Unit.GRAM, Decimal("4.70"), 20, "", "2024-05-10", "Lidl"),
        PurchaseRecord("Mleko", Decimal("1"), Unit.PIECE, Decimal("2.99"), 25, "Nabiał", "2024-05-10", "Lidl"),
    ]


def test_save_csv(tmp_path):
    path = tmp_path / "purchases.csv"
    reporting.save_csv(make_records(), path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "name;quantity;unit;price;discount;category;date;note",
        "Banany Luz;1,474;g;4,70;20;;2024-05-10;Lidl",
        "Mleko;1;pcs;2,99;25;Nabiał;2024-05-10;Lidl",
    ]


def test_console_output(capsys):
    records = make_records()
    reporting.display_console_preview(records)
    reporting.display_summary(records)
    out = capsys.readouterr().out
    assert "Banany Luz" in out
    assert "20%" in out
    assert "7.69 zł" in out


def test_performance_metrics_with_no_purchases(capsys):
    reporting.display_performance_metrics(0.0, 0, 0.0)
    assert "Total Purchases Parsed:  0" in capsys.readouterr().out
