# reporting.py

import csv
from pathlib import Path
from typing import List

import data_utils
from data_models import PurchaseRecord
from config import CSV_HEADER

def _comma(value) -> str:
    return f"{value}".replace('.', ',')

def display_console_preview(records: List[PurchaseRecord]):
    print("\n--- Processed Data Preview (first 20 rows) ---\n")
    h = CSV_HEADER
    print(f"{h[0]:<35}{h[1]:<10}{h[2]:<6}{h[3]:<10}{h[4]:<10}{h[5]:<15}{h[6]:<12}{h[7]:<8}")
    print("-" * 106)
    for record in records[:20]:
        name_short = (record.name[:32] + '...') if len(record.name) > 35 else record.name
        print(f"{name_short:<35}{str(record.quantity):<10}{record.unit.value:<6}"
              f"{f'{record.price:.2f}':<10}"
              f"{f'{record.discount}%' if record.discount > 0 else '':<10}"
              f"{record.category:<15}{record.date:<12}{record.note:<8}")

def save_csv(records: List[PurchaseRecord], filepath: Path):
    """Saves purchases in the ';'-separated, comma-decimal format."""
    print(f"\nSaving data to {filepath.name}...")
    with filepath.open('w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f, delimiter=';')
        writer.writerow(CSV_HEADER)
        for record in records:
            writer.writerow([
                record.name, _comma(record.quantity), record.unit.value,
                _comma(f"{record.price:.2f}"), record.discount,
                record.category, record.date, record.note
            ])
    print(f"--- Successfully saved data to {filepath} ---")

def display_summary(records: List[PurchaseRecord]):
    print("\n" + "="*28 + " FINAL SUMMARY " + "="*29)
    discounted = [r for r in records if r.discount > 0]
    print(f"Purchases:               {len(records)}")
    print(f"Discounted purchases:    {len(discounted)}")
    print(f"Total spending:          {data_utils.total_spending(records):.2f} zł")
    print("-" * 72)
    for store, total in sorted(data_utils.spending_by_store(records).items()):
        print(f"{store:<25}{total:.2f} zł")
    print("\n" + "="*72)

def display_performance_metrics(duration: float, record_count: int, ocr_duration: float):
    print("\n" + "="*23 + " PERFORMANCE METRICS " + "="*23)
    avg_time_per_record = (duration / record_count) * 1000 if record_count > 0 else 0
    ocr_percentage = (ocr_duration / duration) * 100 if duration > 0 else 0
    print(f"Total Execution Time:    {duration:.2f} seconds")
    print(f"Total Purchases Parsed:  {record_count}")
    print(f"Average Time per Item:   {avg_time_per_record:.2f} ms")
    print("-" * 65)
    print(f"Total Time in OCR:       {ocr_duration:.2f} seconds ({ocr_percentage:.1f}% of total time)")
    print("="*65)
