#!/usr/bin/env python3

"""
Central configuration module for the receipt parser application.

This module contains:
- All static file and directory paths.
- Receipt layout markers and OCR engine settings.
- The Configuration dataclass to hold loaded settings.
- Functions to load all configuration data from CSV files.
"""

import csv
import re
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict

# --- 1. Constants & File Paths ---

# Directories
CORRECTION_FILES_DIR = Path("correction_files")
OCR_CACHE_DIR = Path("ocr_cache")
OUTPUT_DIR = Path("output_data")
DEBUG_IMG_DIR = Path("preprocessed_images")

# Filenames
MANUAL_DATES_FILENAME = "manual_dates.csv"
CATEGORY_MAP_FILENAME = "category_map.csv"

# Input types
IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.bmp', '.tiff')
TEXT_EXTENSIONS = ('.txt',)

# OCR engine (Polish receipts, column gaps must survive as runs of spaces)
TESSERACT_LANG = 'pol'
TESSERACT_CONFIG = r'--oem 3 --psm 4 -c preserve_interword_spaces=1'

# CSV Headers
CSV_HEADER = ['name', 'quantity', 'unit', 'price', 'discount', 'category', 'date', 'note']

ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


# --- 2. Configuration Data Structure ---

@dataclass
class Configuration:
    """Holds all loaded configuration data from CSV files."""
    manual_dates: Dict[str, str] = field(default_factory=dict)
    category_map: Dict[str, str] = field(default_factory=dict)


# --- 3. Configuration Loading Functions ---

def _load_csv_map(filepath: Path, key_col: int, val_col: int, has_header: bool = True) -> Dict[str, str]:
    """Helper to load a 2-column CSV into a dictionary."""
    data_map = {}
    if not filepath.exists():
        print(f"\nInfo: Data file not found at '{filepath}'. This may be expected.")
        return data_map
    try:
        with filepath.open('r', encoding='utf-8') as f:
            reader = csv.reader(f, delimiter=';')
            if has_header:
                next(reader, None)
            for row in reader:
                if len(row) > max(key_col, val_col) and row[key_col].strip():
                    key = row[key_col].strip()
                    val = row[val_col].strip()
                    data_map[key] = val
        print(f"\nLoaded {len(data_map)} entries from '{filepath.name}'.")
    except (OSError, csv.Error, UnicodeDecodeError) as e:
        print(f"\nError reading file '{filepath}': {e}. Skipping.")
    return data_map

def load_configuration(directory: Path = CORRECTION_FILES_DIR) -> Configuration:
    """Loads all necessary configuration files into a single object."""
    print("\n" + "="*20 + " Loading Configuration " + "="*20)
    config = Configuration()

    # Manual dates must be ISO dates, they replace the date printed on the receipt
    manual_dates = _load_csv_map(directory / MANUAL_DATES_FILENAME, key_col=0, val_col=1, has_header=False)
    for file_name, date_str in manual_dates.items():
        if ISO_DATE_PATTERN.match(date_str):
            config.manual_dates[file_name] = date_str
        else:
            print(f"Warning: Invalid date '{date_str}' for '{file_name}' in '{MANUAL_DATES_FILENAME}'. Skipping.")

    config.category_map = {
        name: category
        for name, category in _load_csv_map(directory / CATEGORY_MAP_FILENAME, key_col=0, val_col=1).items()
        if category
    }
    return config
