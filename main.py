# main.py

import argparse
import time
from contextlib import ExitStack
from pathlib import Path
from datetime import datetime
from typing import List, Optional, Tuple

import pytesseract

# Import from our modules
from config import (
    load_configuration, Configuration,
    OCR_CACHE_DIR, OUTPUT_DIR, CORRECTION_FILES_DIR, DEBUG_IMG_DIR,
    IMAGE_EXTENSIONS, TEXT_EXTENSIONS
)
from data_models import PurchaseRecord
from processing.receipt_processor import ReceiptProcessor, OcrFunction, tesseract_engine
from parsers.base_parser import BaseParser
from parsers.auchan_parser import AuchanParser
from parsers.lidl_parser import LidlParser
import data_utils
import reporting

SHOPS = ('auchan', 'lidl')

# --- Helper Functions for Main Execution ---

def get_parser(shop_name: str) -> BaseParser:
    """Factory function to get the correct parser class based on shop name."""
    if shop_name == 'auchan':
        return AuchanParser()
    elif shop_name == 'lidl':
        return LidlParser()
    else:
        raise ValueError(f"Unknown or unsupported shop: {shop_name}")

def get_files_to_process(input_path: Path) -> List[Path]:
    """Scans a directory or validates a single file for processing."""
    valid_extensions = IMAGE_EXTENSIONS + TEXT_EXTENSIONS
    if input_path.is_dir():
        print(f"Input is a directory. Scanning for receipts in: {input_path}")
        return sorted([p for p in input_path.iterdir() if p.suffix.lower() in valid_extensions])
    elif input_path.is_file() and input_path.suffix.lower() in valid_extensions:
        print(f"Input is a single file: {input_path}")
        return [input_path]
    else:
        print(f"Error: Path not found or is not a supported image/text file or directory: {input_path}")
        return []

def setup_environment(debug_mode: bool):
    """Create all necessary directories for the application to run."""
    print("\n" + "="*20 + " Setting Up Environment " + "="*20)
    OCR_CACHE_DIR.mkdir(exist_ok=True)
    OUTPUT_DIR.mkdir(exist_ok=True)
    CORRECTION_FILES_DIR.mkdir(exist_ok=True)
    if debug_mode:
        DEBUG_IMG_DIR.mkdir(exist_ok=True)
    print("All necessary directories are present.")


# --- Main Execution Pipeline ---

def process_receipts(files: List[Path], config: Configuration, parser: BaseParser,
                     ocr: Optional[OcrFunction], debug: bool = False) -> Tuple[List[PurchaseRecord], float]:
    """Process all receipts and collect their purchases."""
    all_records = []
    total_ocr_time = 0.0
    for path in files:
        processor = ReceiptProcessor(path, parser=parser, ocr=ocr, debug=debug)
        records, ocr_duration = processor.process(config)
        all_records.extend(records)
        total_ocr_time += ocr_duration
    return all_records, total_ocr_time

def generate_reports(records: List[PurchaseRecord], total_duration: float, ocr_duration: float):
    """Generate all console and file-based outputs."""
    if not records:
        print("\n--- Finished. No purchases found. ---")
        return

    print(f"\n--- Finished processing. Found a total of {len(records)} purchases. ---")
    reporting.display_console_preview(records)

    timestamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
    reporting.save_csv(records, OUTPUT_DIR / f"purchases_{timestamp}.csv")

    reporting.display_summary(records)
    reporting.display_performance_metrics(total_duration, len(records), ocr_duration)

def main(argv: Optional[List[str]] = None):
    arg_parser = argparse.ArgumentParser(description="Turn OCR'd supermarket receipts into a list of purchases.")
    arg_parser.add_argument("input_path", help="Path to a receipt image, an OCR text file, OR a directory of them.")
    arg_parser.add_argument("--shop", choices=SHOPS, required=True, help="The shop the receipt is from.")
    arg_parser.add_argument("--debug", action="store_true", help="Enable debug mode to save processed images.")
    args = arg_parser.parse_args(argv)

    start_time = time.perf_counter()

    # 1. Setup
    setup_environment(args.debug)
    config = load_configuration()
    files_to_process = get_files_to_process(Path(args.input_path))
    if not files_to_process:
        return

    # 2. Process (the OCR engine is only acquired when there are images to read)
    with ExitStack() as stack:
        ocr = None
        if any(p.suffix.lower() in IMAGE_EXTENSIONS for p in files_to_process):
            print("\n" + "="*20 + " Initializing OCR Engine " + "="*20)
            try:
                ocr = stack.enter_context(tesseract_engine())
            except pytesseract.TesseractNotFoundError:
                print("Warning: Images will be skipped. Only text dumps and cached OCR text are processed.")
        all_records, total_ocr_time = process_receipts(files_to_process, config, get_parser(args.shop), ocr, args.debug)

    # 3. Finalize
    print("\n" + "="*20 + " Finalizing Data Set " + "="*21)
    data_utils.apply_categories(all_records, config.category_map)

    # 4. Report
    total_duration = time.perf_counter() - start_time
    generate_reports(all_records, total_duration, total_ocr_time)

if __name__ == "__main__":
    main()
