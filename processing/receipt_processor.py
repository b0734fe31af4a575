# processing/receipt_processor.py

import cv2
import pytesseract
import time
import numpy as np
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple

# Import from our modules
from config import (
    OCR_CACHE_DIR, DEBUG_IMG_DIR, TESSERACT_CONFIG, TESSERACT_LANG, TEXT_EXTENSIONS,
    Configuration
)
from data_models import MissingDateAnchor, PurchaseRecord
from parsers.base_parser import BaseParser
import data_utils

OcrFunction = Callable[[np.ndarray], str]


@contextmanager
def tesseract_engine(lang: str = TESSERACT_LANG, config: str = TESSERACT_CONFIG) -> Iterator[OcrFunction]:
    """
    Acquires the Tesseract engine for a batch of receipts.

    Yields a function turning a preprocessed image into text. The engine is
    released when the block exits, also after an error.
    """
    try:
        version = pytesseract.get_tesseract_version()
    except pytesseract.TesseractNotFoundError:
        print("Error: Tesseract is not installed or not in your PATH.")
        raise
    print(f"Tesseract {version} ready (lang='{lang}').")

    def recognize(image: np.ndarray) -> str:
        return pytesseract.image_to_string(image, lang=lang, config=config)

    # pytesseract starts one tesseract process per call, so there is no handle to free
    try:
        yield recognize
    finally:
        print("Tesseract engine released.")


class ReceiptProcessor:
    """Handles preprocessing, OCR, and parsing for a single receipt file."""
    def __init__(self, path: Path, parser: BaseParser, ocr: Optional[OcrFunction] = None, debug: bool = False):
        self.path = path
        self.parser = parser
        self.ocr = ocr
        self.debug = debug
        self.raw_text: Optional[str] = None
        self.processed_image: Optional[np.ndarray] = None # To store the image for debugging

    def process(self, config: Configuration) -> Tuple[List[PurchaseRecord], float]:
        """
        Main processing pipeline for a single receipt.
        Returns the parsed purchase records and the OCR duration.
        """
        print(f"\n--- Processing: {self.path.name} (Shop: {self.parser.store_name}) ---")

        print("1. Reading receipt text (from file, cache or OCR)...")
        self.raw_text, ocr_duration = self._extract_text()

        if not self.raw_text:
            print(f"Warning: No text found for {self.path.name}. Skipping.")
            return [], ocr_duration

        if self.debug and self.processed_image is not None:
            self._save_debug_output(self.processed_image)

        print("2. Parsing text to find purchases...")
        try:
            records = self.parser.parse(self.raw_text)
        except MissingDateAnchor as e:
            print(f"Warning: {e} Skipping {self.path.name}.")
            return [], ocr_duration

        manual_date = config.manual_dates.get(self.path.name)
        if manual_date:
            print(f"   -> Using manually provided date: {manual_date}")
            data_utils.apply_manual_date(records, manual_date)

        if records:
            print(f"   -> Found {len(records)} purchases.")
        else:
            print("   -> Could not find any purchases in this receipt.")
        return records, ocr_duration

    def _preprocess_image(self) -> Optional[np.ndarray]:
        image = cv2.imread(str(self.path), cv2.IMREAD_GRAYSCALE)
        if image is None:
            print(f"Error: Could not read image at {self.path}")
            return None
        if np.mean(image) < 128:
            image = cv2.bitwise_not(image)
        _, processed_image = cv2.threshold(image, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
        return processed_image

    def _extract_text(self) -> Tuple[Optional[str], float]:
        if self.path.suffix.lower() in TEXT_EXTENSIONS:
            print("   -> Input is an OCR text dump. Skipping OCR.")
            return self.path.read_text(encoding='utf-8'), 0.0

        cache_path = OCR_CACHE_DIR / f"{self.path.name}.txt"
        if cache_path.exists():
            print(f"   -> Found cached OCR text. Loading from '{cache_path.name}'.")
            return cache_path.read_text(encoding='utf-8'), 0.0

        if self.ocr is None:
            print("Error: Image given but no OCR engine was provided.")
            return None, 0.0

        print("   -> No cache found. Performing OCR...")
        start_ocr_time = time.perf_counter()
        text = None
        self.processed_image = self._preprocess_image()
        if self.processed_image is not None:
            try:
                text = self.ocr(self.processed_image)
            except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
                print(f"Error: OCR failed for {self.path.name}: {e}")
                return None, time.perf_counter() - start_ocr_time
        ocr_duration = time.perf_counter() - start_ocr_time

        if text:
            cache_path.parent.mkdir(exist_ok=True)
            cache_path.write_text(text, encoding='utf-8')
            print(f"   -> OCR text saved to cache: {cache_path.name}")

        return text, ocr_duration

    def _save_debug_output(self, image: np.ndarray):
        debug_image_path = DEBUG_IMG_DIR / f"debug_{self.path.stem}.png"
        debug_image_path.parent.mkdir(exist_ok=True)
        cv2.imwrite(str(debug_image_path), image)
        print(f"   -> Preprocessed image saved as {debug_image_path.name}")
        preview = (self.raw_text[:250] + "...") if self.raw_text and len(self.raw_text) > 250 else self.raw_text
        print(f"   -> Raw OCR Text Preview:\n---\n{preview}\n---")
