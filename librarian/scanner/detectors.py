# librarian/scanner/detectors.py
"""Barcode detection backends.

zxing-cpp is preferred. ZBar (through pyzbar) is the fallback; it needs the
native zbar library, so it is only usable when its import succeeds.
:func:`select_detector` probes once and hands back whichever is present.
"""
import importlib
import logging
from typing import Iterable, List

from librarian.errors import DetectionUnavailable
from librarian.utils.isbn import is_isbn13
from .base import BarcodeDetector, Frame

logger = logging.getLogger(__name__)


def _isbns(values: Iterable[str]) -> List[str]:
    return [v for v in (value.strip() for value in values) if is_isbn13(v)]


class ZXingDetector:
    name = "zxing-cpp"

    def __init__(self):
        self._zxing = importlib.import_module("zxingcpp")

    def detect(self, frame: Frame) -> List[str]:
        results = self._zxing.read_barcodes(frame, formats=self._zxing.BarcodeFormat.EAN13)
        return _isbns(r.text for r in results if getattr(r, "valid", True))


class ZBarDetector:
    name = "zbar"

    def __init__(self):
        pyzbar = importlib.import_module("pyzbar.pyzbar")
        self._decode = pyzbar.decode
        self._symbols = [pyzbar.ZBarSymbol.EAN13]

    def detect(self, frame: Frame) -> List[str]:
        results = self._decode(frame, symbols=self._symbols)
        return _isbns(r.data.decode("ascii", errors="replace") for r in results)


def _importable(module: str) -> bool:
    # Installed bindings still fail to import when their native library is broken
    try:
        importlib.import_module(module)
    except ImportError as e:
        logger.debug(f"Cannot import {module}: {e}")
        return False
    return True


def _zxing_available() -> bool:
    return _importable("zxingcpp")


def _zbar_available() -> bool:
    # pyzbar raises ImportError at import time when libzbar is missing
    return _importable("pyzbar.pyzbar")


def select_detector() -> BarcodeDetector:
    """Pick the barcode detector to use for this process.

    Raises:
        DetectionUnavailable: If neither zxing-cpp nor zbar can be loaded
    """
    if _zxing_available():
        detector = ZXingDetector()
    elif _zbar_available():
        detector = ZBarDetector()
    else:
        raise DetectionUnavailable(
            "No barcode detector available, install zxing-cpp or pyzbar with the zbar library"
        )
    logger.debug(f"Using {detector.name} barcode detector")
    return detector
