# librarian/scanner/__init__.py
from .base import BarcodeDetector, Camera
from .detectors import select_detector
from .session import ScanSession, ScanState, build_navigation_url

__all__ = [
    'BarcodeDetector',
    'Camera',
    'ScanSession',
    'ScanState',
    'build_navigation_url',
    'select_detector',
]
