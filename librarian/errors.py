# librarian/errors.py
from typing import Optional


class LibrarianError(Exception):
    """Base class for all errors raised by librarian"""


class ScannerError(LibrarianError):
    """The barcode scanner could not run"""


class PermissionDenied(ScannerError):
    """Camera access was refused or no camera is available"""


class DetectionUnavailable(ScannerError):
    """No barcode detection capability, or the detector failed mid-scan"""


class ProviderLookupFailed(LibrarianError):
    """An external metadata provider failed to answer"""

    def __init__(self, provider: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message
        self.cause = cause


class DuplicateBook(LibrarianError, ValueError):
    """The owner already has a book with this ISBN"""

    def __init__(self, isbn: str):
        super().__init__(f"A book with ISBN '{isbn}' is already in the library")
        self.isbn = isbn


class SeriesPositionTaken(LibrarianError, ValueError):
    """Another entry already occupies this number in the series"""

    def __init__(self, series: str, number: int):
        super().__init__(f"Volume #{number} of '{series}' is already taken")
        self.series = series
        self.number = number
