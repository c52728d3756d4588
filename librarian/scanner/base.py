# librarian/scanner/base.py
from typing import Any, List, Protocol

# A video frame as handed from a camera to a detector (a numpy array for OpenCV)
Frame = Any


class Camera(Protocol):
    """An opened video-only camera"""

    def read_frame(self) -> Frame:
        ...

    def release(self) -> None:
        ...


class BarcodeDetector(Protocol):
    """Finds ISBN-13 barcodes in a frame"""

    name: str

    def detect(self, frame: Frame) -> List[str]:
        ...
