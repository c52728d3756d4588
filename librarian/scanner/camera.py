# librarian/scanner/camera.py
import logging

import cv2

from librarian.errors import PermissionDenied, ScannerError
from .base import Frame

logger = logging.getLogger(__name__)


class OpenCVCamera:
    """Video capture through OpenCV.

    Frames are converted to grayscale, which every detector accepts. OpenCV
    never opens an audio stream.
    """

    def __init__(self, device: int = 0):
        self.device = device
        self._capture = cv2.VideoCapture(device)
        if not self._capture.isOpened():
            self._capture.release()
            raise PermissionDenied(f"Could not open camera {device}, check that it exists and access is allowed")
        logger.debug(f"Opened camera {device}")

    def read_frame(self) -> Frame:
        ok, frame = self._capture.read()
        if not ok:
            raise ScannerError(f"Camera {self.device} stopped delivering frames")
        return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)

    def release(self) -> None:
        self._capture.release()
        logger.debug(f"Released camera {self.device}")
