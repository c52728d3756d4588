# librarian/scanner/session.py
"""Camera scan session.

A :class:`ScanSession` owns one camera and one polling thread while it is
scanning. Every ``interval`` seconds the poller reads a frame and asks the
detector for ISBN-13 barcodes. The first hit builds the add-book URL with the
``isbn`` and ``provider`` query parameters, hands it to the navigator and
closes the session.

    IDLE --start()--> SCANNING --stop() / detection / failure--> IDLE
"""
import logging
import threading
from enum import Enum
from typing import Callable, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from librarian.errors import DetectionUnavailable, ScannerError
from .base import BarcodeDetector, Camera

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.2


class ScanState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"


def build_navigation_url(base_url: str, isbn: str, provider: Optional[str]) -> str:
    """Set the ``isbn`` and ``provider`` query parameters of ``base_url``.

    Other parameters are kept; earlier ``isbn``/``provider`` values are replaced.
    Without a provider the parameter is left out and the add page falls back
    to manual entry.
    """
    parts = urlsplit(base_url)
    params = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in ("isbn", "provider")
    ]
    params.append(("isbn", isbn))
    if provider:
        params.append(("provider", provider))
    return urlunsplit(parts._replace(query=urlencode(params)))


class ScanSession:
    def __init__(
        self,
        camera_factory: Callable[[], Camera],
        detector: BarcodeDetector,
        navigator: Callable[[str], None],
        provider_source: Callable[[], Optional[str]],
        base_url: str,
        interval: float = DEFAULT_INTERVAL,
        on_error: Optional[Callable[[ScannerError], None]] = None,
    ):
        """
        Args:
            camera_factory: Opens the camera, raises PermissionDenied when refused
            detector: Barcode detector chosen by select_detector()
            navigator: Called once with the add-book URL of the detected ISBN
            provider_source: Returns the selected metadata provider, read at detection time,
                None when lookups are disabled
            base_url: URL of the add-book page
            interval: Seconds between two frames
            on_error: Called when the session stops because of a failure
        """
        self._camera_factory = camera_factory
        self._detector = detector
        self._navigator = navigator
        self._provider_source = provider_source
        self.base_url = base_url
        self.interval = interval
        self._on_error = on_error

        self._lock = threading.RLock()
        self._idle = threading.Event()
        self._idle.set()
        self._state = ScanState.IDLE
        self._camera: Optional[Camera] = None
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

        self.detected: Optional[str] = None
        self.error: Optional[ScannerError] = None

    @property
    def state(self) -> ScanState:
        return self._state

    def start(self) -> None:
        """Open the camera and start polling.

        Raises:
            ScannerError: If the session is already scanning
            PermissionDenied: If the camera cannot be opened, the session stays idle
        """
        with self._lock:
            if self._state is ScanState.SCANNING:
                raise ScannerError("A scan is already in progress")

            self.detected = None
            self.error = None
            self._camera = self._camera_factory()

            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name="barcode-poller",
                daemon=True,
            )
            self._state = ScanState.SCANNING
            self._idle.clear()
            self._thread.start()

        logger.info("Reading barcodes.")

    def stop(self) -> bool:
        """Stop polling and release the camera.

        Safe to call at any time and from any thread, including the poller.
        Once it returns no detection can navigate.

        Returns:
            True if the session was scanning, False if it was already idle
        """
        with self._lock:
            resources = self._close()
        if resources is None:
            return False
        self._release(*resources)
        return True

    def _close(self) -> Optional[Tuple[Camera, threading.Thread]]:
        # Caller holds the lock
        if self._state is ScanState.IDLE:
            return None
        self._state = ScanState.IDLE
        self._stop_event.set()
        camera, self._camera = self._camera, None
        thread, self._thread = self._thread, None
        return camera, thread

    def _release(self, camera: Camera, thread: threading.Thread) -> None:
        # The poller finishes its current tick before the camera goes away
        if thread is not threading.current_thread():
            thread.join()
        camera.release()

        with self._lock:
            if self._state is ScanState.IDLE:
                self._idle.set()
        logger.info("Reset.")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the session is idle. Returns False on timeout."""
        return self._idle.wait(timeout)

    def _run(self, stop_event: threading.Event) -> None:
        # Ticks never overlap: the next wait starts after the detection returns
        while not stop_event.wait(self.interval):
            self.poll_once()

    def poll_once(self) -> Optional[str]:
        """Examine one frame.

        Returns:
            The ISBN that was acted upon, None otherwise
        """
        with self._lock:
            if self._state is not ScanState.SCANNING:
                return None
            camera = self._camera

        try:
            frame = camera.read_frame()
            isbns = self._detector.detect(frame)
        except Exception as e:
            # Runs on the poller thread, nothing above us would see it
            self._fail(DetectionUnavailable(f"Barcode detection failed: {e}"))
            return None

        if not isbns:
            return None
        return self._found(isbns[0])

    def _found(self, isbn: str) -> Optional[str]:
        with self._lock:
            if self._state is not ScanState.SCANNING:
                return None
            url = build_navigation_url(self.base_url, isbn, self._provider_source())
            self.detected = isbn
            camera, thread = self._close()

        error = None
        try:
            logger.info(f"Detected ISBN {isbn}, opening {url}")
            self._navigator(url)
        except Exception as e:
            error = ScannerError(f"Could not open {url}: {e}")
            self.error = error
            logger.error(str(error))
        finally:
            self._release(camera, thread)

        if error is not None:
            if self._on_error is not None:
                self._on_error(error)
            return None
        return isbn

    def _fail(self, error: ScannerError) -> None:
        with self._lock:
            if self._state is not ScanState.SCANNING:
                return
            self.error = error

        logger.error(str(error))
        self.stop()
        if self._on_error is not None:
            self._on_error(error)
