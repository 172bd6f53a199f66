"""
Webcam worker: camera capture in a background thread, typing pipeline on a
Qt timer in the thread that owns the worker.

The capture thread is the only producer and the timer tick the only
consumer; all pipeline state lives on the tick side.
"""
from typing import Optional
import logging
import threading
import time
from PyQt5.QtCore import QObject, pyqtSignal, QTimer

from fingerspell.config import Config
from fingerspell.pipeline import SignTyper, FrameResult
from fingerspell.symbols import display_label, NO_HAND
from .hand_tracker import HandTracker

logger = logging.getLogger(__name__)


class WebcamWorker(QObject):
    """
    Drives SignTyper from the camera.
    Emits signals for UI updates.
    """
    # Signals
    status_changed = pyqtSignal(str)
    text_changed = pyqtSignal(str)
    error = pyqtSignal(str)

    def __init__(self, config: Config, typer: Optional[SignTyper] = None, parent=None):
        super().__init__(parent)
        self._config = config
        self._typer = typer or SignTyper(config)
        self._tracker: Optional[HandTracker] = None
        self._is_running = False

        # Single-slot handoff from the capture thread
        self._latest = None
        self._fresh = False
        self._lock = threading.Lock()
        self._capture_thread: Optional[threading.Thread] = None

        self._timer = QTimer(self)
        self._timer.setInterval(config.ui.tick_interval_ms)
        self._timer.timeout.connect(self._tick)

        self._last_status = ""

    def _capture_loop(self):
        """Background thread to pull camera frames as fast as possible."""
        while self._is_running:
            try:
                ok, hand = self._tracker.get_landmarks()
            except Exception:
                logger.exception("Capture thread error")
                time.sleep(0.1)  # Cool down on error
                continue
            if not ok:
                time.sleep(0.005)
                continue
            with self._lock:
                self._latest = hand
                self._fresh = True

    def start(self) -> bool:
        """Open the camera and start ticking."""
        self._tracker = HandTracker(self._config)
        if not self._tracker.start():
            self.error.emit("Could not start hand tracker")
            return False

        self._is_running = True
        self._capture_thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._capture_thread.start()
        self._timer.start()
        self.status_changed.emit(display_label(NO_HAND))
        return True

    def stop(self):
        """Stop ticking and release the camera."""
        self._timer.stop()
        self._is_running = False
        if self._capture_thread:
            self._capture_thread.join(timeout=1.0)
            self._capture_thread = None
        if self._tracker:
            self._tracker.stop()
            self._tracker = None

    def _tick(self):
        with self._lock:
            if not self._fresh:
                return  # No new camera frame, skip this tick
            hand = self._latest
            self._fresh = False

        result: FrameResult = self._typer.step(hand)
        if result.status != self._last_status:
            self._last_status = result.status
            self.status_changed.emit(result.status)
        if result.committed:
            self.text_changed.emit(self._typer.text)

    # Manual edits, called from the UI thread that also runs the tick

    def backspace(self):
        self._typer.backspace()
        self.text_changed.emit(self._typer.text)

    def clear(self):
        self._typer.clear()
        self.text_changed.emit(self._typer.text)

    def space(self):
        self._typer.space()
        self.text_changed.emit(self._typer.text)
