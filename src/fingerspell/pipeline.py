"""
Per-frame typing pipeline.

    landmarks -> classifier (+ wave detector) -> smoother -> commit tracker -> text

`SignTyper` owns every piece of mutable state. Call `step()` once per video
frame from a single thread; manual edits go through the same object so they
can reset the commit marker.
"""
from dataclasses import dataclass
from typing import Optional
import logging

from .classifier import SignClassifier
from .config import Config
from .landmarks import HandLandmarks, as_points
from .smoothing import GestureSmoother
from .stabilizer import CommitTracker, PresenceTracker
from .symbols import NO_HAND, display_label
from .text_buffer import TextBuffer
from .wave import WaveDetector

logger = logging.getLogger(__name__)


@dataclass
class FrameResult:
    """What happened on one frame."""
    raw: str
    smoothed: str
    stable_count: int
    hand_present: bool
    committed: Optional[str] = None   # Text appended this frame, if any

    @property
    def status(self) -> str:
        return display_label(self.smoothed)


class SignTyper:
    """
    Turns a stream of hand landmarks into typed text.

    Example:
        typer = SignTyper(load_config())
        for hand in frames:          # HandLandmarks or None
            result = typer.step(hand)
        print(typer.text)
    """

    def __init__(self, config: Optional[Config] = None, text: Optional[TextBuffer] = None):
        self._config = config or Config()

        self._classifier = SignClassifier(self._config.classifier)
        self._wave = WaveDetector(self._config.wave)
        self._smoother = GestureSmoother(self._config.typing.window_size)
        self._commits = CommitTracker(
            self._config.typing.stable_threshold,
            words=(self._config.wave.word,),
        )
        self._presence = PresenceTracker()
        self._buffer = text if text is not None else TextBuffer()

    @property
    def text(self) -> str:
        return self._buffer.text

    @property
    def buffer(self) -> TextBuffer:
        return self._buffer

    @property
    def last_committed(self) -> str:
        return self._commits.last_committed

    def step(self, hand: Optional[HandLandmarks]) -> FrameResult:
        """
        Process one frame.

        Args:
            hand: Landmarks for the single tracked hand, or None when nothing
                  was detected (or the detector is not ready yet).
        """
        shape = self._classifier.shape(hand) if hand is not None else None
        if shape is None:
            return self._no_hand()

        self._presence.update(True)

        wrist_x = as_points(hand)[HandLandmarks.WRIST][0]
        self._wave.update(wrist_x, shape.all_extended, shape.hand_size)

        raw = self._classifier.classify(hand, self._wave)
        smoothed = self._smoother.push(raw)

        committed = self._commits.update(smoothed)
        if committed is not None:
            self._buffer.append(committed)

        if raw == self._wave.word and self._commits.commit_word(raw):
            self._buffer.append_word(raw)
            committed = (committed or "") + raw

        return FrameResult(
            raw=raw,
            smoothed=smoothed,
            stable_count=self._commits.count,
            hand_present=True,
            committed=committed,
        )

    def _no_hand(self) -> FrameResult:
        lost = self._presence.update(False)
        self._commits.hand_lost()
        self._wave.reset()

        committed = None
        if lost and self._config.typing.auto_space:
            if len(self._buffer) and not self._buffer.ends_with_space():
                self._buffer.space()
                committed = " "
                logger.debug("Hand lost, auto space")

        return FrameResult(
            raw=NO_HAND,
            smoothed=NO_HAND,
            stable_count=0,
            hand_present=False,
            committed=committed,
        )

    # Manual edits. Each one clears the commit marker so the letter that was
    # just typed can be typed again straight away.

    def backspace(self) -> None:
        self._buffer.backspace()
        self._commits.clear_marker()
        logger.debug("Backspace")

    def clear(self) -> None:
        self._buffer.clear()
        self._commits.clear_marker()
        logger.debug("Clear")

    def space(self) -> None:
        self._buffer.space()
        self._commits.clear_marker()
        logger.debug("Manual space")
