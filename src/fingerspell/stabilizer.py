"""
Stability counter, commit marker and hand-presence edge detection.
"""
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional
import logging

from .symbols import NO_HAND, NO_SYMBOL, OPEN_HAND, is_neutral

logger = logging.getLogger(__name__)


@dataclass
class StabilityState:
    symbol: str = NO_HAND          # Last smoothed symbol seen
    count: int = 0                 # Consecutive frames it has been seen
    last_committed: str = NO_SYMBOL


class CommitTracker:
    """
    Decides when a smoothed symbol has held long enough to be typed.

    The run length restarts at 1 when the symbol changes, so a symbol is
    committed on the frame where `count >= threshold`. Each stable run types
    at most once; a neutral symbol (open hand, fist, no hand, no match) clears
    the marker so the same letter can be typed again afterwards.

    A word typed by commit_word is the exception: an open hand keeps it
    blocked, so continuous waving types the word once. Any other symbol,
    hand_lost or clear_marker releases it.
    """

    def __init__(self, threshold: int = 15, words: Iterable[str] = ()):
        if threshold < 1:
            raise ValueError(f"threshold must be >= 1, got {threshold}")
        self._threshold = threshold
        self._words: FrozenSet[str] = frozenset(words)
        self.state = StabilityState()

    @property
    def count(self) -> int:
        return self.state.count

    @property
    def last_committed(self) -> str:
        return self.state.last_committed

    def update(self, smoothed: str) -> Optional[str]:
        """
        Feed this frame's smoothed symbol.

        Returns:
            The symbol to append to the text, or None.
        """
        state = self.state
        if smoothed == state.symbol:
            state.count += 1
        else:
            state.symbol = smoothed
            state.count = 1

        # A typed word stays blocked while the waving open hand persists
        if state.last_committed in self._words:
            if smoothed == OPEN_HAND or smoothed in self._words:
                return None
            state.last_committed = NO_SYMBOL

        if is_neutral(smoothed):
            state.last_committed = NO_SYMBOL
            return None

        # Word gestures are typed by commit_word, never by holding
        if smoothed in self._words:
            return None

        if state.count >= self._threshold and smoothed != state.last_committed:
            state.last_committed = smoothed
            logger.debug("Commit %r after %d frames", smoothed, state.count)
            return smoothed
        return None

    def commit_word(self, word: str) -> bool:
        """Type a word gesture immediately unless it was the last thing typed."""
        if self.state.last_committed == word:
            return False
        self.state.last_committed = word
        logger.debug("Commit word %r", word)
        return True

    def clear_marker(self) -> None:
        self.state.last_committed = NO_SYMBOL

    def hand_lost(self) -> None:
        self.state.symbol = NO_HAND
        self.state.count = 0
        self.state.last_committed = NO_SYMBOL


class PresenceTracker:
    """Edge detector for the hand entering and leaving the frame."""

    def __init__(self):
        self._present = False

    def update(self, present: bool) -> bool:
        """Returns True only on the frame the hand disappears."""
        lost = self._present and not present
        self._present = present
        return lost
