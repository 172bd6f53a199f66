"""
Sliding-window vote over recent raw symbols.
"""
from collections import deque
from typing import Deque, Dict, Optional


class GestureSmoother:
    """
    Keeps the last `window_size` raw symbols and reports the most frequent.

    Ties go to whichever symbol reaches the top count first when scanning
    the window oldest to newest. The empty symbol votes like any other, so
    frames without a confident match dilute real letters.
    """

    def __init__(self, window_size: int = 10):
        if window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {window_size}")
        self._buffer: Deque[str] = deque(maxlen=window_size)
        self._smoothed: Optional[str] = None

    @property
    def smoothed(self) -> Optional[str]:
        """Last value returned by push(), None before the first push."""
        return self._smoothed

    def __len__(self) -> int:
        return len(self._buffer)

    def window(self) -> tuple:
        return tuple(self._buffer)

    def push(self, symbol: str) -> str:
        """Add this frame's raw symbol and return the window's mode."""
        self._buffer.append(symbol)

        counts: Dict[str, int] = {}
        max_count = 0
        smoothed = symbol
        for s in self._buffer:
            counts[s] = counts.get(s, 0) + 1
            if counts[s] > max_count:
                max_count = counts[s]
                smoothed = s

        self._smoothed = smoothed
        return smoothed
