"""
Wave detection from horizontal wrist oscillation.
"""
from typing import Optional
import logging

from .config import WaveConfig

logger = logging.getLogger(__name__)


class WaveDetector:
    """
    Counts left/right direction changes of the wrist while the hand is open.

    A cycle is counted each time the wrist moves past the noise floor in the
    opposite direction to its last recorded move. Closing any finger clears
    all state; holding still for more than `stationary_frames` frames drops
    the count back to zero.
    """

    def __init__(self, config: Optional[WaveConfig] = None):
        self._config = config or WaveConfig()

        self._prev_x: Optional[float] = None
        self._direction = 0        # -1 left, +1 right, 0 unknown
        self._cycles = 0
        self._stationary = 0

    @property
    def cycles(self) -> int:
        return self._cycles

    @property
    def word(self) -> str:
        return self._config.word

    @property
    def detected(self) -> bool:
        return self._cycles >= self._config.cycle_threshold

    def update(self, wrist_x: float, all_extended: bool, hand_size: float) -> int:
        """
        Feed one frame.

        Args:
            wrist_x: Normalized wrist x position
            all_extended: Index, middle, ring and pinky are all straight
            hand_size: Scale reference for the noise floor

        Returns:
            Current cycle count.
        """
        if not all_extended:
            self.reset()
            return 0

        if self._prev_x is None:
            self._prev_x = wrist_x
            return self._cycles

        dx = wrist_x - self._prev_x
        self._prev_x = wrist_x

        if abs(dx) > self._config.noise_floor * hand_size:
            self._stationary = 0
            direction = 1 if dx > 0 else -1
            if self._direction != 0 and direction != self._direction:
                self._cycles += 1
                logger.debug("Wave cycle %d", self._cycles)
            self._direction = direction
        else:
            self._stationary += 1
            if self._stationary > self._config.stationary_frames:
                self._cycles = 0
                self._direction = 0

        return self._cycles

    def reset_cycles(self) -> None:
        """Drop the count after a wave has been reported, keep tracking position."""
        self._cycles = 0
        self._direction = 0
        self._stationary = 0

    def reset(self) -> None:
        """Forget everything, including the last wrist position."""
        self._prev_x = None
        self.reset_cycles()
