"""
Hand landmark data model.

A landmark set is 21 points in MediaPipe's anatomical order. The detector
produces a new set every frame; nothing downstream mutates it.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

Point = Sequence[float]

NUM_LANDMARKS = 21


@dataclass
class HandLandmarks:
    """
    Normalized hand landmarks from the detector.

    Attributes:
        landmarks: List of 21 (x, y) or (x, y, z) tuples, normalized 0-1
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
        visibility: Optional per-point confidence, same order as landmarks
    """
    landmarks: List[Point]
    handedness: str = "Unknown"
    confidence: float = 1.0
    visibility: Optional[List[float]] = field(default=None)

    # MediaPipe landmark indices for convenience
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


# (tip, knuckle) pairs for the four non-thumb fingers
FINGERS = (
    (HandLandmarks.INDEX_TIP, HandLandmarks.INDEX_MCP),
    (HandLandmarks.MIDDLE_TIP, HandLandmarks.MIDDLE_MCP),
    (HandLandmarks.RING_TIP, HandLandmarks.RING_MCP),
    (HandLandmarks.PINKY_TIP, HandLandmarks.PINKY_MCP),
)


def as_points(hand) -> Sequence[Point]:
    """Accept either a HandLandmarks or a bare sequence of points."""
    if isinstance(hand, HandLandmarks):
        return hand.landmarks
    return hand
