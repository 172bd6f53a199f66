"""
Geometric primitives over a 21-point landmark set.

Nothing here keeps state: landmarks change every frame, so hand size and
extension flags are recomputed on every call.
"""
from dataclasses import dataclass
from typing import Optional, Sequence
import math

from .config import ClassifierConfig
from .landmarks import FINGERS, NUM_LANDMARKS, HandLandmarks, Point


def is_valid(points: Sequence[Point]) -> bool:
    """True if there are 21 points, each with finite x and y.

    Depth is optional: a point may be (x, y), (x, y, z) or (x, y, None).
    """
    try:
        if len(points) < NUM_LANDMARKS:
            return False
        for p in points[:NUM_LANDMARKS]:
            if len(p) < 2:
                return False
            if not (math.isfinite(float(p[0])) and math.isfinite(float(p[1]))):
                return False
            if len(p) > 2 and p[2] is not None and not math.isfinite(float(p[2])):
                return False
    except (TypeError, ValueError):
        return False
    return True


def _depth(p: Point) -> float:
    if len(p) > 2 and p[2] is not None:
        return float(p[2])
    return 0.0


def distance_2d(p1: Point, p2: Point) -> float:
    """Calculate 2D distance between two points (ignoring z)."""
    dx = p1[0] - p2[0]
    dy = p1[1] - p2[1]
    return math.sqrt(dx*dx + dy*dy)


def distance(
    points: Sequence[Point],
    a: int,
    b: int,
    use_depth: bool = False,
    depth_weight: float = 2.0,
) -> float:
    """
    Euclidean distance between landmarks a and b.

    With use_depth the z term is scaled by depth_weight, since the detector's
    depth estimate is smaller in magnitude than x/y.
    """
    p1, p2 = points[a], points[b]
    if not use_depth:
        return distance_2d(p1, p2)
    dz = (_depth(p1) - _depth(p2)) * depth_weight
    dx = p1[0] - p2[0]
    dy = p1[1] - p2[1]
    return math.sqrt(dx*dx + dy*dy + dz*dz)


def hand_size(points: Sequence[Point]) -> float:
    """Wrist to middle-finger knuckle distance, the scale reference."""
    return distance_2d(points[HandLandmarks.WRIST], points[HandLandmarks.MIDDLE_MCP])


def is_extended(
    points: Sequence[Point],
    tip: int,
    mcp: int,
    size: float,
    ratio: float = 0.6,
    use_depth: bool = False,
    depth_weight: float = 2.0,
) -> bool:
    """Finger is straight if its tip is further than ratio * size from its knuckle."""
    return distance(points, tip, mcp, use_depth, depth_weight) > size * ratio


def is_extended_from_wrist(
    points: Sequence[Point],
    tip: int,
    mcp: int,
    ratio: float = 1.1,
    use_depth: bool = False,
    depth_weight: float = 2.0,
) -> bool:
    """Alternative test: tip-to-wrist exceeds knuckle-to-wrist by ratio."""
    wrist = HandLandmarks.WRIST
    knuckle_reach = distance(points, mcp, wrist, use_depth, depth_weight)
    if knuckle_reach <= 0:
        return False
    return distance(points, tip, wrist, use_depth, depth_weight) / knuckle_reach > ratio


@dataclass(frozen=True)
class HandShape:
    """Per-frame hand size and extension flags for the four non-thumb fingers."""
    hand_size: float
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    @property
    def pattern(self) -> str:
        """Extension flags as a string, index first: '1100' is index + middle."""
        return "".join("1" if f else "0" for f in (self.index, self.middle, self.ring, self.pinky))

    @property
    def all_extended(self) -> bool:
        return self.index and self.middle and self.ring and self.pinky


def hand_shape(points: Sequence[Point], cfg: Optional[ClassifierConfig] = None) -> Optional[HandShape]:
    """
    Compute hand size and finger extension for one frame.

    Returns None for malformed input or a degenerate (zero-size) hand.
    """
    cfg = cfg or ClassifierConfig()
    if not is_valid(points):
        return None

    size = hand_size(points)
    if size <= 0:
        return None

    ratios = (cfg.index_extension, cfg.middle_extension, cfg.ring_extension, cfg.pinky_extension)
    flags = []
    for (tip, mcp), ratio in zip(FINGERS, ratios):
        if cfg.extension_mode == "wrist":
            flags.append(is_extended_from_wrist(
                points, tip, mcp, cfg.wrist_extension_ratio, cfg.use_depth, cfg.depth_weight
            ))
        else:
            flags.append(is_extended(points, tip, mcp, size, ratio, cfg.use_depth, cfg.depth_weight))

    return HandShape(size, *flags)
