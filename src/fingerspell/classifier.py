"""
Fingerspelling classifier.

Maps one frame of hand landmarks to a symbol through an ordered rule table.
Rules overlap on purpose: the first match wins, so the order below is part
of the behaviour and must not be shuffled.
"""
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional, Sequence
import logging

from .config import ClassifierConfig
from .geometry import HandShape, distance, hand_shape
from .landmarks import HandLandmarks as L, Point, as_points
from .symbols import NO_SYMBOL, OPEN_HAND
from .wave import WaveDetector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandFeatures:
    """Distances and positions the rules look at, normalized by hand size."""
    shape: HandShape
    pointing_down: bool        # Index tip below the wrist
    index_dx: float            # Index tip vs knuckle, horizontal
    index_dy: float            # Index tip vs knuckle, vertical
    index_drop: float          # Index tip below its PIP joint (negative = above)
    index_reach: float         # Index tip to index knuckle
    tip_gap: float             # Index tip to middle tip
    tips_dx: float             # Index tip to middle tip, horizontal
    tips_crossed: bool         # Index/middle tips swapped relative to their knuckles
    thumb_index_mcp: float     # Thumb tip to index knuckle
    thumb_index_tip: float     # Thumb tip to index tip
    thumb_pinky_tip: float     # Thumb tip to pinky tip
    thumb_middle_mcp: float    # Thumb tip to middle knuckle
    thumb_fingertip: float     # Thumb tip to nearest non-thumb fingertip
    thumb_lateral: float       # Thumb tip along the index->pinky knuckle axis
    thumb_rise_index: float    # Thumb tip above index knuckle
    thumb_rise_middle: float   # Thumb tip above middle knuckle
    thumb_x_index: float       # Horizontal offsets from each knuckle
    thumb_x_middle: float
    thumb_x_ring: float
    thumb_x_pinky: float

    @property
    def pattern(self) -> str:
        return self.shape.pattern


def extract_features(
    points: Sequence[Point],
    shape: HandShape,
    cfg: ClassifierConfig,
) -> HandFeatures:
    """Build the feature record for one valid landmark set."""
    size = shape.hand_size

    def dist(a: int, b: int) -> float:
        return distance(points, a, b, cfg.use_depth, cfg.depth_weight) / size

    def dx(a: int, b: int) -> float:
        return abs(points[a][0] - points[b][0]) / size

    thumb = points[L.THUMB_TIP]
    index_mcp = points[L.INDEX_MCP]
    pinky_mcp = points[L.PINKY_MCP]

    # Lateral axis: index knuckle to pinky knuckle
    lx, ly = pinky_mcp[0] - index_mcp[0], pinky_mcp[1] - index_mcp[1]
    mag_l = (lx*lx + ly*ly) ** 0.5
    if mag_l > 0:
        tx, ty = thumb[0] - index_mcp[0], thumb[1] - index_mcp[1]
        thumb_lateral = (tx*lx + ty*ly) / mag_l / size
    else:
        thumb_lateral = 0.0

    crossed = (
        (points[L.INDEX_TIP][0] - points[L.MIDDLE_TIP][0])
        * (points[L.INDEX_MCP][0] - points[L.MIDDLE_MCP][0])
    ) < 0

    return HandFeatures(
        shape=shape,
        pointing_down=points[L.INDEX_TIP][1] > points[L.WRIST][1],
        index_dx=dx(L.INDEX_TIP, L.INDEX_MCP),
        index_dy=abs(points[L.INDEX_TIP][1] - points[L.INDEX_MCP][1]) / size,
        index_drop=(points[L.INDEX_TIP][1] - points[L.INDEX_PIP][1]) / size,
        index_reach=dist(L.INDEX_TIP, L.INDEX_MCP),
        tip_gap=dist(L.INDEX_TIP, L.MIDDLE_TIP),
        tips_dx=dx(L.INDEX_TIP, L.MIDDLE_TIP),
        tips_crossed=crossed,
        thumb_index_mcp=dist(L.THUMB_TIP, L.INDEX_MCP),
        thumb_index_tip=dist(L.THUMB_TIP, L.INDEX_TIP),
        thumb_pinky_tip=dist(L.THUMB_TIP, L.PINKY_TIP),
        thumb_middle_mcp=dist(L.THUMB_TIP, L.MIDDLE_MCP),
        thumb_fingertip=min(
            dist(L.THUMB_TIP, tip) for tip in (L.INDEX_TIP, L.MIDDLE_TIP, L.RING_TIP, L.PINKY_TIP)
        ),
        thumb_lateral=thumb_lateral,
        thumb_rise_index=(index_mcp[1] - thumb[1]) / size,
        thumb_rise_middle=(points[L.MIDDLE_MCP][1] - thumb[1]) / size,
        thumb_x_index=dx(L.THUMB_TIP, L.INDEX_MCP),
        thumb_x_middle=dx(L.THUMB_TIP, L.MIDDLE_MCP),
        thumb_x_ring=dx(L.THUMB_TIP, L.RING_MCP),
        thumb_x_pinky=dx(L.THUMB_TIP, L.PINKY_MCP),
    )


class Rule(NamedTuple):
    symbol: str
    when: Callable[[HandFeatures, ClassifierConfig], bool]


def _sideways(f: HandFeatures, t: ClassifierConfig) -> bool:
    return (
        f.shape.index and not f.shape.ring and not f.shape.pinky
        and f.index_dx > f.index_dy * t.horizontal_ratio
    )


def _fist_c(f: HandFeatures, t: ClassifierConfig) -> bool:
    return (
        t.fist_c_reach_min <= f.index_reach < t.fist_c_reach_max
        and t.fist_c_gap_min <= f.thumb_index_tip <= t.fist_c_gap_max
    )


RULES = (
    # Hand pointing down; overlaps D and K, so it goes first
    Rule("Q", lambda f, t: f.pointing_down and f.pattern == "1000"),
    Rule("P", lambda f, t: f.pointing_down and f.pattern == "1100"),

    # Index held sideways
    Rule("G", lambda f, t: _sideways(f, t) and not f.shape.middle),
    Rule("H", lambda f, t: _sideways(f, t) and f.shape.middle),

    # Index only
    Rule("L", lambda f, t: f.pattern == "1000" and f.thumb_index_mcp > t.l_thumb_spread),
    Rule("X", lambda f, t: f.pattern == "1000" and f.index_drop > -t.x_hook_drop),
    Rule("D", lambda f, t: f.pattern == "1000"),

    # Index + middle
    Rule("R", lambda f, t: f.pattern == "1100" and f.tips_crossed and f.tips_dx < t.r_cross_gap),
    Rule("K", lambda f, t: f.pattern == "1100" and f.thumb_rise_middle > t.k_thumb_rise),
    Rule("V", lambda f, t: f.pattern == "1100" and f.tip_gap > t.v_tip_spread),
    Rule("U", lambda f, t: f.pattern == "1100"),

    # Three or four
    Rule("W", lambda f, t: f.pattern == "1110"),
    Rule("B", lambda f, t: f.pattern == "1111" and f.thumb_lateral > -t.b_thumb_tuck),
    Rule("C", lambda f, t: (
        f.pattern == "1111"
        and f.thumb_index_tip < t.c_thumb_gap
        and f.index_reach < t.c_index_reach
    )),
    Rule(OPEN_HAND, lambda f, t: f.pattern == "1111"),

    Rule("F", lambda f, t: f.pattern == "0111" and f.thumb_index_tip < t.f_thumb_gap),

    # Pinky only
    Rule("Y", lambda f, t: f.pattern == "0001" and f.thumb_pinky_tip > t.y_thumb_spread),
    Rule("I", lambda f, t: f.pattern == "0001"),

    # Fist family
    Rule("O", lambda f, t: (
        f.pattern == "0000"
        and f.index_reach > t.o_index_reach
        and f.thumb_index_tip < t.o_thumb_gap
    )),
    Rule("C", lambda f, t: f.pattern == "0000" and _fist_c(f, t)),
    Rule("S", lambda f, t: (
        f.pattern == "0000"
        and f.thumb_fingertip < t.se_thumb_reach
        and f.thumb_middle_mcp < t.s_thumb_knuckle
    )),
    Rule("E", lambda f, t: f.pattern == "0000" and f.thumb_fingertip < t.se_thumb_reach),
    Rule("A", lambda f, t: (
        f.pattern == "0000"
        and f.thumb_lateral < -t.a_thumb_side
        and f.thumb_rise_index > t.a_thumb_rise
    )),
    Rule("M", lambda f, t: f.pattern == "0000" and min(f.thumb_x_ring, f.thumb_x_pinky) < t.mnt_tolerance),
    Rule("N", lambda f, t: f.pattern == "0000" and f.thumb_x_middle < t.mnt_tolerance),
    Rule("T", lambda f, t: f.pattern == "0000" and f.thumb_x_index < t.mnt_tolerance),
    Rule("S", lambda f, t: f.pattern == "0000"),
)


class SignClassifier:
    """
    Classifies a single hand pose into a fingerspelling letter.

    Without a wave detector this is a pure function of the landmarks. With
    one, a completed wave takes priority over every letter and the detector's
    cycle count is reset through `WaveDetector.reset_cycles`.
    """

    def __init__(self, config: Optional[ClassifierConfig] = None, rules=RULES):
        self._config = config or ClassifierConfig()
        self._rules = tuple(rules)

    def shape(self, hand) -> Optional[HandShape]:
        """Hand size and extension flags, or None for malformed input."""
        return hand_shape(as_points(hand), self._config)

    def classify(self, hand, wave: Optional[WaveDetector] = None) -> str:
        """
        Classify one frame.

        Args:
            hand: HandLandmarks or a sequence of 21 points
            wave: Wave detector already updated for this frame

        Returns:
            A letter, the wave word, OPEN_HAND, or NO_SYMBOL for malformed input.
        """
        points = as_points(hand)
        shape = hand_shape(points, self._config)
        if shape is None:
            logger.debug("Malformed landmark set, no symbol")
            return NO_SYMBOL

        if wave is not None and shape.all_extended and wave.detected:
            wave.reset_cycles()
            logger.debug("Wave detected")
            return wave.word

        features = extract_features(points, shape, self._config)
        for rule in self._rules:
            if rule.when(features, self._config):
                return rule.symbol
        return OPEN_HAND
