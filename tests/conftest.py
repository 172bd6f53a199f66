import pytest

# Upright hand in normalized image coordinates (y grows downwards).
# Wrist to middle knuckle is 0.2, so hand size is 0.2 for every pose.
WRIST = (0.50, 0.80)
THUMB_BASE = [(0.45, 0.75), (0.41, 0.71), (0.38, 0.67)]
KNUCKLES = [(0.44, 0.62), (0.50, 0.60), (0.56, 0.62), (0.61, 0.65)]


def _finger(mcp, extended):
    x, y = mcp
    if extended:
        return [(x, y), (x, y - 0.06), (x, y - 0.10), (x, y - 0.14)]
    return [(x, y), (x, y - 0.04), (x, y - 0.01), (x, y + 0.02)]


def build_hand(pattern="0000", thumb=(0.36, 0.63), tips=None, offset=(0.0, 0.0)):
    """
    21 (x, y, z) points.

    pattern: extension of index, middle, ring, pinky, e.g. "1100"
    thumb: thumb tip position
    tips: {landmark index: (x, y)} overrides
    offset: shift applied to every point
    """
    points = [WRIST] + THUMB_BASE + [thumb]
    for mcp, flag in zip(KNUCKLES, pattern):
        points.extend(_finger(mcp, flag == "1"))
    for idx, pos in (tips or {}).items():
        points[idx] = pos
    dx, dy = offset
    return [(x + dx, y + dy, 0.0) for x, y in points]


POSES = {
    "D": dict(pattern="1000", thumb=(0.49, 0.60)),
    "L": dict(pattern="1000", thumb=(0.26, 0.68)),
    "X": dict(pattern="1000", thumb=(0.49, 0.60), tips={8: (0.34, 0.54)}),
    "G": dict(pattern="1000", thumb=(0.49, 0.60), tips={8: (0.30, 0.61)}),
    "H": dict(pattern="1100", thumb=(0.49, 0.60), tips={8: (0.30, 0.61), 12: (0.36, 0.59)}),
    "Q": dict(pattern="1000", thumb=(0.49, 0.60), tips={8: (0.44, 0.84)}),
    "P": dict(pattern="1100", thumb=(0.49, 0.60), tips={8: (0.44, 0.84), 12: (0.50, 0.84)}),
    "R": dict(pattern="1100", thumb=(0.55, 0.66), tips={8: (0.51, 0.48), 12: (0.49, 0.46)}),
    "K": dict(pattern="1100", thumb=(0.47, 0.55)),
    "V": dict(pattern="1100", thumb=(0.55, 0.66), tips={8: (0.40, 0.49), 12: (0.54, 0.47)}),
    "U": dict(pattern="1100", thumb=(0.55, 0.66)),
    "W": dict(pattern="1110", thumb=(0.60, 0.68)),
    "B": dict(pattern="1111", thumb=(0.52, 0.68)),
    "OPEN_HAND": dict(pattern="1111", thumb=(0.30, 0.66)),
    "F": dict(pattern="0111", thumb=(0.43, 0.62)),
    "Y": dict(pattern="0001", thumb=(0.30, 0.66)),
    "I": dict(pattern="0001", thumb=(0.50, 0.66)),
    "O": dict(pattern="0000", thumb=(0.41, 0.56), tips={8: (0.40, 0.53)}),
    "S": dict(pattern="0000", thumb=(0.49, 0.63)),
    "E": dict(pattern="0000", thumb=(0.50, 0.71), tips={
        8: (0.44, 0.68), 12: (0.50, 0.68), 16: (0.56, 0.69), 20: (0.61, 0.70),
    }),
    "A": dict(pattern="0000", thumb=(0.38, 0.58)),
    "T": dict(pattern="0000", thumb=(0.45, 0.56)),
    "N": dict(pattern="0000", thumb=(0.51, 0.55)),
    "M": dict(pattern="0000", thumb=(0.57, 0.55)),
}


@pytest.fixture
def make_hand():
    return build_hand


@pytest.fixture
def pose():
    """pose("D") -> points for that letter; extra kwargs override the pose."""
    def _pose(name, **overrides):
        kwargs = dict(POSES[name])
        kwargs.update(overrides)
        return build_hand(**kwargs)
    return _pose
