import random

import pytest

from interaction.config import Config, LotteryConfig
from interaction.landmarks import HandLandmarks

# Finger columns (MCP x) and rows, y grows downward
_FINGER_X = {"index": 0.45, "middle": 0.50, "ring": 0.55, "pinky": 0.60}
_MCP_Y = 0.60
_PIP_Y = 0.50
_TIP_UP_Y = 0.35
_TIP_DOWN_Y = 0.58

THUMB_OPEN_X = 0.30
THUMB_CLOSED_X = 0.52


def make_points(
    index=False, middle=False, ring=False, pinky=False,
    thumb_open=False, pinch=False, dx=0.0, dy=0.0,
):
    """21 landmarks for a simple upright hand with the given fingers up."""
    points = [None] * 21
    points[0] = (0.5, 0.8, 0.0)  # Wrist

    bases = {"index": 5, "middle": 9, "ring": 13, "pinky": 17}
    flags = {"index": index, "middle": middle, "ring": ring, "pinky": pinky}
    for name, base in bases.items():
        x = _FINGER_X[name]
        tip_y = _TIP_UP_Y if flags[name] else _TIP_DOWN_Y
        points[base] = (x, _MCP_Y, 0.0)
        points[base + 1] = (x, _PIP_Y, 0.0)
        points[base + 2] = (x, (_PIP_Y + tip_y) / 2, 0.0)
        points[base + 3] = (x, tip_y, 0.0)

    index_tip = points[8]
    if pinch:
        thumb_tip = (index_tip[0] + 0.01, index_tip[1] + 0.01, 0.0)
    else:
        thumb_tip = (THUMB_OPEN_X if thumb_open else THUMB_CLOSED_X, 0.55, 0.0)
    points[1] = (0.45, 0.75, 0.0)
    points[2] = (0.42, 0.68, 0.0)
    points[3] = ((0.42 + thumb_tip[0]) / 2, (0.68 + thumb_tip[1]) / 2, 0.0)
    points[4] = thumb_tip

    return [(x + dx, y + dy, z) for x, y, z in points]


def make_hand(**kwargs):
    return HandLandmarks.from_points(make_points(**kwargs))


def open_hand(**kw):
    return make_hand(index=True, middle=True, ring=True, pinky=True, thumb_open=True, **kw)


def fist(**kw):
    return make_hand(**kw)


def scissors(**kw):
    return make_hand(index=True, middle=True, **kw)


def ok_sign(**kw):
    return make_hand(index=True, middle=True, ring=True, pinky=True, pinch=True, **kw)


def heart_pair():
    """Two hands close enough that index tips and thumb tips touch."""
    return [fist(dx=-0.05), fist(dx=0.05)]


@pytest.fixture
def config():
    cfg = Config()
    cfg.passcode.enabled = False
    return cfg


@pytest.fixture
def lottery_config():
    return LotteryConfig()


@pytest.fixture
def rng():
    return random.Random(1234)


class SpyRandom(random.Random):
    """Counts every draw the lottery makes."""

    def __init__(self, seed=0):
        super().__init__(seed)
        self.calls = 0

    def random(self):
        self.calls += 1
        return super().random()

    def randrange(self, *args, **kwargs):
        self.calls += 1
        return super().randrange(*args, **kwargs)


@pytest.fixture
def spy_rng():
    return SpyRandom(99)
