import pytest

from interaction.errors import LayoutError
from interaction.gesture_recognizer import Gesture
from interaction.hit_test import HitTarget, Rect, is_hovering, is_select

VIEWPORT = (1000.0, 1000.0)
TARGET = Rect(100, 100, 150, 150)


def test_inside_target():
    assert is_hovering((0.105, 0.105), TARGET, VIEWPORT, padding=20)


def test_far_from_target():
    assert not is_hovering((0.4, 0.4), TARGET, VIEWPORT, padding=20)


def test_padding_extends_target():
    assert is_hovering((0.085, 0.085), TARGET, VIEWPORT, padding=20)
    assert is_hovering((0.169, 0.169), TARGET, VIEWPORT, padding=20)
    assert not is_hovering((0.079, 0.12), TARGET, VIEWPORT, padding=20)
    assert not is_hovering((0.085, 0.085), TARGET, VIEWPORT, padding=0)


def test_viewport_scaling():
    assert is_hovering((0.5, 0.5), Rect(630, 350, 650, 370), (1280, 720), padding=0)


def test_unlaid_target_fails_fast():
    with pytest.raises(LayoutError):
        is_hovering((0.5, 0.5), None, VIEWPORT)


@pytest.mark.parametrize("gesture, expected", [
    (Gesture.FIST, True),
    (Gesture.OK, True),
    (Gesture.OPEN_HAND, False),
    (Gesture.NONE, False),
])
def test_select_gestures(gesture, expected):
    assert is_select(True, gesture) is expected
    assert is_select(False, gesture) is False


def test_rect_from_size():
    assert Rect.from_size(10, 20, 30, 40) == Rect(10, 20, 40, 60)


def test_target_selects_once_per_layout():
    target = HitTarget("button", padding=20)
    target.layout(TARGET)
    assert target.select((0.12, 0.12), VIEWPORT, Gesture.FIST)
    assert target.hovering
    assert not target.select((0.12, 0.12), VIEWPORT, Gesture.FIST)

    target.layout(TARGET)
    assert target.select((0.12, 0.12), VIEWPORT, Gesture.OK)


def test_target_hover_without_select():
    target = HitTarget("button")
    target.layout(TARGET)
    assert not target.select((0.12, 0.12), VIEWPORT, Gesture.OPEN_HAND)
    assert target.hovering
