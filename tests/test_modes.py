import itertools

import pytest

from interaction.gesture_recognizer import Gesture
from interaction.modes import Mode, ModeController, resolve_mode


@pytest.mark.parametrize("gesture, expected", [
    (Gesture.OPEN_HAND, Mode.SCATTER),
    (Gesture.FIST, Mode.TREE),
    (Gesture.SCISSORS, Mode.TREE),
    (Gesture.NONE, Mode.TREE),
    (Gesture.OK, Mode.TREE),
    (Gesture.HEART, Mode.HEART),
])
def test_gesture_mapping(gesture, expected):
    assert resolve_mode(gesture, None, False) == expected


def test_heart_beats_override():
    assert resolve_mode(Gesture.HEART, Mode.SCATTER, False) == Mode.HEART


def test_override_beats_mapping():
    assert resolve_mode(Gesture.FIST, Mode.SCATTER, False) == Mode.SCATTER


def test_lottery_forces_tree():
    for gesture, override in itertools.product(Gesture, [None, *Mode]):
        assert resolve_mode(gesture, override, True) == Mode.TREE


def test_open_hand_sets_override():
    modes = ModeController()
    assert modes.on_commit(Gesture.OPEN_HAND, False) is False
    assert modes.override == Mode.SCATTER
    # Stays scattered after the hand drops
    assert modes.resolve(Gesture.NONE, False) == Mode.SCATTER


def test_fist_clears_override_and_focus():
    modes = ModeController()
    modes.on_commit(Gesture.OPEN_HAND, False)
    modes.click_item(3, False)
    modes.on_commit(Gesture.FIST, False)
    assert modes.override is None
    assert modes.focused_item is None


def test_scissors_requests_lottery():
    modes = ModeController()
    assert modes.on_commit(Gesture.SCISSORS, False) is True
    assert modes.override is None


def test_commits_ignored_while_lottery_active():
    modes = ModeController()
    assert modes.on_commit(Gesture.SCISSORS, True) is False
    modes.on_commit(Gesture.OPEN_HAND, True)
    assert modes.override is None


def test_click_item_toggles_focus():
    modes = ModeController()
    assert modes.click_item(4, False) == 4
    assert modes.click_item(5, False) == 5
    assert modes.click_item(5, False) is None
    modes.click_item(1, False)
    assert modes.click_item(2, True) == 1
    modes.clear_focus()
    assert modes.focused_item is None


def test_click_tree_scatters_only_from_tree():
    modes = ModeController()
    modes.click_tree(Gesture.HEART, False)
    assert modes.override is None
    modes.click_tree(Gesture.NONE, True)
    assert modes.override is None
    modes.click_tree(Gesture.NONE, False)
    assert modes.override == Mode.SCATTER
