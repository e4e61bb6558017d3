import pytest

from interaction.config import GestureConfig
from interaction.gesture_recognizer import Gesture, GestureRecognizer, classify
from interaction.landmarks import HandLandmarks

from conftest import fist, heart_pair, make_hand, make_points, ok_sign, open_hand, scissors


@pytest.fixture
def recognizer():
    return GestureRecognizer(GestureConfig())


@pytest.fixture
def simple():
    return GestureRecognizer(GestureConfig(profile="simple"))


@pytest.mark.parametrize("hand, expected", [
    (open_hand(), Gesture.OPEN_HAND),
    (fist(), Gesture.FIST),
    (scissors(), Gesture.SCISSORS),
    (ok_sign(), Gesture.OK),
    (make_hand(index=True), Gesture.NONE),
])
def test_single_hand_gestures(recognizer, hand, expected):
    assert recognizer.classify([hand]) == expected


def test_no_hands_is_neutral(recognizer):
    state = recognizer.recognize([])
    assert state.gesture == Gesture.NONE
    assert state.hand_position == (0.5, 0.5)
    assert state.hand_size == 0.0
    assert not state.has_hand
    assert recognizer.classify(None) == Gesture.NONE


def test_malformed_landmarks_are_no_hand(recognizer):
    assert HandLandmarks.from_points(make_points()[:20]) is None
    assert HandLandmarks.from_points([("a", 0, 0)] * 21) is None
    assert HandLandmarks.from_points([(float("nan"), 0, 0)] * 21) is None
    assert recognizer.classify([None]) == Gesture.NONE


def test_short_landmark_tuple_is_no_hand(recognizer):
    short = HandLandmarks(landmarks=tuple(make_points()[:20]))
    assert recognizer.classify([short]) == Gesture.NONE
    assert recognizer.classify([short, open_hand()]) == Gesture.OPEN_HAND


def test_raw_point_lists_are_accepted(recognizer):
    assert recognizer.classify([make_points()]) == Gesture.FIST
    assert recognizer.classify([make_points()[:20]]) == Gesture.NONE
    assert recognizer.classify([[("a", 0, 0)] * 21]) == Gesture.NONE


def test_malformed_entry_is_skipped(recognizer):
    assert recognizer.classify([None, fist()]) == Gesture.FIST


def test_two_hand_heart(recognizer):
    assert recognizer.classify(heart_pair()) == Gesture.HEART


def test_two_hands_apart_use_first_hand(recognizer):
    hands = [open_hand(dx=-0.3), fist(dx=0.3)]
    assert recognizer.classify(hands) == Gesture.OPEN_HAND


def test_heart_needs_wrists_below_fingertips(recognizer):
    flipped = [
        HandLandmarks.from_points([(x, 1.0 - y, z) for x, y, z in hand.landmarks])
        for hand in heart_pair()
    ]
    assert recognizer.classify(flipped) != Gesture.HEART


def test_pinch_blocks_open_hand(recognizer):
    # All four fingers up but the thumb touches the index tip
    assert recognizer.classify([ok_sign()]) == Gesture.OK


def test_thumb_open_with_fingers_down_is_not_fist(recognizer):
    assert recognizer.classify([make_hand(thumb_open=True)]) == Gesture.NONE


def test_pinch_threshold_is_tunable():
    tight = GestureRecognizer(GestureConfig(pinch_threshold=0.01))
    assert tight.classify([ok_sign()]) != Gesture.OK


def test_hand_measurements(recognizer):
    state = recognizer.recognize([fist(dx=0.1)])
    assert state.hand_position == pytest.approx((0.6, 0.6))
    assert state.hand_size == pytest.approx(0.2)
    assert state.hand_count == 1


def test_simple_profile_any_two_hands_is_heart(simple):
    assert simple.classify([open_hand(dx=-0.3), fist(dx=0.3)]) == Gesture.HEART


def test_simple_profile_fist_ignores_thumb(simple):
    assert simple.classify([make_hand(thumb_open=True)]) == Gesture.FIST


def test_simple_profile_three_fingers_is_open_hand(simple):
    assert simple.classify([make_hand(index=True, middle=True, ring=True)]) == Gesture.OPEN_HAND


def test_simple_profile_ok(simple):
    assert simple.classify([ok_sign()]) == Gesture.OK


def test_classify_shortcut():
    assert classify([scissors()]) == Gesture.SCISSORS
