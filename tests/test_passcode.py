from interaction.config import PasscodeConfig
from interaction.gesture_recognizer import Gesture
from interaction.hit_test import Rect
from interaction.passcode import PasscodeGate

VIEWPORT = (1000, 1000)
BUTTON = Rect(400, 400, 600, 500)


def gate(code="1234"):
    g = PasscodeGate(PasscodeConfig(code=code, hit_padding=15, error_flash=0.5))
    g.submit_target.layout(BUTTON)
    return g


def type_code(g, code):
    for digit in code:
        g.type_digit(digit)


def test_correct_code_unlocks():
    g = gate()
    type_code(g, "1234")
    assert g.complete
    assert g.submit(0.0)
    assert g.unlocked
    assert not g.submit(0.1)


def test_wrong_code_clears_and_flashes():
    g = gate()
    type_code(g, "9999")
    assert not g.submit(1.0)
    assert g.code == ""
    assert not g.unlocked
    assert g.is_error(1.2)
    assert not g.is_error(1.5)


def test_typing_is_limited_to_digits_and_length():
    g = gate()
    type_code(g, "12a345")
    assert g.code == "1234"
    assert g.backspace() == "123"


def test_gesture_submit_needs_complete_code():
    g = gate()
    type_code(g, "12")
    assert not g.handle_select((0.5, 0.45), VIEWPORT, Gesture.FIST, 0.0)
    assert g.submit_target.hovering
    assert not g.unlocked

    type_code(g, "34")
    assert g.handle_select((0.5, 0.45), VIEWPORT, Gesture.OK, 0.1)
    assert g.unlocked


def test_gesture_submit_outside_button():
    g = gate()
    type_code(g, "1234")
    assert not g.handle_select((0.1, 0.1), VIEWPORT, Gesture.FIST, 0.0)
    assert not g.unlocked


def test_failed_gesture_submit_can_retry():
    g = gate()
    type_code(g, "0000")
    assert not g.handle_select((0.5, 0.45), VIEWPORT, Gesture.FIST, 0.0)
    assert g.is_error(0.1)

    type_code(g, "1234")
    assert g.handle_select((0.5, 0.45), VIEWPORT, Gesture.FIST, 1.0)


def test_disabled_gate_starts_unlocked():
    g = PasscodeGate(PasscodeConfig(enabled=False))
    assert g.unlocked
