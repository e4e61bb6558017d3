import pytest

pytest.importorskip("PyQt5")
pytest.importorskip("cv2")
pytest.importorskip("mediapipe")

from interaction.engine import InteractionEngine
from interaction.gesture_recognizer import Gesture
from interaction.modes import Mode
from webcam.worker import WebcamWorker

from conftest import open_hand, scissors


@pytest.fixture
def worker(config):
    return WebcamWorker(config, engine=InteractionEngine(config))


def test_step_emits_state(worker):
    states = []
    worker.state_updated.connect(states.append)
    for i in range(10):
        worker.step([open_hand()], i * 0.05)
    assert len(states) == 10
    assert states[-1].gesture == Gesture.OPEN_HAND
    assert states[-1].mode == Mode.SCATTER


def test_step_without_sample_only_ticks(worker):
    state = worker.step(None, 1.0)
    assert state.raw_gesture == Gesture.NONE


def test_lottery_signals(worker):
    opened = []
    worker.lottery_open_requested.connect(lambda: opened.append(True))
    for i in range(10):
        worker.step([scissors()], i * 0.05)
    assert opened == [True]
    assert worker.engine.lottery.is_open


def test_posted_commands_run_before_frame(worker):
    worker.post(lambda engine: engine.click_tree())
    state = worker.step(None, 0.0)
    assert state.override == Mode.SCATTER
