"""
Background worker for MediaPipe hand tracking and the interaction engine.
Runs in a separate QThread to avoid blocking the UI.
"""
import queue
import time
import threading
from typing import Callable, List, Optional
from PyQt5.QtCore import QObject, pyqtSignal

from interaction.engine import InteractionEngine
from interaction.landmarks import HandLandmarks

from .hand_tracker import HandTracker


class WebcamWorker(QObject):
    """
    Worker class that runs the frame loop.
    Emits signals for UI updates.

    UI-thread calls (pointer moves, clicks, keypad) are queued with `post()`
    and applied inside the loop, so the engine only ever runs on this thread.
    """
    # Signals
    state_updated = pyqtSignal(object)  # Emits FrameState
    lottery_open_requested = pyqtSignal()
    lottery_completed = pyqtSignal(object)  # Prize label or None
    frame_ready = pyqtSignal(object)  # Emits numpy array (BGR frame with landmarks)
    error = pyqtSignal(str)

    def __init__(self, config, engine: Optional[InteractionEngine] = None,
                 tracker: Optional[HandTracker] = None, parent=None):
        super().__init__(parent)
        self._config = config
        self._engine = engine or InteractionEngine(config)
        self._tracker = tracker
        self._is_running = False

        self._engine.on_lottery_open_requested = self.lottery_open_requested.emit
        self._engine.on_lottery_completed = self.lottery_completed.emit

        self._commands: "queue.SimpleQueue[Callable[[InteractionEngine], None]]" = queue.SimpleQueue()

        # Capture runs on its own thread; the loop consumes the latest sample
        self._latest_hands: Optional[List[HandLandmarks]] = None
        self._hands_lock = threading.Lock()
        self._capture_thread: Optional[threading.Thread] = None

    @property
    def engine(self) -> InteractionEngine:
        return self._engine

    def post(self, command: Callable[[InteractionEngine], None]) -> None:
        """Run `command(engine)` on the worker thread before the next frame."""
        self._commands.put(command)

    def _drain_commands(self) -> None:
        while True:
            try:
                command = self._commands.get_nowait()
            except queue.Empty:
                return
            command(self._engine)

    def _capture_loop(self):
        """Background thread to pull camera frames as fast as possible."""
        while self._is_running:
            try:
                hands = self._tracker.get_hands()
                if hands is None:
                    time.sleep(0.005)
                    continue
                with self._hands_lock:
                    self._latest_hands = hands
            except Exception as e:
                print(f"Capture thread error: {e}")
                time.sleep(0.1) # Cool down on error

    def step(self, hands: Optional[List[HandLandmarks]], now: float):
        """One loop iteration: queued commands, then a sample or a timer tick."""
        self._drain_commands()
        if hands is not None:
            state = self._engine.process_frame(hands, now)
        else:
            state = self._engine.tick(now)
        self.state_updated.emit(state)
        return state

    def start_process(self):
        """Main processing loop. Runs in worker thread."""
        if self._tracker is None:
            self._tracker = HandTracker(self._config)

        if not self._tracker.start():
            self.error.emit("Could not open camera")
            return

        self._is_running = True

        self._capture_thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._capture_thread.start()

        last_frame_time = 0
        min_interval = 1.0 / 60
        frame_interval = 1.0 / 5  # Low FPS for the landmarks preview

        try:
            while self._is_running:
                loop_start = time.perf_counter()

                # 1. Take the latest sample (if any) from the capture thread
                with self._hands_lock:
                    hands = self._latest_hands
                    self._latest_hands = None # Consume it

                # 2. Advance the engine
                now = time.monotonic()
                self.step(hands, now)

                # 3. Emit webcam frame only if preview is enabled
                if self._config.ui.debug_overlay and hands is not None:
                    if now - last_frame_time >= frame_interval:
                        frame = self._tracker.get_frame_with_landmarks(hands, black_background=True)
                        if frame is not None:
                            self.frame_ready.emit(frame)
                        last_frame_time = now

                # 4. Sleep off the rest of the frame
                elapsed = time.perf_counter() - loop_start
                sleep_time = min_interval - elapsed
                if sleep_time > 0:
                    time.sleep(sleep_time)

        except Exception as e:
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            if self._capture_thread:
                self._capture_thread.join(timeout=1.0)
            if self._tracker:
                self._tracker.stop()

    def stop_process(self):
        """Signal the loop to stop and release resources in worker thread."""
        self._is_running = False
