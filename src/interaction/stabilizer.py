"""
Debounce for the raw per-frame gesture stream.
"""
from dataclasses import dataclass
from typing import Optional
import logging

from .gesture_recognizer import Gesture

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GestureTransition:
    """Committed gesture changed from `previous` to `current` at `time`."""
    previous: Gesture
    current: Gesture
    time: float


class GestureStabilizer:
    """
    Commits a raw gesture once it has been seen continuously for longer than
    the stabilize window.

    Any change in the raw stream restarts the window, including a flicker back
    to the committed value, so a single-frame outlier never flips the commit
    and a stream that keeps alternating never commits at all.
    """

    def __init__(self, window: float = 0.2):
        """
        Args:
            window: Seconds a raw gesture must hold before it commits
        """
        self._window = window
        self.reset()

    def reset(self, gesture: Gesture = Gesture.NONE, now: float = 0.0) -> None:
        """Force pending and committed state, dropping any unconsumed transition."""
        self._pending = gesture
        self._pending_since = now
        self._committed = gesture
        self._transition: Optional[GestureTransition] = None

    def update(self, raw: Gesture, now: float) -> Gesture:
        """
        Feed one raw sample.

        Args:
            raw: This frame's classification
            now: Sample time in seconds (monotonic)

        Returns:
            The committed gesture after this sample.
        """
        if raw != self._pending:
            self._pending = raw
            self._pending_since = now
        elif now - self._pending_since > self._window and raw != self._committed:
            previous = self._committed
            self._committed = raw
            self._transition = GestureTransition(previous, raw, now)
            logger.debug("Gesture committed: %s -> %s", previous.name, raw.name)
        return self._committed

    def pop_transition(self) -> Optional[GestureTransition]:
        """Return the last commit transition once, then None until the next one."""
        transition, self._transition = self._transition, None
        return transition

    @property
    def committed(self) -> Gesture:
        return self._committed

    @property
    def pending(self) -> Gesture:
        return self._pending

    @property
    def pending_since(self) -> float:
        return self._pending_since

    @property
    def window(self) -> float:
        return self._window
