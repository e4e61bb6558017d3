"""
Gesture recognition from hand landmarks.
Classifies a single frame of zero, one or two hands into a gesture symbol.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple
import logging

from .config import GestureConfig
from .landmarks import LANDMARK_COUNT, HandLandmarks, distance_2d, distance_3d

logger = logging.getLogger(__name__)


class Gesture(Enum):
    """Detected gesture types."""
    NONE = "NONE"
    OPEN_HAND = "OPEN_HAND"  # Scatter
    FIST = "FIST"            # Assemble the tree / select
    HEART = "HEART"          # Two-hand heart
    SCISSORS = "SCISSORS"    # Make a wish (opens the lottery)
    OK = "OK"                # Select


# Labels shown in the gesture legend
GESTURE_LABELS = {
    Gesture.FIST: "ASSEMBLE",
    Gesture.OPEN_HAND: "SCATTER",
    Gesture.HEART: "Rua Says",
    Gesture.SCISSORS: "WISH",
}

SELECT_GESTURES = frozenset({Gesture.FIST, Gesture.OK})

NEUTRAL_CENTER = (0.5, 0.5)


@dataclass(frozen=True)
class FingerState:
    """Per-finger open flags for one hand."""
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool
    pinch: bool

    @property
    def up_count(self) -> int:
        """Extended fingers, thumb excluded."""
        return sum((self.index, self.middle, self.ring, self.pinky))

    @property
    def all_open(self) -> bool:
        return self.thumb and self.up_count == 4

    @property
    def all_closed(self) -> bool:
        return not self.thumb and self.up_count == 0


@dataclass(frozen=True)
class GestureState:
    """Raw per-frame classification with hand measurements."""
    gesture: Gesture
    hand_position: Tuple[float, float] = NEUTRAL_CENTER  # Unmirrored camera space
    hand_size: float = 0.0
    hand_count: int = 0
    fingers: Optional[FingerState] = None

    @property
    def has_hand(self) -> bool:
        return self.hand_count > 0


def _usable_hand(hand) -> Optional[HandLandmarks]:
    """A well-formed HandLandmarks for this entry, or None."""
    if hand is None:
        return None
    if isinstance(hand, HandLandmarks):
        if len(hand.landmarks) == LANDMARK_COUNT:
            return hand
        return HandLandmarks.from_points(hand.landmarks, hand.handedness, hand.confidence)
    return HandLandmarks.from_points(hand)


class GestureRecognizer:
    """
    Recognizes gestures from hand landmarks.

    Gestures detected, first match wins:
    - Heart: two hands, index tips and thumb tips touching, wrists below tips
    - Open hand: all five fingers extended, not pinching
    - Fist: all five fingers curled
    - Scissors: index and middle up, ring and pinky down, not pinching
    - OK: thumb-index pinch with the other three fingers up

    The "simple" profile reproduces the older single-hand heuristic, where any
    two hands count as a heart and the thumb is ignored.
    """

    def __init__(self, config: Optional[GestureConfig] = None):
        """
        Initialize gesture recognizer.

        Args:
            config: Gesture detection thresholds
        """
        self._config = config or GestureConfig()

    @property
    def config(self) -> GestureConfig:
        return self._config

    def recognize(self, hands: Optional[Sequence[Optional[HandLandmarks]]]) -> GestureState:
        """
        Classify one frame.

        Args:
            hands: Up to two detected hands. Raw point lists are accepted;
                   malformed entries are dropped, so a frame with nothing
                   usable is just NONE.
        """
        valid = [h for h in map(_usable_hand, hands or ()) if h is not None]
        if len(valid) < len(hands or ()):
            logger.debug("Dropped %d malformed hand(s)", len(hands) - len(valid))
        if not valid:
            return GestureState(gesture=Gesture.NONE)

        primary = valid[0]
        fingers = self._finger_state(primary)

        if self._config.profile == "simple":
            gesture = self._determine_simple(valid, fingers)
        else:
            gesture = self._determine_gesture(valid, fingers)

        return GestureState(
            gesture=gesture,
            hand_position=primary.center,
            hand_size=primary.size,
            hand_count=len(valid),
            fingers=fingers,
        )

    def classify(self, hands: Optional[Sequence[Optional[HandLandmarks]]]) -> Gesture:
        """Gesture symbol only, see recognize()."""
        return self.recognize(hands).gesture

    def _finger_state(self, landmarks: HandLandmarks) -> FingerState:
        """A finger is open when its tip sits above its PIP joint."""
        def up(tip: int, pip: int) -> bool:
            return landmarks.get(tip)[1] < landmarks.get(pip)[1]

        thumb_open = abs(
            landmarks.thumb_tip[0] - landmarks.get(HandLandmarks.PINKY_MCP)[0]
        ) > self._config.thumb_open_distance

        return FingerState(
            thumb=thumb_open,
            index=up(HandLandmarks.INDEX_TIP, HandLandmarks.INDEX_PIP),
            middle=up(HandLandmarks.MIDDLE_TIP, HandLandmarks.MIDDLE_PIP),
            ring=up(HandLandmarks.RING_TIP, HandLandmarks.RING_PIP),
            pinky=up(HandLandmarks.PINKY_TIP, HandLandmarks.PINKY_PIP),
            pinch=self._is_pinching(landmarks),
        )

    def _is_pinching(self, landmarks: HandLandmarks) -> bool:
        if self._config.profile == "simple":
            return distance_2d(
                landmarks.thumb_tip, landmarks.index_tip
            ) < self._config.simple_pinch_threshold
        return distance_3d(
            landmarks.thumb_tip, landmarks.index_tip
        ) < self._config.pinch_threshold

    def _is_heart(self, first: HandLandmarks, second: HandLandmarks) -> bool:
        limit = self._config.heart_distance
        if distance_2d(first.index_tip, second.index_tip) >= limit:
            return False
        if distance_2d(first.thumb_tip, second.thumb_tip) >= limit:
            return False
        # Image y grows downward: wrists must hang below the fingertips
        return all(h.wrist[1] > h.index_tip[1] for h in (first, second))

    def _determine_gesture(self, hands: Sequence[HandLandmarks], f: FingerState) -> Gesture:
        """Determine the gesture, two-hand aware profile."""
        if len(hands) >= 2 and self._is_heart(hands[0], hands[1]):
            return Gesture.HEART

        if f.all_open and not f.pinch:
            return Gesture.OPEN_HAND
        if f.all_closed:
            return Gesture.FIST
        if f.index and f.middle and not f.ring and not f.pinky and not f.pinch:
            return Gesture.SCISSORS
        if f.pinch and f.middle and f.ring and f.pinky:
            return Gesture.OK
        return Gesture.NONE

    @staticmethod
    def _determine_simple(hands: Sequence[HandLandmarks], f: FingerState) -> Gesture:
        """Determine the gesture, older single-hand heuristic."""
        if len(hands) >= 2:
            return Gesture.HEART
        if f.pinch and f.middle and f.ring:
            return Gesture.OK
        if f.up_count == 0:
            return Gesture.FIST
        if f.up_count >= 3:
            return Gesture.OPEN_HAND
        if f.up_count == 2 and f.index and f.middle:
            return Gesture.SCISSORS
        return Gesture.NONE


def classify(
    hands: Optional[Sequence[Optional[HandLandmarks]]],
    config: Optional[GestureConfig] = None,
) -> Gesture:
    """Stateless shortcut for one-off classification."""
    return GestureRecognizer(config).classify(hands)
