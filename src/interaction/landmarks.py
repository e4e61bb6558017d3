"""
Hand landmark container shared by the tracker and the classifier.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple
import math

Point3D = Tuple[float, float, float]

LANDMARK_COUNT = 21


@dataclass(frozen=True)
class HandLandmarks:
    """
    Normalized hand landmarks for one detected hand.

    Attributes:
        landmarks: 21 (x, y, z) tuples, x/y normalized 0-1, y grows downward
        handedness: 'Left', 'Right' or 'Unknown'
        confidence: Detection confidence 0-1
    """
    landmarks: Tuple[Point3D, ...]
    handedness: str = "Unknown"
    confidence: float = 1.0

    # MediaPipe landmark indices for convenience
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20

    @classmethod
    def from_points(
        cls,
        points: Optional[Iterable[Sequence[float]]],
        handedness: str = "Unknown",
        confidence: float = 1.0,
    ) -> Optional["HandLandmarks"]:
        """
        Build landmarks from raw points, or None if the input is unusable.

        Camera input drops out all the time, so a wrong point count or a
        point that is not three finite numbers means "no hand", not an error.
        """
        if points is None:
            return None
        try:
            coords = tuple(
                (float(p[0]), float(p[1]), float(p[2])) for p in points
            )
        except (TypeError, ValueError, IndexError):
            return None
        if len(coords) != LANDMARK_COUNT:
            return None
        if not all(math.isfinite(v) for p in coords for v in p):
            return None
        return cls(landmarks=coords, handedness=handedness, confidence=confidence)

    def get(self, index: int) -> Point3D:
        """Get landmark by index."""
        return self.landmarks[index]

    @property
    def thumb_tip(self) -> Point3D:
        return self.landmarks[self.THUMB_TIP]

    @property
    def index_tip(self) -> Point3D:
        return self.landmarks[self.INDEX_TIP]

    @property
    def middle_tip(self) -> Point3D:
        return self.landmarks[self.MIDDLE_TIP]

    @property
    def ring_tip(self) -> Point3D:
        return self.landmarks[self.RING_TIP]

    @property
    def pinky_tip(self) -> Point3D:
        return self.landmarks[self.PINKY_TIP]

    @property
    def wrist(self) -> Point3D:
        return self.landmarks[self.WRIST]

    @property
    def center(self) -> Tuple[float, float]:
        """Cursor anchor: the middle finger MCP joint."""
        x, y, _ = self.landmarks[self.MIDDLE_MCP]
        return (x, y)

    @property
    def size(self) -> float:
        """Wrist to middle MCP distance, a proxy for distance to the camera."""
        return distance_2d(self.wrist, self.landmarks[self.MIDDLE_MCP])


def distance_2d(a: Sequence[float], b: Sequence[float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def distance_3d(a: Sequence[float], b: Sequence[float]) -> float:
    return math.sqrt(
        (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2
    )


# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]
