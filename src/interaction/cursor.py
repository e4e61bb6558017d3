"""
Virtual cursor fed by hand tracking and an optional pointer device.
"""
from typing import Optional, Tuple

Position = Tuple[float, float]


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


class CursorTracker:
    """
    Merges hand and pointer samples into one normalized cursor.

    A pointer move takes over the cursor immediately and keeps it for
    `pointer_timeout` seconds; hand samples arriving during that window are
    ignored. Hand x is mirrored to match the mirrored camera preview, so every
    position this class reports is already in screen space.

    Also owns the smoothed hand size: it snaps to each measurement and decays
    by `size_decay` per update while no hand is seen.
    """

    def __init__(
        self,
        pointer_timeout: float = 1.5,
        size_decay: float = 0.05,
        mirror: bool = True,
    ):
        self._pointer_timeout = pointer_timeout
        self._size_decay = size_decay
        self._mirror = mirror

        self._position: Position = (0.5, 0.5)
        self._pointer_time: Optional[float] = None
        self._hand_size = 0.0

    def pointer_move(self, pos: Position, now: float) -> Position:
        """Record a pointer sample (already normalized to the viewport)."""
        self._pointer_time = now
        self._position = (_clamp01(pos[0]), _clamp01(pos[1]))
        return self._position

    def pointer_active(self, now: float) -> bool:
        """True while a recent pointer move pre-empts hand input."""
        if self._pointer_time is None:
            return False
        return now - self._pointer_time <= self._pointer_timeout

    def update(
        self,
        hand_pos: Optional[Position],
        now: float,
        pointer_pos: Optional[Position] = None,
    ) -> Position:
        """
        Advance the cursor by one frame.

        Args:
            hand_pos: Raw camera-space hand position, None if no hand
            now: Frame time in seconds
            pointer_pos: Pointer sample observed this frame, if any

        Returns:
            The cursor position in mirrored screen space.
        """
        if pointer_pos is not None:
            self.pointer_move(pointer_pos, now)

        if hand_pos is not None and not self.pointer_active(now):
            x, y = hand_pos
            if self._mirror:
                x = 1.0 - x
            self._position = (_clamp01(x), _clamp01(y))

        return self._position

    def update_size(self, measured: float) -> float:
        """Snap to a measured hand size, or decay toward zero when it is 0."""
        if measured <= 0:
            self._hand_size = max(0.0, self._hand_size - self._size_decay)
        else:
            self._hand_size = measured
        return self._hand_size

    @property
    def position(self) -> Position:
        return self._position

    @property
    def hand_size(self) -> float:
        return self._hand_size

    @property
    def last_pointer_update(self) -> Optional[float]:
        return self._pointer_time
