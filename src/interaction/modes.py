"""
Display mode resolution and the manual override / focus state behind it.
"""
from enum import Enum
from typing import Optional
import logging

from .gesture_recognizer import Gesture

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Scene layout the renderers should show."""
    TREE = "TREE"
    SCATTER = "SCATTER"
    HEART = "HEART"


_GESTURE_MODES = {
    Gesture.OPEN_HAND: Mode.SCATTER,
    Gesture.FIST: Mode.TREE,
    Gesture.SCISSORS: Mode.TREE,
    Gesture.NONE: Mode.TREE,
}


def resolve_mode(
    committed: Gesture,
    override: Optional[Mode],
    lottery_active: bool,
) -> Mode:
    """
    Pick the display mode.

    An open lottery pins the scene to TREE, a committed HEART beats any
    override, and the override beats the plain gesture mapping.
    """
    if lottery_active:
        return Mode.TREE
    if committed == Gesture.HEART:
        return Mode.HEART
    if override is not None:
        return override
    return _GESTURE_MODES.get(committed, Mode.TREE)


class ModeController:
    """
    Owns the override mode and the focused item.

    Override changes are driven by commit transitions from the stabilizer, so
    holding a gesture acts once rather than every frame.
    """

    def __init__(self):
        self.override: Optional[Mode] = None
        self.focused_item: Optional[int] = None

    def resolve(self, committed: Gesture, lottery_active: bool) -> Mode:
        return resolve_mode(committed, self.override, lottery_active)

    def on_commit(self, gesture: Gesture, lottery_active: bool) -> bool:
        """
        Apply the override rules for a newly committed gesture.

        Returns:
            True if the gesture asks the host to open the lottery.
        """
        if lottery_active:
            return False

        if gesture == Gesture.FIST:
            if self.override is not None or self.focused_item is not None:
                logger.info("Override cleared")
            self.override = None
            self.focused_item = None
        elif gesture == Gesture.OPEN_HAND:
            if self.override != Mode.SCATTER:
                logger.info("Override set to SCATTER")
            self.override = Mode.SCATTER
        elif gesture == Gesture.SCISSORS:
            return True
        return False

    def click_item(self, item_id: int, lottery_active: bool) -> Optional[int]:
        """Toggle focus on a clicked item."""
        if lottery_active:
            return self.focused_item
        self.focused_item = None if self.focused_item == item_id else item_id
        return self.focused_item

    def clear_focus(self) -> None:
        self.focused_item = None

    def click_tree(self, committed: Gesture, lottery_active: bool) -> None:
        """Clicking the assembled tree scatters it."""
        if lottery_active:
            return
        if self.resolve(committed, lottery_active) == Mode.TREE:
            self.override = Mode.SCATTER

    def reset(self) -> None:
        self.override = None
        self.focused_item = None
