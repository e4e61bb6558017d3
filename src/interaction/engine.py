"""
Frame loop for the gesture-driven experience.

Each call to `process_frame` runs, in order: classify -> stabilize ->
override transitions and mode -> cursor -> hit tests -> lottery steps.
Everything is synchronous and single-owner; the caller feeds frames from
one thread.
"""
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple
import logging
import random

from .config import Config
from .cursor import CursorTracker, Position
from .errors import LayoutError
from .gesture_recognizer import Gesture, GestureRecognizer, GestureState
from .landmarks import HandLandmarks
from .lottery import LotteryEngine, LotteryPhase, LotteryView
from .modes import Mode, ModeController
from .passcode import PasscodeGate
from .stabilizer import GestureStabilizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameState:
    """Everything renderers read for one frame."""
    mode: Mode
    cursor: Position
    hand_size: float
    gesture: Gesture
    raw_gesture: Gesture
    focused_item: Optional[int]
    override: Optional[Mode]
    unlocked: bool
    intro: bool
    passcode_error: bool
    lottery: LotteryView

    @property
    def lottery_active(self) -> bool:
        return self.lottery.phase != LotteryPhase.IDLE


class InteractionEngine:
    """
    Owns every piece of interaction state for one session.

    Host hooks:
        on_lottery_open_requested(): a committed SCISSORS asked for the lottery
        on_lottery_completed(prize): the lottery closed with a prize or None
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        rng: Optional[random.Random] = None,
        viewport: Tuple[float, float] = (1280.0, 720.0),
    ):
        self._config = config or Config()
        cursor_cfg = self._config.cursor

        self.recognizer = GestureRecognizer(self._config.gestures)
        self.stabilizer = GestureStabilizer(self._config.gestures.stabilize_window)
        self.cursor = CursorTracker(
            pointer_timeout=cursor_cfg.pointer_timeout,
            size_decay=cursor_cfg.size_decay,
            mirror=cursor_cfg.mirror,
        )
        self.modes = ModeController()
        self.passcode = PasscodeGate(self._config.passcode)
        self.lottery = LotteryEngine(
            self._config.lottery,
            rng=rng,
            on_completed=self._on_lottery_completed,
            hit_padding=cursor_cfg.hit_padding,
        )

        self.set_viewport(*viewport)
        self.on_lottery_open_requested: Optional[Callable[[], None]] = None
        self.on_lottery_completed: Optional[Callable[[Optional[str]], None]] = None

        self._unlocked_at: Optional[float] = 0.0 if self.passcode.unlocked else None
        self._raw = GestureState(gesture=Gesture.NONE)
        self._now = 0.0

    @property
    def config(self) -> Config:
        return self._config

    @property
    def unlocked(self) -> bool:
        return self.passcode.unlocked

    @property
    def committed(self) -> Gesture:
        return self.stabilizer.committed

    @property
    def mode(self) -> Mode:
        return self.modes.resolve(self.committed, self.lottery.is_open)

    def set_viewport(self, width: float, height: float) -> None:
        """
        Raises:
            LayoutError: If either side is not positive.
        """
        if width <= 0 or height <= 0:
            raise LayoutError(f"Viewport must be positive, got {width}x{height}")
        self.viewport = (float(width), float(height))

    # --- Host input -------------------------------------------------------

    def pointer_move(self, x_px: float, y_px: float, now: float) -> Position:
        """Mouse/touch move in viewport pixels."""
        w, h = self.viewport
        return self.cursor.pointer_move((x_px / w, y_px / h), now)

    def click_item(self, item_id: int) -> Optional[int]:
        return self.modes.click_item(item_id, self.lottery.is_open)

    def click_background(self) -> None:
        self.modes.clear_focus()

    def click_tree(self) -> None:
        self.modes.click_tree(self.committed, self.lottery.is_open)

    def submit_passcode(self, now: float) -> bool:
        """Keyboard submit for the passcode gate."""
        return self._after_submit(self.passcode.submit(now), now)

    def open_lottery(self, now: float) -> bool:
        if not self.unlocked:
            return False
        return self.lottery.open(now)

    def close_lottery(self) -> None:
        """Dismiss the overlay mid-cycle without a result."""
        self.lottery.cancel()

    def confirm_lottery(self) -> bool:
        """Keyboard/mouse press of the lottery action button."""
        return self.lottery.confirm()

    # --- Frame loop -------------------------------------------------------

    def process_frame(
        self,
        hands: Optional[Sequence[Optional[HandLandmarks]]],
        now: float,
        pointer_pos: Optional[Position] = None,
    ) -> FrameState:
        """
        Advance one frame.

        Args:
            hands: Up to two hands from the tracker, None or empty if no hand
            now: Frame time in seconds (monotonic)
            pointer_pos: Normalized pointer sample observed this frame
        """
        self._now = now

        # 1. Classify
        self._raw = self.recognizer.recognize(hands)

        # 2. Stabilize
        self.stabilizer.update(self._raw.gesture, now)
        transition = self.stabilizer.pop_transition()

        # 3. Override transitions (edge-triggered on commits)
        if transition is not None and self.unlocked:
            wants_lottery = self.modes.on_commit(transition.current, self.lottery.is_open)
            if wants_lottery:
                self._request_lottery(now)

        # 4. Cursor and hand size
        hand_pos = self._raw.hand_position if self._raw.has_hand else None
        cursor = self.cursor.update(hand_pos, now, pointer_pos)
        self.cursor.update_size(self._raw.hand_size if self._raw.has_hand else 0.0)

        # 5. Hit tests against whatever is on screen
        committed = self.stabilizer.committed
        if not self.unlocked:
            unlocked = self.passcode.handle_select(cursor, self.viewport, committed, now)
            self._after_submit(unlocked, now)
        else:
            self.lottery.handle_select(cursor, self.viewport, committed)

        # 6. Lottery animation
        self.lottery.tick(now)

        return self.state()

    def tick(self, now: float) -> FrameState:
        """Advance timers only, for render frames with no new sample."""
        self._now = now
        self.lottery.tick(now)
        return self.state()

    def state(self) -> FrameState:
        lottery_active = self.lottery.is_open
        return FrameState(
            mode=self.modes.resolve(self.stabilizer.committed, lottery_active),
            cursor=self.cursor.position,
            hand_size=self.cursor.hand_size,
            gesture=self.stabilizer.committed,
            raw_gesture=self._raw.gesture,
            focused_item=self.modes.focused_item,
            override=self.modes.override,
            unlocked=self.unlocked,
            intro=self._in_intro(self._now),
            passcode_error=self.passcode.is_error(self._now),
            lottery=self.lottery.view(),
        )

    # --- Internals --------------------------------------------------------

    def _request_lottery(self, now: float) -> None:
        logger.info("Lottery requested by gesture")
        if self.on_lottery_open_requested is not None:
            self.on_lottery_open_requested()
        self.open_lottery(now)

    def _after_submit(self, unlocked: bool, now: float) -> bool:
        if unlocked:
            self._unlocked_at = now
            logger.info("Unlocked, intro for %.1fs", self._config.ui.intro_duration)
        return unlocked

    def _in_intro(self, now: float) -> bool:
        if self._unlocked_at is None or not self.passcode.enabled:
            return False
        return now - self._unlocked_at < self._config.ui.intro_duration

    def _on_lottery_completed(self, prize: Optional[str]) -> None:
        # Drop the held select gesture so it does not act on the scene next
        self.stabilizer.reset(Gesture.NONE, self._now)
        if self.on_lottery_completed is not None:
            self.on_lottery_completed(prize)
