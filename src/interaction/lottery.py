"""
Prize lottery driven by gestures.

The reveal animation is a chain of timed steps. Instead of timers, the engine
keeps the deadline of the next step and the frame loop calls `tick(now)`, so
cancelling is just dropping the deadline and tests can fast-forward time.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple
import logging
import random

from .config import LotteryConfig
from .errors import ConfigError
from .gesture_recognizer import Gesture
from .hit_test import HitTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prize:
    label: str
    weight: int
    color: str = "#FFFFFF"


class LotteryPhase(Enum):
    IDLE = "IDLE"
    SPINNING = "SPINNING"
    SLOWING = "SLOWING"
    REVEAL = "REVEAL"
    GAME_OVER = "GAME_OVER"


ANIMATING = frozenset({LotteryPhase.SPINNING, LotteryPhase.SLOWING})


@dataclass(frozen=True)
class LotteryView:
    """What the overlay needs to draw this frame."""
    phase: LotteryPhase
    display: Prize
    finished: bool
    attempts_remaining: int
    history: Tuple[str, ...]
    action_label: Optional[str]
    hovering: bool


def validate_prizes(prizes: Sequence[Prize]) -> None:
    """
    Raises:
        ConfigError: On an empty table, a non-positive weight or zero total.
    """
    if not prizes:
        raise ConfigError("Prize table is empty")
    for prize in prizes:
        if prize.weight <= 0:
            raise ConfigError(f"Prize {prize.label!r} has non-positive weight {prize.weight}")
    if sum(p.weight for p in prizes) <= 0:
        raise ConfigError("Prize weights sum to zero")


def weighted_choice(prizes: Sequence[Prize], rng: random.Random) -> Prize:
    """
    Pick a prize with probability proportional to its weight.

    Draws r in [0, total) and walks the table in order, subtracting weights
    until r falls inside one. Weights do not need to be normalized.
    """
    total = sum(p.weight for p in prizes)
    if total <= 0:
        raise ConfigError("Prize weights sum to zero")
    r = rng.random() * total
    for prize in prizes:
        if r < prize.weight:
            return prize
        r -= prize.weight
    # Float rounding can leave r == total on the last entry
    return prizes[-1]


def prizes_from_config(config: LotteryConfig) -> List[Prize]:
    return [Prize(p.label, p.weight, p.color) for p in config.prizes]


class LotteryEngine:
    """
    IDLE -> SPINNING -> SLOWING -> REVEAL -> IDLE, or IDLE -> GAME_OVER -> IDLE
    once the attempts run out.

    The winner is drawn with weighted selection the moment the lottery opens;
    the spinning and slowing phases only shuffle uniform decoys for show.
    While animating, every interaction is ignored. Attempts and history
    persist across openings for the whole session.
    """

    def __init__(
        self,
        config: Optional[LotteryConfig] = None,
        prizes: Optional[Sequence[Prize]] = None,
        rng: Optional[random.Random] = None,
        on_completed: Optional[Callable[[Optional[str]], None]] = None,
        hit_padding: float = 20.0,
    ):
        self._config = config or LotteryConfig()
        self._prizes = list(prizes) if prizes is not None else prizes_from_config(self._config)
        validate_prizes(self._prizes)

        self._rng = rng or random.Random()
        self.on_completed = on_completed
        self.action_target = HitTarget("lottery_action", padding=hit_padding)

        self.attempts_remaining = self._config.max_chances
        self.history: List[str] = []

        self._game_over_prize = Prize(
            self._config.game_over_label, 0, self._config.game_over_color
        )
        self._reset_cycle()

    def _reset_cycle(self) -> None:
        self.phase = LotteryPhase.IDLE
        self.display: Prize = self._prizes[0]
        self.finished = False
        self._winner: Optional[Prize] = None
        self._next_step_at: Optional[float] = None
        self._spin_count = 0
        self._slow_count = 0
        self._slow_delay = self._config.slow_initial_delay
        self.action_target.layout(None)

    @property
    def prizes(self) -> List[Prize]:
        return list(self._prizes)

    @property
    def is_open(self) -> bool:
        return self.phase != LotteryPhase.IDLE

    @property
    def is_animating(self) -> bool:
        return self.phase in ANIMATING

    @property
    def next_step_at(self) -> Optional[float]:
        return self._next_step_at

    @property
    def action_label(self) -> Optional[str]:
        if self.phase == LotteryPhase.REVEAL:
            return "ACCEPT"
        if self.phase == LotteryPhase.GAME_OVER:
            return "CLOSE"
        return None

    def open(self, now: float) -> bool:
        """
        Start a reveal cycle.

        Returns:
            False if the lottery was already open (ignored).
        """
        if self.is_open:
            logger.debug("Lottery open ignored in phase %s", self.phase.name)
            return False

        if self.attempts_remaining <= 0:
            self.phase = LotteryPhase.GAME_OVER
            self.display = self._game_over_prize
            self.finished = True
            logger.info("Lottery opened with no attempts left")
            return True

        self._winner = weighted_choice(self._prizes, self._rng)
        self.phase = LotteryPhase.SPINNING
        self.finished = False
        self._spin_count = 0
        logger.info("Lottery spinning (%d attempts left)", self.attempts_remaining)

        if self._config.spin_steps <= 0:
            self._enter_slowing(now)
        else:
            self._next_step_at = now + self._config.spin_interval
        return True

    def tick(self, now: float) -> None:
        """Run every animation step whose deadline has passed."""
        while self._next_step_at is not None and now >= self._next_step_at:
            step_time = self._next_step_at
            if self.phase == LotteryPhase.SPINNING:
                self._spin_step(step_time)
            elif self.phase == LotteryPhase.SLOWING:
                self._slow_step(step_time)
            else:
                self._next_step_at = None

    def _decoy(self) -> Prize:
        return self._prizes[self._rng.randrange(len(self._prizes))]

    def _spin_step(self, t: float) -> None:
        self.display = self._decoy()
        self._spin_count += 1
        if self._spin_count >= self._config.spin_steps:
            self._enter_slowing(t)
        else:
            self._next_step_at = t + self._config.spin_interval

    def _enter_slowing(self, t: float) -> None:
        self.phase = LotteryPhase.SLOWING
        self._slow_count = 0
        self._slow_delay = self._config.slow_initial_delay
        self._slow_step(t)

    def _slow_step(self, t: float) -> None:
        if self._slow_count >= self._config.slow_steps:
            self.display = self._winner
            self.phase = LotteryPhase.REVEAL
            self.finished = True
            self._next_step_at = None
            logger.info("Lottery reveal: %s", self._winner.label)
            return

        self.display = self._decoy()
        self._slow_count += 1
        self._slow_delay += self._config.slow_delay_step
        self._next_step_at = t + self._slow_delay

    def confirm(self) -> bool:
        """
        Press the action button (accept in REVEAL, close in GAME_OVER).

        Returns:
            True if the press completed the cycle, False if it was ignored.
        """
        if self.phase == LotteryPhase.REVEAL:
            prize = self._winner.label
            self.history.append(prize)
            self.attempts_remaining -= 1
            self._complete(prize)
            return True
        if self.phase == LotteryPhase.GAME_OVER:
            self._complete(None)
            return True
        logger.debug("Lottery confirm ignored in phase %s", self.phase.name)
        return False

    def handle_select(
        self,
        cursor: Tuple[float, float],
        viewport: Tuple[float, float],
        gesture: Gesture,
    ) -> bool:
        """
        Gesture press on the action button.

        Only hit tested once the reveal has finished and the host has laid
        out the button; mid-animation nothing is clickable.
        """
        if not self.finished or not self.action_target.visible:
            self.action_target.hovering = False
            return False
        if self.action_target.select(cursor, viewport, gesture):
            return self.confirm()
        return False

    def cancel(self) -> None:
        """Close without a result. Pending steps are dropped, no completion fires."""
        if self.is_open:
            logger.info("Lottery cancelled in phase %s", self.phase.name)
        self._reset_cycle()

    def _complete(self, prize: Optional[str]) -> None:
        logger.info("Lottery completed: %s", prize)
        self._reset_cycle()
        if self.on_completed is not None:
            self.on_completed(prize)

    def view(self) -> LotteryView:
        return LotteryView(
            phase=self.phase,
            display=self.display,
            finished=self.finished,
            attempts_remaining=self.attempts_remaining,
            history=tuple(self.history),
            action_label=self.action_label,
            hovering=self.action_target.hovering,
        )
