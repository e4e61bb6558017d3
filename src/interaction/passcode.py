"""
Passcode gate shown before the experience unlocks.
"""
from typing import Optional, Tuple
import logging

from .config import PasscodeConfig
from .gesture_recognizer import Gesture
from .hit_test import HitTarget

logger = logging.getLogger(__name__)


class PasscodeGate:
    """
    Collects a numeric code and unlocks on the right one.

    The host appends digits from its keypad; submitting works by keyboard
    (Enter) or by a FIST/OK over the submit button once the code is complete.
    A wrong code clears the input and raises `error` for `error_flash` seconds.
    """

    def __init__(self, config: Optional[PasscodeConfig] = None):
        self._config = config or PasscodeConfig()
        self.submit_target = HitTarget("passcode_submit", padding=self._config.hit_padding)
        self.code = ""
        self.unlocked = not self._config.enabled
        self._error_until: Optional[float] = None

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    @property
    def code_length(self) -> int:
        return len(self._config.code)

    @property
    def complete(self) -> bool:
        return len(self.code) == self.code_length

    def is_error(self, now: float) -> bool:
        return self._error_until is not None and now < self._error_until

    def type_digit(self, digit: str) -> str:
        if self.unlocked:
            return self.code
        if len(digit) == 1 and digit.isdigit() and not self.complete:
            self.code += digit
        return self.code

    def backspace(self) -> str:
        self.code = self.code[:-1]
        return self.code

    def submit(self, now: float) -> bool:
        """
        Check the typed code.

        Returns:
            True if this call unlocked the gate.
        """
        if self.unlocked:
            return False
        if self.code == self._config.code:
            self.unlocked = True
            self._error_until = None
            logger.info("Passcode accepted")
            return True
        logger.info("Passcode rejected")
        self.code = ""
        self._error_until = now + self._config.error_flash
        return False

    def handle_select(
        self,
        cursor: Tuple[float, float],
        viewport: Tuple[float, float],
        gesture: Gesture,
        now: float,
    ) -> bool:
        """Gesture press on the submit button; only a complete code submits."""
        if self.unlocked or not self.submit_target.visible:
            return False
        if not self.complete:
            self.submit_target.test(cursor, viewport)
            return False
        if self.submit_target.select(cursor, viewport, gesture):
            unlocked = self.submit(now)
            if not unlocked:
                # Re-arm so the next complete code can be submitted by gesture
                self.submit_target.layout(self.submit_target.rect)
            return unlocked
        return False
