"""
GestureTree Interaction Module

Turns per-frame hand landmarks into display modes, a virtual cursor and a
gesture-driven prize lottery. No camera or UI dependencies.
"""
from .config import Config, load_config
from .landmarks import HandLandmarks
from .gesture_recognizer import GestureRecognizer, Gesture, classify
from .stabilizer import GestureStabilizer
from .cursor import CursorTracker
from .modes import Mode, resolve_mode
from .hit_test import Rect, is_hovering
from .lottery import LotteryEngine, LotteryPhase, Prize, weighted_choice
from .passcode import PasscodeGate
from .engine import InteractionEngine, FrameState

__all__ = [
    'Config',
    'load_config',
    'HandLandmarks',
    'GestureRecognizer',
    'Gesture',
    'classify',
    'GestureStabilizer',
    'CursorTracker',
    'Mode',
    'resolve_mode',
    'Rect',
    'is_hovering',
    'LotteryEngine',
    'LotteryPhase',
    'Prize',
    'weighted_choice',
    'PasscodeGate',
    'InteractionEngine',
    'FrameState',
]
