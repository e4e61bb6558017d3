"""
GestureTree Webcam Module

Hand tracking with MediaPipe and the Qt worker that drives the engine.
"""
from .hand_tracker import HandTracker
from .worker import WebcamWorker

__all__ = [
    'HandTracker',
    'WebcamWorker',
]
