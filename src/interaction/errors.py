"""
Exceptions raised by the interaction engine.

Only setup mistakes raise. Degraded camera input and out-of-order UI events
are expected at runtime and never surface as exceptions.
"""


class InteractionError(Exception):
    """Base class for engine errors."""


class ConfigError(InteractionError):
    """Configuration is invalid (bad prize table, unknown profile, ...)."""


class LayoutError(InteractionError):
    """A UI target was hit tested before it was laid out."""
