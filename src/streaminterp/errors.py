"""Exception types raised by the interpolation core.

Strategy failures derive from ``InterpolationError``; the scheduler decides
which of them simply end an emission pass. ``EngineStopped`` is separate:
it signals a caller sending messages after shutdown.
"""
from __future__ import annotations


class InterpolationError(Exception):
    pass


class OutOfRange(InterpolationError):
    """Query x lies outside the span covered by the window."""

    def __init__(self, x: float, lo: float, hi: float) -> None:
        super().__init__(f"x={x} outside interpolatable range [{lo}, {hi}]")
        self.x = x
        self.lo = lo
        self.hi = hi


class InsufficientPoints(InterpolationError):
    """Window holds fewer points than the method requires."""

    def __init__(self, have: int, need: int) -> None:
        super().__init__(f"need at least {need} points, got {have}")
        self.have = have
        self.need = need


class DegenerateInput(InterpolationError):
    """Two points share an x value, leaving a zero denominator."""

    def __init__(self, x: float) -> None:
        super().__init__(f"duplicate x={x} makes interpolation undefined")
        self.x = x


class EngineStopped(RuntimeError):
    """Message delivered to an engine that already processed shutdown."""


__all__ = [
    "InterpolationError",
    "OutOfRange",
    "InsufficientPoints",
    "DegenerateInput",
    "EngineStopped",
]
