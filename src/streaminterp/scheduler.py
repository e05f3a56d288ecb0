"""Walk a fixed step across an x span and emit one sample per tick."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from .config import Config
from .errors import DegenerateInput, OutOfRange
from .interpolate import Point, interpolate
from .logutil import get_logger
from .sinks import Sample, SampleSink

# Slack, in units of step, on the tick count: rounding in (end - start) / step
# or in cursor + step must not drop a tick that belongs on end_x.
TICK_EPSILON = 1e-9


def tick_count(start_x: float, end_x: float, step: float) -> int:
    """Number of ticks ``start_x + k * step`` (k >= 0) not beyond ``end_x``."""
    span = (end_x - start_x) / step
    if span < -TICK_EPSILON:
        return 0
    return max(0, int(math.floor(span + TICK_EPSILON))) + 1


def emit_range(
    window: Sequence[Point],
    config: Config,
    start_x: float,
    end_x: float,
    sink: SampleSink,
    last_x: Optional[float] = None,
) -> Optional[float]:
    """Emit samples from ``start_x`` up to ``end_x`` inclusive.

    Each tick is derived by multiplication rather than repeated addition,
    and the last one is clamped onto ``end_x``.
    Stops at the first tick the strategy rejects as out of range or
    degenerate. Returns the x of the last emitted sample, or ``last_x``
    unchanged when nothing was emitted. ``InsufficientPoints`` is not caught:
    callers must size the window before calling.
    """
    tag = config.tag
    count = tick_count(start_x, end_x, config.step)
    for k in range(count):
        current_x = start_x + k * config.step
        if k == count - 1:
            # Last tick is within tolerance of end_x; rounding may overshoot it
            current_x = min(current_x, end_x)
        try:
            y = interpolate(config.method, window, current_x)
        except OutOfRange:
            break
        except DegenerateInput as exc:
            get_logger().warning("%s: stopping emission at x=%s: %s", tag, current_x, exc)
            break
        sink.emit(Sample(tag, current_x, y))
        last_x = current_x
    return last_x


__all__ = ["emit_range", "tick_count", "TICK_EPSILON"]
