from typing import Sequence

from .config import InterpolationMethod, Newton
from .interpolate import Point


def select_window(history: Sequence[Point], method: InterpolationMethod) -> Sequence[Point]:
    """Points a strategy should see for ``method``.

    Linear scans the whole history, handed over as is rather than copied;
    strategies only read it. Newton uses the newest ``window_size`` points
    in arrival order (fewer if history is shorter, callers check the
    minimum before interpolating).
    """
    if isinstance(method, Newton):
        return history[-method.window_size:]
    return history


__all__ = ["select_window"]
