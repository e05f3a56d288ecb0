"""Pure interpolation strategies.

Both functions take a fixed window of points and a query x and either
return the estimate or raise one of the ``errors.InterpolationError``
subclasses. Nothing here keeps state between calls.

Newton's form is evaluated from a bottom-up divided-difference table
(O(n^2) for n points) using the same recurrence as the textbook recursive
definition, so the coefficients match it exactly. The polynomial itself
is then evaluated in the written left-to-right order, not by Horner.
"""

from __future__ import annotations
from bisect import bisect_left
from dataclasses import dataclass
from typing import List, Sequence

from .config import InterpolationMethod, Newton
from .errors import DegenerateInput, InsufficientPoints, OutOfRange


@dataclass(frozen=True)
class Point:
    x: float
    y: float


class _XView:
    """x coordinates of a window, indexable without copying it."""

    def __init__(self, window: Sequence[Point]) -> None:
        self._window = window

    def __len__(self) -> int:
        return len(self._window)

    def __getitem__(self, i: int) -> float:
        return self._window[i].x


def linear_interpolate(window: Sequence[Point], x: float) -> float:
    """Interpolate between the two window points bracketing ``x``.

    The window is assumed sorted by ascending x; it is neither sorted nor
    validated here, and the bracket is found by binary search.
    """
    if len(window) < 2:
        raise InsufficientPoints(len(window), 2)
    first, last = window[0], window[-1]
    if x < first.x or x > last.x:
        raise OutOfRange(x, first.x, last.x)
    # p2 is the first point from index 1 on whose x reaches the query
    i = bisect_left(_XView(window), x, 1)
    if i == len(window):
        # Only reachable when the window is out of order
        raise OutOfRange(x, first.x, last.x)
    p1, p2 = window[i - 1], window[i]
    dx = p2.x - p1.x
    if dx == 0:
        raise DegenerateInput(p2.x)
    return p1.y + (x - p1.x) * (p2.y - p1.y) / dx


def divided_differences(window: Sequence[Point]) -> List[float]:
    """Return Newton coefficients f[x0], f[x0,x1], ..., f[x0..xn]."""
    xs = [p.x for p in window]
    table = [p.y for p in window]
    coeffs = [table[0]]
    n = len(window)
    for k in range(1, n):
        # After this pass table[i] holds f[x_i .. x_{i+k}]
        for i in range(n - k):
            dx = xs[i + k] - xs[i]
            if dx == 0:
                raise DegenerateInput(xs[i])
            table[i] = (table[i + 1] - table[i]) / dx
        coeffs.append(table[0])
    return coeffs


def newton_interpolate(window: Sequence[Point], x: float) -> float:
    if len(window) < 2:
        raise InsufficientPoints(len(window), 2)
    coeffs = divided_differences(window)
    # P(x) = c0 + c1 (x-x0) + c2 (x-x0)(x-x1) + ..., each term multiplied
    # and the terms summed strictly left to right
    result = coeffs[0]
    for k in range(1, len(coeffs)):
        term = coeffs[k]
        for j in range(k):
            term *= x - window[j].x
        result += term
    return result


def interpolate(method: InterpolationMethod, window: Sequence[Point], x: float) -> float:
    """Dispatch to the strategy for ``method``."""
    if isinstance(method, Newton):
        if len(window) < method.window_size:
            raise InsufficientPoints(len(window), method.window_size)
        return newton_interpolate(window, x)
    return linear_interpolate(window, x)


__all__ = [
    "Point",
    "linear_interpolate",
    "divided_differences",
    "newton_interpolate",
    "interpolate",
]
