from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Linear:
    """Piecewise linear interpolation over the whole point history."""


@dataclass(frozen=True)
class Newton:
    """Newton divided-difference polynomial over the newest ``window_size`` points."""

    window_size: int = 4

    def __post_init__(self) -> None:
        if self.window_size < 2:
            raise ValueError("window_size must be >= 2")


InterpolationMethod = Union[Linear, Newton]


@dataclass(frozen=True)
class Config:
    method: InterpolationMethod
    # Distance between consecutive emitted x values
    step: float = 1.0

    def __post_init__(self) -> None:
        if not self.step > 0:  # also rejects NaN
            raise ValueError("step must be > 0")

    @property
    def tag(self) -> str:
        return method_tag(self.method)

    @property
    def min_points(self) -> int:
        return min_points(self.method)


def method_tag(method: InterpolationMethod) -> str:
    if isinstance(method, Newton):
        return "newton"
    return "linear"


def min_points(method: InterpolationMethod) -> int:
    """Smallest history length at which the method can interpolate."""
    if isinstance(method, Newton):
        return method.window_size
    return 2


DEFAULT_STEP = 1.0
DEFAULT_NEWTON_WINDOW = 4
# Decimal places used when rendering samples as text
DEFAULT_PRECISION = 3

__all__ = [
    "Linear",
    "Newton",
    "InterpolationMethod",
    "Config",
    "method_tag",
    "min_points",
    "DEFAULT_STEP",
    "DEFAULT_NEWTON_WINDOW",
    "DEFAULT_PRECISION",
]
