import json
import math
import re
from typing import Optional

from .interpolate import Point

# Lightweight point parser: JSON objects first, then delimited pairs
_SPLIT = re.compile(r"[;,\s]+")


def parse_point(line: str) -> Optional[Point]:
    """
    Parse one input line into a Point.

    Accepts ``x y``, ``x;y``, ``x,y`` (any mix of whitespace, comma or
    semicolon) and JSON objects like ``{"x": 1, "y": 2}``. Returns None for
    blank lines and ``#`` comments; raises ValueError for anything else that
    does not yield two finite numbers.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    if line.startswith("{") and line.endswith("}"):
        try:
            obj = json.loads(line)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON point: {exc}") from exc
        if not isinstance(obj, dict) or "x" not in obj or "y" not in obj:
            raise ValueError(f"JSON point needs 'x' and 'y' keys: {line!r}")
        return _point(obj["x"], obj["y"], line)

    parts = [p for p in _SPLIT.split(line) if p]
    if len(parts) != 2:
        raise ValueError(f"expected two numbers, got {len(parts)} field(s): {line!r}")
    return _point(parts[0], parts[1], line)


def _point(raw_x, raw_y, line: str) -> Point:
    try:
        x, y = float(raw_x), float(raw_y)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"not a number in {line!r}") from exc
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"non-finite value in {line!r}")
    return Point(x, y)


__all__ = ["parse_point"]
