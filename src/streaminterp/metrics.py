"""Metrics helper for InterpolationEngine.

Provides a lightweight, dependency-free snapshot of engine counters suitable
for exposure via HTTP or a CLI summary. Avoids mutating the engine.
"""
from __future__ import annotations

from typing import Dict, Any

from .config import Newton
from .engine import InterpolationEngine


def engine_metrics(engine: InterpolationEngine) -> Dict[str, Any]:
    method = engine.config.method
    return {
        "method": engine.config.tag,
        "step": engine.config.step,
        "window_size": method.window_size if isinstance(method, Newton) else None,
        "points": engine.points_seen,
        "emitted": engine.samples_emitted,
        "cursor": engine.cursor,
        "stopped": engine.stopped,
    }

__all__ = ["engine_metrics"]
