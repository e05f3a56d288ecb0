from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .config import Config
from .errors import EngineStopped
from .interpolate import Point
from .logutil import get_logger
from .scheduler import emit_range
from .sinks import Sample, SampleSink
from .window import select_window


class InterpolationEngine:
    """
    Streaming state machine for one interpolation method.

    Owns an append-only point history and the cursor (x of the last emitted
    sample). Each arriving point emits the newly covered span
    ``(cursor, newest.x]`` in ``config.step`` increments; shutdown flushes
    whatever is left and stops the engine for good.

    Not thread-safe on its own: drive it from a single owner (see
    ``actor.EngineActor``) or guard it with one lock.
    """

    def __init__(
        self,
        config: Config,
        sink: SampleSink,
        history: Iterable[Point] = (),
        cursor: Optional[float] = None,
    ) -> None:
        self.config = config
        self.sink = sink
        self._history: List[Point] = list(history)
        self._cursor: Optional[float] = cursor
        self._stopped = False
        self.points_seen = len(self._history)
        self.samples_emitted = 0

    @property
    def history(self) -> Tuple[Point, ...]:
        return tuple(self._history)

    @property
    def cursor(self) -> Optional[float]:
        return self._cursor

    @property
    def stopped(self) -> bool:
        return self._stopped

    def _ready(self) -> bool:
        return len(self._history) >= self.config.min_points

    def _emit(self, start_x: float) -> None:
        window = select_window(self._history, self.config.method)
        end_x = self._history[-1].x
        before = self._cursor
        counting = _CountingSink(self.sink)
        self._cursor = emit_range(window, self.config, start_x, end_x, counting, last_x=self._cursor)
        self.samples_emitted += counting.count
        get_logger().debug(
            "%s: span [%s, %s] emitted %d samples (cursor %s -> %s)",
            self.config.tag, start_x, end_x, counting.count, before, self._cursor,
        )

    def add_point(self, point: Point) -> None:
        if self._stopped:
            raise EngineStopped(f"{self.config.tag} engine already shut down; point {point} rejected")
        self._history.append(point)
        self.points_seen += 1
        if not self._ready():
            return
        if self._cursor is None:
            start_x = select_window(self._history, self.config.method)[0].x
        else:
            start_x = self._cursor + self.config.step
        self._emit(start_x)

    def shutdown(self) -> None:
        """Flush the span after the cursor, then refuse further messages."""
        if self._stopped:
            raise EngineStopped(f"{self.config.tag} engine already shut down")
        try:
            if self._ready() and self._cursor is not None:
                self._emit(self._cursor + self.config.step)
        finally:
            self._stopped = True


class _CountingSink:
    def __init__(self, inner: SampleSink) -> None:
        self.inner = inner
        self.count = 0

    def emit(self, sample: Sample) -> None:
        self.inner.emit(sample)
        self.count += 1


__all__ = ["InterpolationEngine"]
