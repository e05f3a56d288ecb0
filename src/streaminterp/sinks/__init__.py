"""Output sinks for interpolated samples.

Every engine hands its samples to exactly one sink; ``MultiSink`` fans out
when a run wants several destinations (console plus JSONL file, for
example).
"""
from __future__ import annotations
import json
import sys
import threading
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, TextIO

from ..config import DEFAULT_PRECISION
from ..logutil import get_logger


@dataclass(frozen=True)
class Sample:
    method: str
    x: float
    y: float

    def as_dict(self) -> dict:
        return {"method": self.method, "x": self.x, "y": self.y}


def format_sample(sample: Sample, precision: int = DEFAULT_PRECISION) -> str:
    """Render ``<method>: <x> <y>`` with both floats at the same precision."""
    return f"{sample.method}: {sample.x:.{precision}f} {sample.y:.{precision}f}"


class SampleSink(Protocol):  # pragma: no cover - simple protocol
    def emit(self, sample: Sample) -> None: ...  # noqa: D401,E701 - protocol stub
    def close(self) -> None: ...


_METHOD_STYLES = {"linear": "cyan", "newton": "magenta"}


class TextSink:
    """Line-oriented sink; colours the method tag when given a rich console."""

    def __init__(self, stream: Optional[TextIO] = None, precision: int = DEFAULT_PRECISION, console: Any = None) -> None:
        self.stream = stream
        self.precision = precision
        self.console = console
        self._lock = threading.Lock()

    def emit(self, sample: Sample) -> None:
        # Several engines may share one sink; keep each line whole.
        with self._lock:
            if self.console is not None:
                from rich.text import Text

                text = Text()
                text.append(f"{sample.method}:", style=_METHOD_STYLES.get(sample.method, "white"))
                text.append(f" {sample.x:.{self.precision}f} {sample.y:.{self.precision}f}")
                self.console.print(text)
                return
            stream = self.stream or sys.stdout
            stream.write(format_sample(sample, self.precision) + "\n")
            stream.flush()

    def close(self) -> None:  # pragma: no cover - stream owned by caller
        pass


class JsonlSink:
    def __init__(self, path: str) -> None:
        self.path = path
        self._fh = open(path, "a", encoding="utf-8")
        self._lock = threading.Lock()

    def emit(self, sample: Sample) -> None:
        with self._lock:
            self._fh.write(json.dumps(sample.as_dict()) + "\n")
            self._fh.flush()

    def close(self) -> None:
        self._fh.close()


class CollectingSink:
    """Keeps samples in memory; ``drain`` hands back and clears them."""

    def __init__(self) -> None:
        self.samples: List[Sample] = []

    def emit(self, sample: Sample) -> None:
        self.samples.append(sample)

    def drain(self) -> List[Sample]:
        out, self.samples = self.samples, []
        return out

    def close(self) -> None:  # pragma: no cover - trivial
        pass


class MultiSink:
    def __init__(self, sinks: List[SampleSink]):
        self._sinks = sinks

    def emit(self, sample: Sample) -> None:
        for s in self._sinks:
            try:
                s.emit(sample)
            except OSError as exc:
                # Best-effort; one failing destination should not starve the others.
                get_logger().warning("sink %r failed: %s", s, exc)

    def close(self) -> None:
        for s in self._sinks:
            try:
                s.close()
            except OSError as exc:
                get_logger().warning("closing sink %r failed: %s", s, exc)


__all__ = [
    "Sample",
    "format_sample",
    "SampleSink",
    "TextSink",
    "JsonlSink",
    "CollectingSink",
    "MultiSink",
]
