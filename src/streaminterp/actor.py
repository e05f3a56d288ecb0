"""Single-owner mailbox around an ``InterpolationEngine``.

Producers ``send`` messages from any thread without blocking; one consumer
thread applies them to the engine strictly in FIFO order, each to
completion. ``Shutdown`` is the final message: the consumer flushes and
exits, and later sends raise ``EngineStopped``.
"""
from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from typing import Optional, Union

from .engine import InterpolationEngine
from .errors import EngineStopped
from .interpolate import Point
from .logutil import get_logger


@dataclass(frozen=True)
class AddPoint:
    x: float
    y: float


@dataclass(frozen=True)
class Shutdown:
    pass


Message = Union[AddPoint, Shutdown]


class EngineActor:
    def __init__(self, engine: InterpolationEngine, name: Optional[str] = None) -> None:
        self.engine = engine
        self._mailbox: "queue.Queue[Message]" = queue.Queue()
        self._send_lock = threading.Lock()
        self._closed = False
        self._error: Optional[BaseException] = None
        self._thread = threading.Thread(
            target=self._run,
            name=name or f"streaminterp-{engine.config.tag}",
            daemon=True,
        )
        self._thread.start()

    def send(self, message: Message) -> None:
        # Lock keeps "closed" and "enqueued" consistent across producers so
        # nothing can slip in behind the Shutdown message.
        with self._send_lock:
            if self._closed:
                raise EngineStopped(f"{self.engine.config.tag} actor no longer accepts {message!r}")
            if isinstance(message, Shutdown):
                self._closed = True
            self._mailbox.put(message)

    def add_point(self, x: float, y: float) -> None:
        self.send(AddPoint(x, y))

    def shutdown(self) -> None:
        self.send(Shutdown())

    def _run(self) -> None:
        while True:
            message = self._mailbox.get()
            try:
                if isinstance(message, Shutdown):
                    self.engine.shutdown()
                    return
                if self._error is None:
                    self.engine.add_point(Point(message.x, message.y))
            except Exception as exc:  # noqa: BLE001 - surfaced to the caller via join()
                get_logger().error("%s: failed handling %r: %s", self.engine.config.tag, message, exc)
                self._error = exc
                if isinstance(message, Shutdown):
                    return
            finally:
                self._mailbox.task_done()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the consumer to finish and re-raise the first failure it hit."""
        self._thread.join(timeout)
        if self._error is not None:
            raise self._error

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()


__all__ = ["AddPoint", "Shutdown", "Message", "EngineActor"]
