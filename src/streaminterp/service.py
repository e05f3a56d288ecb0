"""Optional FastAPI service feeding points to an interpolation engine over HTTP.

Install with `pip install streaminterp[server]` to enable.
This keeps the core library dependency-light.
"""
from __future__ import annotations

import threading
from typing import Optional

try:  # pragma: no cover - optional dependency
    from fastapi import FastAPI, HTTPException
    from pydantic import BaseModel
except ImportError as exc:
    raise RuntimeError(
        "FastAPI not installed. Install with `pip install streaminterp[server]` to use the service."  # noqa: E501
    ) from exc

from . import __version__
from .config import Config, Linear
from .engine import InterpolationEngine
from .errors import EngineStopped
from .interpolate import Point
from .metrics import engine_metrics
from .sinks import CollectingSink, Sample


class PointRequest(BaseModel):
    x: float
    y: float


class SampleModel(BaseModel):
    method: str
    x: float
    y: float


class SamplesResponse(BaseModel):
    samples: list[SampleModel]
    cursor: Optional[float] = None


class StatsResponse(BaseModel):
    method: str
    step: float
    window_size: Optional[int] = None
    points: int
    emitted: int
    cursor: Optional[float] = None
    stopped: bool


def _samples(items: list[Sample]) -> list[SampleModel]:
    return [SampleModel(method=s.method, x=s.x, y=s.y) for s in items]


def build_app(config: Optional[Config] = None) -> FastAPI:
    config = config or Config(Linear())
    sink = CollectingSink()
    engine = InterpolationEngine(config, sink)
    app = FastAPI(title="streaminterp service", version=__version__)
    # One lock serializes every handler touching the engine, so each request
    # is applied to completion before the next one starts.
    lock = threading.Lock()

    @app.get("/healthz")
    def health() -> dict[str, str]:  # pragma: no cover - trivial
        return {"status": "ok"}

    @app.post("/points", response_model=SamplesResponse)
    def add_point(req: PointRequest) -> SamplesResponse:
        with lock:
            try:
                engine.add_point(Point(req.x, req.y))
            except EngineStopped as exc:
                raise HTTPException(status_code=409, detail=str(exc)) from exc
            finally:
                produced = sink.drain()
            return SamplesResponse(samples=_samples(produced), cursor=engine.cursor)

    @app.post("/shutdown", response_model=SamplesResponse)
    def shutdown() -> SamplesResponse:
        with lock:
            try:
                engine.shutdown()
            except EngineStopped as exc:
                raise HTTPException(status_code=409, detail=str(exc)) from exc
            finally:
                produced = sink.drain()
            return SamplesResponse(samples=_samples(produced), cursor=engine.cursor)

    @app.get("/stats", response_model=StatsResponse)
    def stats() -> StatsResponse:
        with lock:
            return StatsResponse(**engine_metrics(engine))

    return app


__all__ = ["build_app"]
