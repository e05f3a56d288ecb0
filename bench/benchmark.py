"""Simple benchmarking harness for streaminterp.

Measures throughput (points/sec and samples/sec) and approximate memory
growth while streaming synthetic sine data through one engine per method.
Keeps dependencies minimal; for deeper profiling integrate with py-spy or
scalene externally.
"""
from __future__ import annotations

import argparse
import math
import time
import tracemalloc
from typing import Iterable

from streaminterp.config import Config, Linear, Newton
from streaminterp.engine import InterpolationEngine
from streaminterp.interpolate import Point


class _NullSink:
    def __init__(self) -> None:
        self.count = 0

    def emit(self, sample) -> None:
        self.count += 1

    def close(self) -> None:
        pass


def synthetic_points(n: int, dx: float = 0.37) -> Iterable[Point]:
    for i in range(n):
        x = i * dx
        yield Point(x, math.sin(x))


def run(points: Iterable[Point], config: Config) -> None:
    sink = _NullSink()
    engine = InterpolationEngine(config, sink)
    tracemalloc.start()
    start = time.perf_counter()
    counted = 0
    for counted, point in enumerate(points, start=1):
        engine.add_point(point)
    engine.shutdown()
    elapsed = time.perf_counter() - start
    current, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    pps = counted / elapsed if elapsed else float("inf")
    sps = sink.count / elapsed if elapsed else float("inf")
    label = config.tag if not isinstance(config.method, Newton) else f"newton(n={config.method.window_size})"
    print(f"{label}: {counted} points, {sink.count} samples in {elapsed:.3f}s -> {pps:,.0f} points/sec, {sps:,.0f} samples/sec")
    print(f"Current mem ~{current/1024/1024:.2f} MB; Peak mem ~{peak/1024/1024:.2f} MB")


def main() -> int:
    ap = argparse.ArgumentParser(description="Benchmark streaminterp engine throughput")
    ap.add_argument("--points", type=int, default=2000, help="Synthetic points to stream")
    ap.add_argument("--step", type=float, default=0.1, help="Output step")
    ap.add_argument("--window", type=int, nargs="+", default=[2, 4, 8], help="Newton window sizes to try")
    args = ap.parse_args()

    points = list(synthetic_points(args.points))
    run(points, Config(Linear(), step=args.step))
    for n in args.window:
        run(points, Config(Newton(window_size=n), step=args.step))
    return 0


if __name__ == "__main__":  # pragma: no cover - manual use
    raise SystemExit(main())
