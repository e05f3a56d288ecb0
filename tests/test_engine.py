import pytest

import streaminterp.scheduler as scheduler
from streaminterp.config import Config, Linear, Newton
from streaminterp.engine import InterpolationEngine
from streaminterp.errors import EngineStopped
from streaminterp.interpolate import Point
from streaminterp.sinks import CollectingSink


def _engine(method, step=1.0, **kw):
    sink = CollectingSink()
    return InterpolationEngine(Config(method, step=step), sink, **kw), sink


def test_no_emission_until_minimum_reached():
    engine, sink = _engine(Newton(window_size=3))
    engine.add_point(Point(0, 0))
    engine.add_point(Point(1, 1))
    assert sink.samples == []
    assert engine.cursor is None
    engine.add_point(Point(2, 4))
    assert [(s.x, s.y) for s in sink.samples] == [(0, 0), (1, 1), (2, 4)]
    assert engine.cursor == 2


def test_consecutive_batches_do_not_overlap():
    engine, sink = _engine(Linear(), step=0.5)
    engine.add_point(Point(0, 0))
    engine.add_point(Point(1, 1))
    first = sink.drain()
    engine.add_point(Point(2, 4))
    second = sink.drain()
    assert [s.x for s in first] == [0.0, 0.5, 1.0]
    assert [s.x for s in second] == [1.5, 2.0]
    assert min(s.x for s in second) > max(s.x for s in first)
    assert second[0].x - first[-1].x == 0.5
    assert [s.y for s in second] == [2.5, 4.0]


def test_emitted_x_strictly_increasing_over_stream():
    engine, sink = _engine(Newton(window_size=4), step=0.3)
    for i in range(12):
        engine.add_point(Point(i * 0.7, (i * 0.7) ** 3 - i))
    engine.shutdown()
    xs = [s.x for s in sink.samples]
    assert xs == sorted(xs)
    assert len(set(xs)) == len(xs)
    for a, b in zip(xs, xs[1:]):
        assert b - a == pytest.approx(0.3)


def test_newton_window_is_newest_points(monkeypatch):
    seen = []
    real = scheduler.interpolate

    def spy(method, window, x):
        seen.append(tuple(window))
        return real(method, window, x)

    monkeypatch.setattr(scheduler, "interpolate", spy)
    engine, _ = _engine(Newton(window_size=3))
    pts = [Point(float(i), float(i * i)) for i in range(5)]
    for p in pts:
        engine.add_point(p)
    assert seen, "strategy never called"
    assert all(len(w) == 3 for w in seen)
    assert seen[-1] == tuple(pts[-3:])
    assert len(engine.history) == 5


def test_newton_first_emission_starts_at_window_start():
    engine, sink = _engine(Newton(window_size=3))
    for x in (10.0, 11.0, 12.0):
        engine.add_point(Point(x, 2 * x))
    assert sink.samples[0].x == 10.0


def test_cursor_kept_when_span_too_short():
    engine, sink = _engine(Linear(), step=3.0)
    engine.add_point(Point(0, 0))
    engine.add_point(Point(1, 1))
    assert [s.x for s in sink.drain()] == [0.0]
    engine.add_point(Point(2, 2))
    assert sink.drain() == []
    assert engine.cursor == 0.0
    engine.add_point(Point(4, 4))
    assert [(s.x, s.y) for s in sink.drain()] == [(3.0, 3.0)]


def test_shutdown_flushes_remaining_span():
    engine, sink = _engine(
        Linear(),
        step=0.5,
        history=[Point(0, 0), Point(1, 1), Point(2, 2)],
        cursor=1.0,
    )
    engine.shutdown()
    assert [(s.x, s.y) for s in sink.samples] == [(1.5, 1.5), (2.0, 2.0)]
    assert engine.stopped


def test_shutdown_after_full_coverage_emits_nothing():
    engine, sink = _engine(Linear(), step=0.5)
    engine.add_point(Point(0, 0))
    engine.add_point(Point(1, 1))
    sink.drain()
    engine.shutdown()
    assert sink.samples == []


def test_shutdown_without_cursor_emits_nothing():
    engine, sink = _engine(Newton(window_size=3), history=[Point(0, 0), Point(1, 1), Point(2, 4)])
    engine.shutdown()
    assert sink.samples == []
    engine2, sink2 = _engine(Linear())
    engine2.add_point(Point(0, 0))
    engine2.shutdown()
    assert sink2.samples == []


def test_messages_after_shutdown_rejected():
    engine, sink = _engine(Linear())
    engine.add_point(Point(0, 0))
    engine.shutdown()
    with pytest.raises(EngineStopped):
        engine.add_point(Point(1, 1))
    with pytest.raises(EngineStopped):
        engine.shutdown()
    assert len(engine.history) == 1
    assert sink.samples == []


def test_history_is_read_only_view():
    engine, _ = _engine(Linear())
    engine.add_point(Point(0, 0))
    hist = engine.history
    assert isinstance(hist, tuple)
    assert engine.points_seen == 1


def test_sample_counter_tracks_emissions():
    engine, sink = _engine(Linear(), step=0.25)
    engine.add_point(Point(0, 0))
    engine.add_point(Point(1, 1))
    assert engine.samples_emitted == len(sink.samples) == 5


def test_inexact_step_reaches_final_point():
    engine, sink = _engine(Linear(), step=0.1)
    engine.add_point(Point(0, 0))
    engine.add_point(Point(0.3, 3))
    engine.shutdown()
    assert [s.x for s in sink.samples] == [0.0, 0.1, 0.2, 0.3]
    assert engine.cursor == 0.3


def test_batch_start_rounding_does_not_skip_point():
    # 0.2 + 0.1 rounds above 0.3; the sample on the new point must still appear
    engine, sink = _engine(Linear(), step=0.1)
    engine.add_point(Point(0, 0))
    engine.add_point(Point(0.2, 2))
    assert [s.x for s in sink.drain()] == [0.0, 0.1, 0.2]
    engine.add_point(Point(0.3, 3))
    batch = sink.drain()
    assert [s.x for s in batch] == [0.3]
    assert batch[0].y == pytest.approx(3.0)
    engine.shutdown()
    assert sink.samples == []
