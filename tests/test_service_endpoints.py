import pytest

try:
    from fastapi.testclient import TestClient  # type: ignore
    from streaminterp.service import build_app  # type: ignore
    FASTAPI_AVAILABLE = True
except Exception:  # pragma: no cover - optional dependency missing
    FASTAPI_AVAILABLE = False

from streaminterp.config import Config, Linear, Newton


pytestmark = pytest.mark.skipif(not FASTAPI_AVAILABLE, reason="fastapi extra not installed")


def _client(config=None):
    return TestClient(build_app(config))


def test_points_return_new_samples():
    client = _client(Config(Linear(), step=0.5))
    r = client.post("/points", json={"x": 0, "y": 0})
    assert r.status_code == 200
    assert r.json()["samples"] == []
    assert r.json()["cursor"] is None

    r = client.post("/points", json={"x": 1, "y": 2})
    data = r.json()
    assert [s["x"] for s in data["samples"]] == [0.0, 0.5, 1.0]
    assert [s["y"] for s in data["samples"]] == [0.0, 1.0, 2.0]
    assert {s["method"] for s in data["samples"]} == {"linear"}
    assert data["cursor"] == 1.0


def test_stats_and_shutdown():
    client = _client(Config(Newton(window_size=3), step=1.0))
    for x in range(4):
        client.post("/points", json={"x": x, "y": x * x})
    stats = client.get("/stats").json()
    assert stats["method"] == "newton"
    assert stats["window_size"] == 3
    assert stats["points"] == 4
    assert stats["emitted"] == 4
    assert stats["stopped"] is False

    r = client.post("/shutdown")
    assert r.status_code == 200
    assert r.json()["samples"] == []

    late = client.post("/points", json={"x": 9, "y": 9})
    assert late.status_code == 409
    assert client.post("/shutdown").status_code == 409
    assert client.get("/stats").json()["stopped"] is True


def test_rejects_malformed_point():
    client = _client()
    r = client.post("/points", json={"x": "abc"})
    assert r.status_code == 422


def test_healthz():
    client = _client()
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
