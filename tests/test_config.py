import math

import pytest

from streaminterp.config import Config, Linear, Newton, method_tag, min_points


def test_tags_and_minimums():
    assert method_tag(Linear()) == "linear"
    assert method_tag(Newton(3)) == "newton"
    assert min_points(Linear()) == 2
    assert min_points(Newton(window_size=6)) == 6
    cfg = Config(Newton(window_size=3), step=0.25)
    assert (cfg.tag, cfg.min_points) == ("newton", 3)


@pytest.mark.parametrize("step", [0.0, -1.0, math.nan])
def test_config_rejects_non_positive_step(step):
    with pytest.raises(ValueError):
        Config(Linear(), step=step)


def test_newton_rejects_small_window():
    with pytest.raises(ValueError):
        Newton(window_size=1)


def test_config_is_frozen():
    cfg = Config(Linear())
    with pytest.raises(Exception):
        cfg.step = 2.0  # type: ignore[misc]
