"""
Tests for controller configuration.
"""

import dataclasses

import pytest

from mpc_controller import config
from mpc_controller.config import MPCConfig


def test_defaults():
    cfg = MPCConfig()

    assert cfg.horizon == 10
    assert cfg.dt == pytest.approx(0.1)
    assert cfg.lf == pytest.approx(2.67)
    assert cfg.ref_v == pytest.approx(70.0)
    assert cfg.max_steering == pytest.approx(0.436332)
    assert cfg.max_throttle == pytest.approx(1.0)
    assert cfg.latency == pytest.approx(0.1)
    assert cfg.max_solve_time == pytest.approx(0.5)
    assert cfg.steering_sign == config.STEERING_SIGN == -1.0
    assert (cfg.weight_cte, cfg.weight_epsi, cfg.weight_v) == (2000.0, 2000.0, 1.0)
    assert (cfg.weight_delta, cfg.weight_a) == (10.0, 10.0)
    assert (cfg.weight_delta_rate, cfg.weight_a_rate) == (100.0, 100.0)


def test_config_is_frozen():
    cfg = MPCConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.horizon = 20


def test_from_dict_overrides():
    cfg = MPCConfig.from_dict({"horizon": 15, "ref_v": 40.0})

    assert cfg.horizon == 15
    assert cfg.ref_v == 40.0
    assert cfg.dt == config.DT


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError, match="speed_limit"):
        MPCConfig.from_dict({"speed_limit": 10})


@pytest.mark.parametrize("overrides", [
    {"horizon": 1},
    {"dt": 0.0},
    {"latency": -0.1},
    {"max_steering": 0.0},
    {"max_solve_time": 0.0},
    {"steering_sign": 0.5},
])
def test_invalid_values(overrides):
    with pytest.raises(ValueError):
        MPCConfig(**overrides)
