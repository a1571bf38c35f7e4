# tests/conftest.py
import pytest
import numpy as np
from rlcsim_core import simulate
from rlcsim_core.simulation import TimeSeries


# Component values shared by many tests. Each fixture returns a fresh dict so a
# test may modify it freely.

@pytest.fixture
def rc_charge_params():
    # tau = RC = 1 ms
    return {"V": 10.0, "R": 1000.0, "C": 1e-6, "tEnd": 0.005}


@pytest.fixture
def series_rlc_params():
    # alpha = 2500 Np/s, omega0 = 1e4 rad/s, zeta = 0.25 (underdamped)
    return {"V": 10.0, "R": 50.0, "L": 0.01, "C": 1e-6, "tEnd": 0.01}


@pytest.fixture
def parallel_rlc_params():
    # alpha = 1/(2RC) = 1000 Np/s, omega0 = 1/sqrt(LC) ~ 3162 rad/s
    return {"V": 1.0, "R": 50.0, "L": 0.01, "C": 1e-5, "tEnd": 0.05}


@pytest.fixture
def series_rlc_result(series_rlc_params):
    result = simulate("2-rlc-series", series_rlc_params, "Step")
    assert result.ok, result.message
    return result


@pytest.fixture
def rc_charge_result(rc_charge_params):
    result = simulate("1-rc-charge", rc_charge_params, "Step")
    assert result.ok, result.message
    return result


def make_time_series(signal_fn, t_end: float = 1.0, points: int = 1001, trace: str = "Vc") -> TimeSeries:
    """Builds a single-trace TimeSeries by sampling signal_fn on a uniform grid."""
    time = np.linspace(0.0, t_end, points)
    return TimeSeries(time=time, traces={trace: np.asarray(signal_fn(time), dtype=float)})


@pytest.fixture
def series_factory():
    return make_time_series
