# tests/test_metrics.py
import math

import pytest
import numpy as np
from rlcsim_core.analysis import MetricsInputError, MetricValue, calculate_metrics
from rlcsim_core.analysis.metrics import find_crossing, settling_time
from rlcsim_core.topologies import MetricKind

ALL_KINDS = list(MetricKind)


def _first_order_rise(t, tau=0.1):
    return 1.0 - np.exp(-t / tau)


def _underdamped(t):
    # zeta = 0.2, omega_n = 20 rad/s, unit step response
    zeta, wn = 0.2, 20.0
    wd = wn * math.sqrt(1 - zeta**2)
    return 1.0 - np.exp(-zeta * wn * t) * (np.cos(wd * t) + zeta / math.sqrt(1 - zeta**2) * np.sin(wd * t))


class TestCalculateMetrics:

    def test_first_order_rise_and_settling(self, series_factory):
        ts = series_factory(_first_order_rise, t_end=1.0, points=1001)
        metrics = calculate_metrics(ts, "Vc", 1.0, [MetricKind.RISE_TIME, MetricKind.SETTLING_TIME])
        assert set(metrics) == {MetricKind.RISE_TIME, MetricKind.SETTLING_TIME}
        assert metrics[MetricKind.RISE_TIME].value == pytest.approx(0.1 * math.log(9), abs=2e-3)
        assert metrics[MetricKind.RISE_TIME].unit == "s"
        assert metrics[MetricKind.SETTLING_TIME].value == pytest.approx(0.1 * math.log(50), abs=2e-3)

    def test_monotone_response_has_no_overshoot(self, series_factory):
        ts = series_factory(_first_order_rise)
        metrics = calculate_metrics(ts, "Vc", 1.0, ALL_KINDS)
        assert MetricKind.OVERSHOOT not in metrics
        assert metrics[MetricKind.PEAK_TIME].value == pytest.approx(1.0)

    def test_underdamped_overshoot(self, series_factory):
        ts = series_factory(_underdamped, t_end=2.0, points=20001)
        metrics = calculate_metrics(ts, "Vc", 1.0, ALL_KINDS)
        expected_os = 100.0 * math.exp(-math.pi * 0.2 / math.sqrt(1 - 0.04))
        assert metrics[MetricKind.OVERSHOOT].value == pytest.approx(expected_os, abs=0.01)
        assert metrics[MetricKind.OVERSHOOT].unit == "%"
        peak = metrics[MetricKind.PEAK_VALUE].value
        assert metrics[MetricKind.OVERSHOOT].value == pytest.approx((peak - 1.0) * 100.0)
        wd = 20.0 * math.sqrt(1 - 0.04)
        assert metrics[MetricKind.PEAK_TIME].value == pytest.approx(math.pi / wd, abs=2e-4)

    def test_negative_step_overshoot_and_settling(self, series_factory):
        ts = series_factory(lambda t: -_underdamped(t), t_end=2.0, points=20001)
        metrics = calculate_metrics(ts, "Vc", -1.0, ALL_KINDS)
        expected_os = 100.0 * math.exp(-math.pi * 0.2 / math.sqrt(1 - 0.04))
        assert metrics[MetricKind.OVERSHOOT].value == pytest.approx(expected_os, abs=0.01)
        assert metrics[MetricKind.PEAK_VALUE].value == pytest.approx(-1.0 - expected_os / 100.0, abs=1e-4)
        wd = 20.0 * math.sqrt(1 - 0.04)
        assert metrics[MetricKind.PEAK_TIME].value == pytest.approx(math.pi / wd, abs=2e-4)
        mirrored = calculate_metrics(series_factory(_underdamped, t_end=2.0, points=20001), "Vc", 1.0, ALL_KINDS)
        assert metrics[MetricKind.SETTLING_TIME].value == mirrored[MetricKind.SETTLING_TIME].value
        assert metrics[MetricKind.SETTLING_TIME].value < 2.0
        assert metrics[MetricKind.RISE_TIME].value == pytest.approx(mirrored[MetricKind.RISE_TIME].value)

    def test_monotone_negative_step_has_no_overshoot(self, series_factory):
        ts = series_factory(lambda t: -_first_order_rise(t))
        metrics = calculate_metrics(ts, "Vc", -1.0, ALL_KINDS)
        assert MetricKind.OVERSHOOT not in metrics
        assert metrics[MetricKind.PEAK_VALUE].value == pytest.approx(-1.0, abs=1e-4)

    def test_peak_is_reported_with_overshoot_request(self, series_factory):
        ts = series_factory(_underdamped, t_end=2.0)
        metrics = calculate_metrics(ts, "Vc", 1.0, [MetricKind.OVERSHOOT])
        assert MetricKind.PEAK_VALUE in metrics
        assert MetricKind.PEAK_TIME in metrics

    def test_peak_uses_first_maximum(self):
        from rlcsim_core.simulation import TimeSeries
        ts = TimeSeries(time=np.array([0.0, 1.0, 2.0, 3.0]), traces={"Vc": np.array([0.0, 2.0, 2.0, 1.0])})
        metrics = calculate_metrics(ts, "Vc", 1.0, [MetricKind.PEAK_TIME])
        assert metrics[MetricKind.PEAK_TIME].value == 1.0
        assert metrics[MetricKind.PEAK_VALUE].value == 2.0

    def test_zero_final_value_has_no_overshoot(self, series_factory):
        ts = series_factory(lambda t: np.exp(-t / 0.1))
        metrics = calculate_metrics(ts, "Vc", 0.0, ALL_KINDS)
        assert MetricKind.OVERSHOOT not in metrics
        assert MetricKind.PEAK_VALUE in metrics

    def test_rise_time_omitted_when_threshold_never_reached(self, series_factory):
        ts = series_factory(lambda t: 0.5 * (1.0 - np.exp(-t / 0.1)))
        metrics = calculate_metrics(ts, "Vc", 1.0, [MetricKind.RISE_TIME])
        assert metrics == {}

    def test_units_follow_trace(self, series_factory):
        ts = series_factory(_first_order_rise, trace="iL")
        metrics = calculate_metrics(ts, "iL", 1.0, [MetricKind.PEAK_VALUE])
        assert metrics[MetricKind.PEAK_VALUE] == MetricValue(metrics[MetricKind.PEAK_VALUE].value, "A")

    def test_unknown_trace(self, series_factory):
        ts = series_factory(_first_order_rise)
        with pytest.raises(MetricsInputError) as excinfo:
            calculate_metrics(ts, "Vx", 1.0, ALL_KINDS)
        assert "Unknown trace 'Vx'" in str(excinfo.value)
        assert "Vc" in str(excinfo.value)

    def test_no_kinds_requested(self, series_factory):
        assert calculate_metrics(series_factory(_first_order_rise), "Vc", 1.0, []) == {}


class TestCrossingAndSettling:

    def test_rising_crossing_reports_first_sample_at_or_above(self):
        time = np.array([0.0, 1.0, 2.0, 3.0])
        signal = np.array([0.0, 0.4, 0.6, 1.0])
        assert find_crossing(time, signal, 0.5) == 2.0

    def test_falling_crossing(self):
        time = np.array([0.0, 1.0, 2.0, 3.0])
        signal = np.array([1.0, 0.8, 0.3, 0.1])
        assert find_crossing(time, signal, 0.5) == 2.0

    def test_no_crossing(self):
        time = np.array([0.0, 1.0])
        assert find_crossing(time, np.array([0.1, 0.2]), 0.5) is None

    def test_settling_reports_sample_after_last_excursion(self):
        time = np.arange(6, dtype=float)
        signal = np.array([0.0, 1.5, 0.9, 1.01, 0.99, 1.0])
        assert settling_time(time, signal, 1.0) == 3.0

    def test_settling_band_for_negative_final_value(self):
        time = np.arange(6, dtype=float)
        signal = np.array([0.0, -1.5, -0.9, -1.01, -0.99, -1.0])
        assert settling_time(time, signal, -1.0) == 3.0

    def test_always_inside_band_settles_immediately(self):
        time = np.arange(4, dtype=float)
        assert settling_time(time, np.ones(4), 1.0) == 0.0

    def test_never_settles_reports_last_sample(self):
        time = np.arange(4, dtype=float)
        assert settling_time(time, np.array([0.0, 0.0, 0.0, 0.5]), 1.0) == 3.0
