# tests/test_locus.py
import pytest
import numpy as np
from rlcsim_core.analysis import LocusRequestError, calculate_poles, generate_locus
from rlcsim_core.topologies import get_topology

SERIES_FIXED = {"R": 50.0, "L": 0.01, "C": 1e-6}


class TestGenerateLocus:

    def test_shape_and_sweep_values(self):
        locus = generate_locus("2-rlc-series", SERIES_FIXED, "R", 1.0, 1000.0, samples=50)
        assert locus.poles.shape == (50, 2)
        assert locus.branches.shape == (2, 50)
        assert locus.samples == 50
        assert locus.parameter == "R"
        np.testing.assert_allclose(locus.parameter_values, np.linspace(1.0, 1000.0, 50))

    def test_underdamped_segment_follows_neper_frequency(self):
        # Critical damping at R = 2*sqrt(L/C) = 200 ohm.
        locus = generate_locus("2-rlc-series", SERIES_FIXED, "R", 1.0, 1000.0, samples=50)
        under = locus.parameter_values < 200.0
        expected_real = -locus.parameter_values[under] / (2 * SERIES_FIXED["L"])
        np.testing.assert_allclose(locus.poles[under, 0].real, expected_real)
        np.testing.assert_allclose(locus.poles[under, 1].real, expected_real)
        np.testing.assert_allclose(locus.poles[under, 0], np.conj(locus.poles[under, 1]))
        assert np.all(np.diff(locus.poles[under, 0].real) <= 0)

    def test_overdamped_segment_is_real_and_ordered(self):
        locus = generate_locus("2-rlc-series", SERIES_FIXED, "R", 1.0, 1000.0, samples=50)
        over = locus.parameter_values > 200.0
        branches = locus.poles[over]
        np.testing.assert_array_equal(branches.imag, 0.0)
        assert np.all(branches[:, 0].real >= branches[:, 1].real)

    def test_every_sample_matches_pole_analyzer(self):
        topology = get_topology("3-rlcc-series")
        fixed = {"R": 10.0, "L": 0.01, "C1": 1e-4, "C2": 2e-4}
        locus = generate_locus("3-rlcc-series", fixed, "C1", 1e-5, 1e-3, samples=7)
        for value, poles in zip(locus.parameter_values, locus.poles):
            eq = topology.reduce({**fixed, "C1": value})
            expected = calculate_poles(eq, topology.pole_formula).poles
            np.testing.assert_allclose(poles, expected)

    def test_fixed_parameters_are_not_modified(self):
        fixed = dict(SERIES_FIXED)
        generate_locus("2-rlc-series", fixed, "C", 1e-7, 1e-5, samples=5)
        assert fixed == SERIES_FIXED

    def test_samples_without_poles_are_nan(self):
        locus = generate_locus("2-rlc-series", SERIES_FIXED, "L", 0.0, 0.02, samples=3)
        assert np.all(np.isnan(locus.poles[0]))
        assert np.all(np.isfinite(locus.poles[1:]))

    def test_single_sample(self):
        locus = generate_locus("2-rlc-parallel", SERIES_FIXED, "R", 25.0, 100.0, samples=1)
        np.testing.assert_array_equal(locus.parameter_values, [25.0])
        assert locus.poles.shape == (1, 2)

    def test_amplitude_is_not_required(self):
        locus = generate_locus("3-rllc-series", {"R": 10.0, "L1": 0.01, "L2": 0.01}, "C", 1e-5, 1e-4, samples=4)
        assert np.all(locus.poles.real < 0)


class TestLocusRequestErrors:

    @pytest.mark.parametrize("kwargs, fragment", [
        ({"topology_id": "9-nothing", "sweep_parameter": "R"}, "No circuit model"),
        ({"topology_id": "1-rc-charge", "sweep_parameter": "R"}, "first order"),
        ({"topology_id": "2-rlc-series", "sweep_parameter": "V"}, "Cannot sweep 'V'"),
        ({"topology_id": "2-rlc-series", "sweep_parameter": "tEnd"}, "Cannot sweep 'tEnd'"),
        ({"topology_id": "2-rlc-series", "sweep_parameter": "R", "samples": 0}, "at least one sample"),
        ({"topology_id": "2-rlc-series", "sweep_parameter": "R", "maximum": np.inf}, "must be finite"),
    ])
    def test_rejected_requests(self, kwargs, fragment):
        request = {"parameters": SERIES_FIXED, "minimum": 1.0, "maximum": 10.0}
        request.update(kwargs)
        with pytest.raises(LocusRequestError, match=fragment):
            generate_locus(**request)

    def test_missing_fixed_parameter(self):
        with pytest.raises(LocusRequestError, match="Missing fixed parameter") as excinfo:
            generate_locus("2-rlc-series", {"R": 50.0}, "R", 1.0, 10.0)
        assert "C" in str(excinfo.value) and "L" in str(excinfo.value)

    def test_is_a_value_error_with_report(self):
        with pytest.raises(ValueError) as excinfo:
            generate_locus("2-rlc-series", SERIES_FIXED, "X", 1.0, 10.0)
        report = excinfo.value.get_diagnostic_report()
        assert "Invalid Root-Locus Request" in report
        assert "Parameter:      X" in report
