# tests/test_poles.py
import math

import pytest
import numpy as np
from rlcsim_core.analysis import (
    StabilityStatus,
    calculate_poles,
    classify_stability,
    zeros_for,
)
from rlcsim_core.analysis.poles import characteristic_coefficients, poles_as_array
from rlcsim_core.topologies import EquivalentCircuit, PoleFormula, TransferFunctionTag


class TestCalculatePoles:

    def test_underdamped_series_pair(self):
        eq = EquivalentCircuit(R=50.0, L=0.01, C=1e-6)
        analysis = calculate_poles(eq, PoleFormula.SERIES)
        p1, p2 = analysis.poles
        assert p1.real == pytest.approx(-2500.0)
        assert p1.imag > 0
        assert p2 == p1.conjugate()
        # Vieta: sum = -R/L, product = 1/(LC)
        assert (p1 + p2).real == pytest.approx(-eq.R / eq.L)
        assert (p1 * p2).real == pytest.approx(1.0 / (eq.L * eq.C))
        assert analysis.stability.status is StabilityStatus.STABLE

    def test_overdamped_series_real_roots_in_formula_order(self):
        eq = EquivalentCircuit(R=1000.0, L=0.01, C=1e-6)
        p1, p2 = calculate_poles(eq, PoleFormula.SERIES).poles
        assert p1.imag == 0.0 and p2.imag == 0.0
        assert p1.real > p2.real
        expected = np.sort(np.roots([1.0, eq.R / eq.L, 1.0 / (eq.L * eq.C)]).real)[::-1]
        np.testing.assert_allclose([p1.real, p2.real], expected, rtol=1e-9)

    def test_parallel_uses_rc_damping(self):
        eq = EquivalentCircuit(R=50.0, L=0.01, C=1e-5)
        p1, p2 = calculate_poles(eq, PoleFormula.PARALLEL).poles
        assert (p1 + p2).real == pytest.approx(-1.0 / (eq.R * eq.C))
        assert (p1 * p2).real == pytest.approx(1.0 / (eq.L * eq.C))

    def test_lossless_series_is_marginally_stable(self):
        analysis = calculate_poles(EquivalentCircuit(R=0.0, L=0.01, C=1e-6), PoleFormula.SERIES)
        p1, p2 = analysis.poles
        assert p1.real == 0.0
        assert p1.imag == pytest.approx(1e4)
        assert p2.imag == pytest.approx(-1e4)
        assert analysis.stability.status is StabilityStatus.MARGINALLY_STABLE

    def test_negative_resistance_is_unstable(self):
        analysis = calculate_poles(EquivalentCircuit(R=-50.0, L=0.01, C=1e-6), PoleFormula.SERIES)
        assert analysis.stability.status is StabilityStatus.UNSTABLE
        assert all(p.real > 0 for p in analysis.poles)

    @pytest.mark.parametrize("eq, formula", [
        (EquivalentCircuit(R=50.0, L=0.0, C=1e-6), PoleFormula.SERIES),
        (EquivalentCircuit(R=50.0, L=0.01, C=-1e-6), PoleFormula.SERIES),
        (EquivalentCircuit(R=50.0, L=None, C=1e-6), PoleFormula.SERIES),
        (EquivalentCircuit(R=0.0, L=0.01, C=1e-6), PoleFormula.PARALLEL),
    ])
    def test_not_applicable_without_physical_dynamics(self, eq, formula):
        analysis = calculate_poles(eq, formula)
        assert analysis.poles == ()
        assert analysis.stability.status is StabilityStatus.NOT_APPLICABLE
        assert characteristic_coefficients(eq, formula) is None

    def test_poles_as_array_pads_with_nan(self):
        empty = calculate_poles(EquivalentCircuit(R=1.0, L=0.0, C=1.0), PoleFormula.SERIES)
        padded = poles_as_array(empty)
        assert padded.shape == (2,)
        assert np.all(np.isnan(padded))


class TestClassifyStability:

    @pytest.mark.parametrize("poles, status", [
        ([complex(-1, 2), complex(-1, -2)], StabilityStatus.STABLE),
        ([complex(-1, 0), complex(-1, 0)], StabilityStatus.STABLE),
        ([complex(1e-3, 0), complex(-5, 0)], StabilityStatus.UNSTABLE),
        ([complex(0, 3), complex(0, -3)], StabilityStatus.MARGINALLY_STABLE),
        ([complex(0, 0), complex(-2, 0)], StabilityStatus.MARGINALLY_STABLE),
        ([complex(0, 3), complex(0, 3)], StabilityStatus.UNSTABLE),
        ([complex(0, 0), complex(0, 0)], StabilityStatus.UNSTABLE),
        ([], StabilityStatus.NOT_APPLICABLE),
    ])
    def test_classification(self, poles, status):
        assert classify_stability(poles).status is status

    def test_real_part_within_tolerance_counts_as_axis(self):
        verdict = classify_stability([complex(1e-12, 5), complex(1e-12, -5)])
        assert verdict.status is StabilityStatus.MARGINALLY_STABLE

    def test_verdict_string(self):
        verdict = classify_stability([complex(-1, 0), complex(-2, 0)])
        assert str(verdict) == "Stable: All poles Re(p) < 0."


class TestZeros:

    def test_zero_at_origin_for_band_pass_and_impedance(self):
        assert zeros_for(TransferFunctionTag.SERIES_RLC_BAND_PASS) == (0j,)
        assert zeros_for(TransferFunctionTag.PARALLEL_RLC_IMPEDANCE) == (0j,)

    @pytest.mark.parametrize("tag", [
        TransferFunctionTag.RC_LOW_PASS,
        TransferFunctionTag.RL_LOW_PASS,
        TransferFunctionTag.SERIES_RLLC_LOW_PASS,
        TransferFunctionTag.SERIES_RLCC_LOW_PASS,
        None,
    ])
    def test_no_zeros_otherwise(self, tag):
        assert zeros_for(tag) == ()


def test_natural_frequency_of_lossless_pair():
    L, C = 0.02, 5e-6
    p1, _ = calculate_poles(EquivalentCircuit(R=0.0, L=L, C=C), PoleFormula.SERIES).poles
    assert p1.imag == pytest.approx(1.0 / math.sqrt(L * C))
