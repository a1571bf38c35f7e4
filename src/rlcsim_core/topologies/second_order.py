# src/rlcsim_core/topologies/second_order.py
"""
This module provides the second-order circuit models.

The series and parallel RLC circuits integrate two states directly. The
"3rd order" R-L1-L2-C and R-L-C1-C2 circuits are folded into an equivalent
series RLC by `reduce` and reuse its state equations; only their output
mapping differs.
"""

import logging
from typing import Dict, Mapping, Optional

import numpy as np

from .base import (
    EquivalentCircuit,
    ModelContext,
    TopologyBase,
    TransferFunctionCoefficients,
    register_topology,
)
from .base_enums import MetricKind, PoleFormula, TransferFunctionTag, WaveformKind


logger = logging.getLogger(__name__)

ALL_METRICS = (
    MetricKind.RISE_TIME,
    MetricKind.SETTLING_TIME,
    MetricKind.OVERSHOOT,
    MetricKind.PEAK_TIME,
    MetricKind.PEAK_VALUE,
)
REDUCED_ORDER_METRICS = (MetricKind.RISE_TIME, MetricKind.SETTLING_TIME, MetricKind.OVERSHOOT)


def series_capacitance(c1: float, c2: float) -> float:
    """C1*C2/(C1+C2), or 0 when the sum vanishes."""
    total = c1 + c2
    if total == 0:
        return 0.0
    return c1 * c2 / total


@register_topology("2-rlc-series")
class RlcSeries(TopologyBase):
    """
    Series R-L-C driven by a voltage source. State: [Vc, iL].
    The Bode response is taken across the resistor (band-pass).
    """
    label = "Series RLC Circuit"
    order = 2
    parameters = ("V", "R", "L", "C")
    defaults = {"V": 10.0, "R": 50.0, "L": 0.01, "C": 1e-6, "tEnd": 0.01, "Freq": 1000.0}
    traces = ("Vc", "i", "Vr", "Vl")
    primary_trace = "Vc"
    metrics = ALL_METRICS
    transfer_function_tag = TransferFunctionTag.SERIES_RLC_BAND_PASS
    pole_formula = PoleFormula.SERIES
    nonzero_parameters = ("L", "C")

    def reduce(self, parameters: Mapping[str, float]) -> EquivalentCircuit:
        return EquivalentCircuit(R=parameters["R"], L=parameters["L"], C=parameters["C"])

    def initial_state(self, parameters: Mapping[str, float]) -> np.ndarray:
        return np.zeros(2)

    def derivative(self, t: float, state: np.ndarray, context: ModelContext) -> np.ndarray:
        eq = context.equivalent
        vc, il = state
        vin = context.excitation.value(t)
        return np.array([il / eq.C, (vin - vc - il * eq.R) / eq.L])

    def _series_outputs(self, time: np.ndarray, states: np.ndarray, context: ModelContext):
        vc = states[:, 0]
        il = states[:, 1]
        vr = il * context.equivalent.R
        # KVL around the loop gives the voltage across the (total) inductance.
        vl = context.excitation.value(time) - vc - vr
        return vc, il, vr, vl

    def map_outputs(
        self,
        time: np.ndarray,
        states: np.ndarray,
        parameters: Mapping[str, float],
        context: ModelContext,
    ) -> Dict[str, np.ndarray]:
        vc, il, vr, vl = self._series_outputs(time, states, context)
        return {"Vc": vc, "i": il, "Vr": vr, "Vl": vl}

    def steady_state_value(self, parameters: Mapping[str, float], waveform: WaveformKind) -> float:
        return float(parameters["V"]) if waveform is WaveformKind.STEP else 0.0

    def transfer_function_coefficients(self, equivalent: EquivalentCircuit) -> Optional[TransferFunctionCoefficients]:
        rc = equivalent.R * equivalent.C
        return TransferFunctionCoefficients(
            output_symbol="V_r(s)",
            input_symbol="V_{in}(s)",
            a2=equivalent.L * equivalent.C,
            a1=rc,
            numerator_s=rc,
        )


@register_topology("2-rlc-parallel")
class RlcParallel(TopologyBase):
    """
    R, L and C in parallel, driven by a current source whose amplitude is the V
    parameter. State: [Vc, iL].
    """
    label = "Parallel RLC Circuit"
    order = 2
    parameters = ("V", "R", "L", "C")
    defaults = {"V": 1.0, "R": 50.0, "L": 0.01, "C": 1e-5, "tEnd": 0.05, "Freq": 1000.0}
    traces = ("Vc", "iL", "iR", "iC")
    primary_trace = "Vc"
    metrics = ALL_METRICS
    transfer_function_tag = TransferFunctionTag.PARALLEL_RLC_IMPEDANCE
    pole_formula = PoleFormula.PARALLEL
    nonzero_parameters = ("R", "L", "C")

    def reduce(self, parameters: Mapping[str, float]) -> EquivalentCircuit:
        return EquivalentCircuit(R=parameters["R"], L=parameters["L"], C=parameters["C"])

    def initial_state(self, parameters: Mapping[str, float]) -> np.ndarray:
        return np.zeros(2)

    def derivative(self, t: float, state: np.ndarray, context: ModelContext) -> np.ndarray:
        eq = context.equivalent
        vc, il = state
        iin = context.excitation.value(t)
        return np.array([(iin - vc / eq.R - il) / eq.C, vc / eq.L])

    def map_outputs(
        self,
        time: np.ndarray,
        states: np.ndarray,
        parameters: Mapping[str, float],
        context: ModelContext,
    ) -> Dict[str, np.ndarray]:
        vc = states[:, 0]
        il = states[:, 1]
        ir = vc / context.equivalent.R
        ic = context.excitation.value(time) - ir - il
        return {"Vc": vc, "iL": il, "iR": ir, "iC": ic}

    def steady_state_value(self, parameters: Mapping[str, float], waveform: WaveformKind) -> float:
        if waveform is not WaveformKind.STEP:
            return 0.0
        return parameters["V"] * parameters["R"]

    def transfer_function_coefficients(self, equivalent: EquivalentCircuit) -> Optional[TransferFunctionCoefficients]:
        return TransferFunctionCoefficients(
            output_symbol="V(s)",
            input_symbol="I_{in}(s)",
            a2=equivalent.L * equivalent.C,
            a1=equivalent.L / equivalent.R,
            numerator_s=equivalent.L,
        )


@register_topology("3-rllc-series")
class RllcSeries(RlcSeries):
    """Series R-L1-L2-C; the two inductors act as one of L1 + L2."""
    label = "R-L-L-C Series Circuit"
    order = 3
    parameters = ("V", "R", "L1", "L2", "C")
    defaults = {"V": 10.0, "R": 10.0, "L1": 0.01, "L2": 0.01, "C": 1e-4, "tEnd": 0.05, "Freq": 1000.0}
    traces = ("Vc", "i", "Vr", "Vl_total")
    primary_trace = "Vc"
    metrics = REDUCED_ORDER_METRICS
    transfer_function_tag = TransferFunctionTag.SERIES_RLLC_LOW_PASS
    nonzero_parameters = ("L1", "L2", "C")

    def reduce(self, parameters: Mapping[str, float]) -> EquivalentCircuit:
        return EquivalentCircuit(R=parameters["R"], L=parameters["L1"] + parameters["L2"], C=parameters["C"])

    def map_outputs(
        self,
        time: np.ndarray,
        states: np.ndarray,
        parameters: Mapping[str, float],
        context: ModelContext,
    ) -> Dict[str, np.ndarray]:
        vc, il, vr, vl = self._series_outputs(time, states, context)
        return {"Vc": vc, "i": il, "Vr": vr, "Vl_total": vl}

    def transfer_function_coefficients(self, equivalent: EquivalentCircuit) -> Optional[TransferFunctionCoefficients]:
        return TransferFunctionCoefficients(
            output_symbol="V_c(s)",
            input_symbol="V_{in}(s)",
            a2=equivalent.L * equivalent.C,
            a1=equivalent.R * equivalent.C,
        )


@register_topology("3-rlcc-series")
class RlccSeries(RlcSeries):
    """
    Series R-L-C1-C2. The capacitors share one series current, so they behave
    as a single C_eq = C1*C2/(C1+C2) and the individual voltages follow from the
    shared charge q = C_eq * Vc_total.
    """
    label = "R-L-C-C Series Circuit"
    order = 3
    parameters = ("V", "R", "L", "C1", "C2")
    defaults = {"V": 10.0, "R": 10.0, "L": 0.01, "C1": 1e-4, "C2": 1e-4, "tEnd": 0.05, "Freq": 1000.0}
    traces = ("i", "Vc_total", "Vc1", "Vc2", "Vr")
    primary_trace = "Vc_total"
    metrics = REDUCED_ORDER_METRICS
    transfer_function_tag = TransferFunctionTag.SERIES_RLCC_LOW_PASS
    nonzero_parameters = ("L", "C1", "C2")

    def reduce(self, parameters: Mapping[str, float]) -> EquivalentCircuit:
        return EquivalentCircuit(
            R=parameters["R"],
            L=parameters["L"],
            C=series_capacitance(parameters["C1"], parameters["C2"]),
        )

    def map_outputs(
        self,
        time: np.ndarray,
        states: np.ndarray,
        parameters: Mapping[str, float],
        context: ModelContext,
    ) -> Dict[str, np.ndarray]:
        vc_total, il, vr, _ = self._series_outputs(time, states, context)
        charge = vc_total * context.equivalent.C
        return {
            "i": il,
            "Vc_total": vc_total,
            "Vc1": charge / parameters["C1"],
            "Vc2": charge / parameters["C2"],
            "Vr": vr,
        }

    def transfer_function_coefficients(self, equivalent: EquivalentCircuit) -> Optional[TransferFunctionCoefficients]:
        return TransferFunctionCoefficients(
            output_symbol="V_c(s)",
            input_symbol="V_{in}(s)",
            a2=equivalent.L * equivalent.C,
            a1=equivalent.R * equivalent.C,
        )
