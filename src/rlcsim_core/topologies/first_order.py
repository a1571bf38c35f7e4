# src/rlcsim_core/topologies/first_order.py
"""
This module provides the concrete first-order circuit models: the RC and RL
circuits, each in a source-driven (charge / energize) and a source-free
(discharge / de-energize) variant. All of them integrate a single state.
"""

import logging
from typing import Dict, Mapping, Optional

import numpy as np

from .base import EquivalentCircuit, ModelContext, TopologyBase, register_topology
from .base_enums import MetricKind, TransferFunctionTag, WaveformKind


logger = logging.getLogger(__name__)


class _RcCircuit(TopologyBase):
    """A resistor in series with a capacitor; the state is the capacitor voltage."""
    order = 1
    transfer_function_tag = TransferFunctionTag.RC_LOW_PASS
    traces = ("Vc", "i")
    primary_trace = "Vc"
    nonzero_parameters = ("R", "C")

    def reduce(self, parameters: Mapping[str, float]) -> EquivalentCircuit:
        return EquivalentCircuit(R=parameters["R"], C=parameters["C"])

    def derivative(self, t: float, state: np.ndarray, context: ModelContext) -> np.ndarray:
        eq = context.equivalent
        vin = context.excitation.value(t)
        return np.array([(vin - state[0]) / (eq.R * eq.C)])

    def map_outputs(
        self,
        time: np.ndarray,
        states: np.ndarray,
        parameters: Mapping[str, float],
        context: ModelContext,
    ) -> Dict[str, np.ndarray]:
        vc = states[:, 0]
        vin = context.excitation.value(time)
        return {"Vc": vc, "i": (vin - vc) / context.equivalent.R}

    @staticmethod
    def time_constant(equivalent: EquivalentCircuit) -> Optional[float]:
        tau = equivalent.R * equivalent.C
        return tau if tau > 0 else None


class _RlCircuit(TopologyBase):
    """A resistor in series with an inductor; the state is the inductor current."""
    order = 1
    transfer_function_tag = TransferFunctionTag.RL_LOW_PASS
    primary_trace = "iL"
    nonzero_parameters = ("L",)

    def reduce(self, parameters: Mapping[str, float]) -> EquivalentCircuit:
        return EquivalentCircuit(R=parameters["R"], L=parameters["L"])

    def derivative(self, t: float, state: np.ndarray, context: ModelContext) -> np.ndarray:
        eq = context.equivalent
        vin = context.excitation.value(t)
        return np.array([(vin - state[0] * eq.R) / eq.L])

    @staticmethod
    def time_constant(equivalent: EquivalentCircuit) -> Optional[float]:
        # A response that never decays has no time constant.
        if equivalent.R == 0 or equivalent.L / equivalent.R <= 0:
            return None
        return equivalent.L / equivalent.R


@register_topology("1-rc-charge")
class RcCharge(_RcCircuit):
    """Capacitor charging from a source through a resistor."""
    label = "RC Circuit (Charging)"
    parameters = ("V", "R", "C")
    defaults = {"V": 10.0, "R": 1000.0, "C": 1e-6, "tEnd": 0.005, "Freq": 1000.0}
    metrics = (MetricKind.RISE_TIME, MetricKind.SETTLING_TIME)

    def initial_state(self, parameters: Mapping[str, float]) -> np.ndarray:
        return np.zeros(1)

    def steady_state_value(self, parameters: Mapping[str, float], waveform: WaveformKind) -> float:
        return float(parameters["V"]) if waveform is WaveformKind.STEP else 0.0


@register_topology("1-rc-discharge")
class RcDischarge(_RcCircuit):
    """A capacitor pre-charged to V0 discharging through a resistor."""
    label = "RC Circuit (Discharging)"
    parameters = ("V0", "R", "C")
    defaults = {"V0": 10.0, "R": 1000.0, "C": 1e-6, "tEnd": 0.005, "Freq": 1000.0}
    input_kinds = (WaveformKind.STEP,)
    metrics = (MetricKind.SETTLING_TIME,)
    source_driven = False

    def initial_state(self, parameters: Mapping[str, float]) -> np.ndarray:
        return np.array([float(parameters["V0"])])


@register_topology("1-rl-energize")
class RlEnergize(_RlCircuit):
    """Current building up in an inductor driven through a resistor."""
    label = "RL Circuit (Energizing)"
    parameters = ("V", "R", "L")
    defaults = {"V": 10.0, "R": 10.0, "L": 0.01, "tEnd": 0.005, "Freq": 1000.0}
    traces = ("iL", "Vl")
    metrics = (MetricKind.RISE_TIME, MetricKind.SETTLING_TIME)

    def initial_state(self, parameters: Mapping[str, float]) -> np.ndarray:
        return np.zeros(1)

    def map_outputs(
        self,
        time: np.ndarray,
        states: np.ndarray,
        parameters: Mapping[str, float],
        context: ModelContext,
    ) -> Dict[str, np.ndarray]:
        il = states[:, 0]
        vin = context.excitation.value(time)
        return {"iL": il, "Vl": vin - il * context.equivalent.R}

    def steady_state_value(self, parameters: Mapping[str, float], waveform: WaveformKind) -> float:
        if waveform is not WaveformKind.STEP or parameters["R"] <= 0:
            return 0.0
        return parameters["V"] / parameters["R"]


@register_topology("1-rl-deenergize")
class RlDeEnergize(_RlCircuit):
    """An inductor carrying I0 releasing its energy into a resistor."""
    label = "RL Circuit (De-energizing)"
    parameters = ("I0", "R", "L")
    defaults = {"I0": 1.0, "R": 10.0, "L": 0.01, "tEnd": 0.005, "Freq": 1000.0}
    traces = ("iL", "Vr")
    input_kinds = (WaveformKind.STEP,)
    metrics = (MetricKind.SETTLING_TIME,)
    source_driven = False

    def initial_state(self, parameters: Mapping[str, float]) -> np.ndarray:
        return np.array([float(parameters["I0"])])

    def map_outputs(
        self,
        time: np.ndarray,
        states: np.ndarray,
        parameters: Mapping[str, float],
        context: ModelContext,
    ) -> Dict[str, np.ndarray]:
        il = states[:, 0]
        # Voltage across the resistor, opposing the collapsing inductor current.
        return {"iL": il, "Vr": -il * context.equivalent.R}
