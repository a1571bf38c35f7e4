# src/rlcsim_core/analysis/impedance.py
"""
Steady-state AC impedance of a second-order circuit at its source frequency.
"""
import logging
import math
from typing import Dict, Mapping

from ..topologies.base import EquivalentCircuit, get_topology
from ..topologies.base_enums import PoleFormula
from .results import MetricValue

logger = logging.getLogger(__name__)

OHM = "Ω"
SIEMENS = "S"
DEGREE = "°"


def _series_impedance(eq: EquivalentCircuit, w: float) -> Dict[str, MetricValue]:
    x_l = w * eq.L
    x_c = 1.0 / (w * eq.C)
    reactance = x_l - x_c
    z = math.hypot(eq.R, reactance)
    if eq.R == 0:
        theta = math.copysign(90.0, reactance) if reactance != 0 else 0.0
    else:
        theta = math.degrees(math.atan(reactance / eq.R))
    return {
        "xl": MetricValue(x_l, OHM),
        "xc": MetricValue(x_c, OHM),
        "z": MetricValue(z, OHM),
        "theta": MetricValue(theta, DEGREE),
    }


def _parallel_impedance(eq: EquivalentCircuit, w: float) -> Dict[str, MetricValue]:
    g = 1.0 / eq.R
    b_l = 1.0 / (w * eq.L)
    b_c = w * eq.C
    y = math.hypot(g, b_c - b_l)
    # The impedance angle is the negative of the admittance angle.
    theta = -math.degrees(math.atan((b_c - b_l) / g))
    return {
        "g": MetricValue(g, SIEMENS),
        "bl": MetricValue(b_l, SIEMENS),
        "bc": MetricValue(b_c, SIEMENS),
        "y": MetricValue(y, SIEMENS),
        "z": MetricValue(1.0 / y, OHM),
        "theta": MetricValue(theta, DEGREE),
    }


def calculate_impedance(topology_id: str, parameters: Mapping[str, float]) -> Dict[str, MetricValue]:
    """
    Computes reactances (or susceptances), |Z| and the phase angle at the
    `Freq` parameter, using the topology's reduced circuit.

    Returns an empty mapping for first-order circuits and wherever the
    quantities are undefined (Freq, L or C non-positive, or R == 0 for the
    parallel circuit).

    Raises:
        UnimplementedTopologyError: If `topology_id` is not registered.
    """
    topology = get_topology(topology_id)
    if not topology.is_second_order:
        return {}

    freq = parameters.get("Freq", 0.0)
    eq = topology.reduce(parameters)
    if freq <= 0 or eq.L is None or eq.C is None or eq.L <= 0 or eq.C <= 0:
        logger.debug(f"Impedance of '{topology_id}' is undefined for Freq={freq}, L={eq.L}, C={eq.C}.")
        return {}

    w = 2.0 * math.pi * freq
    if topology.pole_formula is PoleFormula.PARALLEL:
        if eq.R == 0:
            return {}
        return _parallel_impedance(eq, w)
    return _series_impedance(eq, w)
