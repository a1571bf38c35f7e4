# src/rlcsim_core/analysis/locus.py
"""
Root-locus generation: the pole trajectories of a second-order circuit as one
of its component values is swept linearly while the others are held fixed.
"""
import logging
from typing import Mapping

import numpy as np

from ..constants import DEFAULT_LOCUS_SAMPLES
from ..topologies.base import get_topology
from ..topologies.exceptions import UnimplementedTopologyError
from .exceptions import LocusRequestError
from .poles import calculate_poles, poles_as_array
from .results import LocusResult

logger = logging.getLogger(__name__)


def generate_locus(
    topology_id: str,
    parameters: Mapping[str, float],
    sweep_parameter: str,
    minimum: float,
    maximum: float,
    samples: int = DEFAULT_LOCUS_SAMPLES,
) -> LocusResult:
    """
    Sweeps `sweep_parameter` over linspace(minimum, maximum, samples) and
    recomputes the reduced circuit and its poles at every sample.

    Branch k of the result is always the k-th root returned by the pole
    analyzer, so a branch may jump between real roots where the quadratic
    formula reorders them. Samples without an applicable pole set (e.g. a
    non-positive L or C) hold complex(nan, nan) in both branches.

    Raises:
        LocusRequestError: For an unknown or first-order topology, a parameter
            that is not one of the topology's R/L/C parameters, missing fixed
            parameters, non-finite bounds or fewer than one sample.
    """
    try:
        topology = get_topology(topology_id)
    except UnimplementedTopologyError as e:
        raise LocusRequestError(topology_id=topology_id, details=str(e)) from e

    if not topology.is_second_order:
        raise LocusRequestError(
            topology_id=topology_id,
            details=f"Topology '{topology_id}' is first order and has no pole pair to trace.",
        )
    if sweep_parameter not in topology.component_parameters:
        raise LocusRequestError(
            topology_id=topology_id,
            parameter=sweep_parameter,
            details=(
                f"Cannot sweep '{sweep_parameter}'. "
                f"Sweepable parameters of '{topology_id}': {', '.join(topology.component_parameters)}."
            ),
        )
    missing = [p for p in topology.component_parameters if p != sweep_parameter and p not in parameters]
    if missing:
        raise LocusRequestError(
            topology_id=topology_id,
            details=f"Missing fixed parameter(s) for the sweep: {', '.join(missing)}.",
        )
    if samples < 1:
        raise LocusRequestError(
            topology_id=topology_id, parameter=sweep_parameter,
            details=f"A root locus needs at least one sample, got {samples}.",
        )
    if not (np.isfinite(minimum) and np.isfinite(maximum)):
        raise LocusRequestError(
            topology_id=topology_id, parameter=sweep_parameter,
            details=f"Sweep bounds must be finite, got [{minimum}, {maximum}].",
        )

    values = np.linspace(minimum, maximum, samples, dtype=float)
    poles = np.empty((samples, 2), dtype=complex)
    swept = dict(parameters)
    for i, value in enumerate(values):
        swept[sweep_parameter] = float(value)
        analysis = calculate_poles(topology.reduce(swept), topology.pole_formula)
        poles[i] = poles_as_array(analysis)

    logger.info(
        f"Generated root locus for '{topology_id}' sweeping {sweep_parameter} "
        f"from {minimum:g} to {maximum:g} ({samples} samples)."
    )
    return LocusResult(
        topology_id=topology_id,
        parameter=sweep_parameter,
        parameter_values=values,
        poles=poles,
    )
