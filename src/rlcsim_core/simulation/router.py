# src/rlcsim_core/simulation/router.py
"""
The simulation router: the single entry point that turns a topology id, a
ParameterSet and an input waveform into a complete `SimulationResult`.

Pipeline for a known topology:
    validate -> well-posedness -> reduce -> RK4 integrate -> map outputs
    -> Bode sweep -> finiteness check -> poles/zeros/stability (2nd order)
    -> characteristics -> transfer function -> steady-state value.

`simulate` never raises for bad input or numerical failure; it reports them
through the result status. Use `execution.run_simulation` for a raising API.
"""
import logging
from typing import Any, Mapping, Union

import numpy as np

from ..analysis.characteristics import circuit_characteristics, transfer_function_latex
from ..analysis.frequency import evaluate_frequency_response
from ..analysis.poles import calculate_poles, zeros_for
from ..analysis.results import FrequencySweep
from ..constants import DEFAULT_TIME_POINTS
from ..errors import DiagnosableError
from ..topologies.base import ModelContext, TopologyBase, get_topology
from ..topologies.base_enums import WaveformKind
from ..topologies.exceptions import UnimplementedTopologyError
from ..topologies.waveforms import coerce_waveform_kind
from ..validation import ParameterValidationError, validate_parameters
from .exceptions import NonFiniteResultError
from .integrator import integrate_rk4
from .results import SimulationResult, SimulationStatus, TimeSeries

logger = logging.getLogger(__name__)


def simulate(
    topology_id: str,
    parameters: Mapping[str, Any],
    waveform: Union[WaveformKind, str],
    points: int = DEFAULT_TIME_POINTS,
) -> SimulationResult:
    """
    Runs one complete analysis of `topology_id`.

    Args:
        topology_id: A registered topology id, e.g. '2-rlc-series'.
        parameters: The ParameterSet in base SI units.
        waveform: A WaveformKind or its string value ('Step', 'Ramp', 'Sine').
        points: Number of transient samples.

    Returns:
        A `SimulationResult` whose status is UNIMPLEMENTED for an unknown id,
        ERROR for invalid input or any computation failure (with no partial
        results), and COMPLETE otherwise.
    """
    logger.info(f"--- Starting simulation of '{topology_id}' ({waveform}) ---")

    # Unknown ids are reported before anything about the input is examined.
    try:
        topology = get_topology(topology_id)
    except UnimplementedTopologyError as e:
        logger.warning(str(e))
        return SimulationResult(
            status=SimulationStatus.UNIMPLEMENTED,
            topology_id=topology_id,
            message=str(e),
            diagnostic_report=e.get_diagnostic_report(),
        )

    try:
        kind = coerce_waveform_kind(waveform)
    except ValueError as e:
        logger.error(f"Rejected run of '{topology_id}': {e}")
        return SimulationResult(status=SimulationStatus.ERROR, topology_id=topology_id, message=str(e))

    try:
        clean = validate_parameters(topology, parameters, kind)
    except ParameterValidationError as e:
        logger.error(f"Parameter validation failed for '{topology_id}': {e}")
        return SimulationResult(
            status=SimulationStatus.ERROR,
            topology_id=topology_id,
            waveform=kind,
            message=f"Invalid parameter '{e.parameter}': {e}" if e.parameter else str(e),
            diagnostic_report=e.get_diagnostic_report(),
        )

    try:
        result = _run(topology, clean, kind, points)
    except DiagnosableError as e:
        logger.error(f"Simulation of '{topology_id}' failed: {e}")
        return _error_result(topology_id, kind, clean, e, e.get_diagnostic_report())
    except Exception as e:
        logger.error(f"An unexpected error occurred while simulating '{topology_id}': {e}", exc_info=True)
        return _error_result(topology_id, kind, clean, e, None)

    logger.info(f"Simulation of '{topology_id}' complete.")
    return result


def _error_result(topology_id, kind, clean, error: Exception, report) -> SimulationResult:
    return SimulationResult(
        status=SimulationStatus.ERROR,
        topology_id=topology_id,
        waveform=kind,
        parameters=clean,
        message=f"Simulation failed: {error}",
        diagnostic_report=report,
    )


def _run(topology: TopologyBase, params: Mapping[str, float], kind: WaveformKind, points: int) -> SimulationResult:
    topology.check_well_posed(params)
    equivalent = topology.reduce(params)
    context = ModelContext(equivalent=equivalent, excitation=topology.excitation(kind, params))

    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        integration = integrate_rk4(
            topology.derivative,
            topology.initial_state(params),
            context,
            t_start=0.0,
            t_end=params["tEnd"],
            points=points,
        )
        outputs = topology.map_outputs(integration.time, integration.states, params, context)
    time_series = TimeSeries(time=integration.time, traces={name: outputs[name] for name in topology.traces})

    sweep = evaluate_frequency_response(topology.transfer_function_tag, equivalent)
    _ensure_finite(topology, time_series, sweep)

    poles = ()
    stability = None
    transfer_function = None
    if topology.is_second_order:
        analysis = calculate_poles(equivalent, topology.pole_formula)
        poles = analysis.poles
        stability = analysis.stability
        transfer_function = transfer_function_latex(topology, equivalent)
        logger.debug(f"Poles of '{topology.topology_id}': {poles} ({stability.status}).")

    return SimulationResult(
        status=SimulationStatus.COMPLETE,
        topology_id=topology.topology_id,
        waveform=kind,
        parameters=dict(params),
        time_series=time_series,
        frequency_response=sweep,
        poles=poles,
        zeros=zeros_for(topology.transfer_function_tag),
        stability=stability,
        characteristics=circuit_characteristics(topology, equivalent),
        transfer_function=transfer_function,
        final_value=topology.steady_state_value(params, kind),
        message="Simulation complete.",
    )


def _ensure_finite(topology: TopologyBase, time_series: TimeSeries, sweep: FrequencySweep) -> None:
    """
    Raises NonFiniteResultError for NaN/inf in any trace or in the phase, or NaN
    in the magnitude. A -inf magnitude is a legitimate exactly-zero gain.
    """
    for name, values in time_series.traces.items():
        if not np.all(np.isfinite(values)):
            bad = int(np.argmax(~np.isfinite(values)))
            raise NonFiniteResultError(
                topology_id=topology.topology_id,
                quantity=name,
                details=(
                    f"Trace '{name}' became non-finite at t={time_series.time[bad]:.6g} s "
                    f"(sample {bad} of {len(time_series)})."
                ),
            )
    if not np.all(np.isfinite(sweep.phase_deg)):
        raise NonFiniteResultError(
            topology_id=topology.topology_id, quantity="phase",
            details="The frequency response phase contains non-finite values.",
        )
    if np.any(np.isnan(sweep.magnitude_db)):
        raise NonFiniteResultError(
            topology_id=topology.topology_id, quantity="magnitude",
            details="The frequency response magnitude contains NaN values.",
        )
