# src/rlcsim_core/simulation/execution.py
"""
Provides the raising facade over the simulation router.

`simulate` reports every failure through the result status, which suits an
interactive front end that always wants something to display. Scripts and
batch jobs usually prefer an exception: `run_simulation` returns only COMPLETE
results and raises a single user-facing `SimulationRunError` otherwise, with
the diagnostic report as its message.
"""
import logging
from typing import Any, Mapping, Union

from ..constants import DEFAULT_TIME_POINTS
from ..errors import SimulationRunError, format_diagnostic_report
from ..topologies.base_enums import WaveformKind
from .results import SimulationResult, SimulationStatus
from .router import simulate

logger = logging.getLogger(__name__)


def run_simulation(
    topology_id: str,
    parameters: Mapping[str, Any],
    waveform: Union[WaveformKind, str],
    points: int = DEFAULT_TIME_POINTS,
) -> SimulationResult:
    """
    Runs `simulate` and returns its result if the run completed.

    Raises:
        SimulationRunError: If the topology is unimplemented, the input is
            invalid or the computation failed. The message is the diagnostic
            report of the underlying failure.
    """
    result = simulate(topology_id, parameters, waveform, points=points)
    if result.status is SimulationStatus.COMPLETE:
        return result

    report = result.diagnostic_report
    if report is None:
        report = format_diagnostic_report(
            error_type=f"Simulation Did Not Complete ({result.status})",
            details=result.message,
            suggestion="Review the topology, input waveform and parameters of the request.",
            context={'topology': topology_id, 'waveform': str(waveform)}
        )
    logger.error(f"run_simulation('{topology_id}') did not complete: {result.message}")
    raise SimulationRunError(report)
