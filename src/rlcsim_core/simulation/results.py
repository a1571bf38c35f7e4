# src/rlcsim_core/simulation/results.py
"""
Defines the immutable data contracts returned by the simulation router.

A `SimulationResult` is built fresh for every run and never modified afterwards.
Results of a failed run carry no partial data: every analysis field is None
and `message` / `diagnostic_report` explain the failure.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

import numpy as np

from ..analysis.results import Characteristics, FrequencySweep, StabilityVerdict
from ..topologies.base_enums import WaveformKind


class SimulationStatus(Enum):
    COMPLETE = "complete"
    ERROR = "error"
    UNIMPLEMENTED = "unimplemented"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class TimeSeries:
    """
    The sampled transient response.

    Attributes:
        time: 1-D time grid in seconds.
        traces: Trace name -> 1-D array, each the same length as `time`, in the
                topology's declared trace order.
    """
    time: np.ndarray
    traces: Dict[str, np.ndarray]

    def __post_init__(self):
        for name, values in self.traces.items():
            if values.shape != self.time.shape:
                raise ValueError(
                    f"Trace '{name}' has shape {values.shape}, expected {self.time.shape} to match the time grid."
                )

    def __len__(self) -> int:
        return self.time.shape[0]

    def __getitem__(self, name: str) -> np.ndarray:
        return self.traces[name]


@dataclass(frozen=True)
class SimulationResult:
    """
    The user-facing result of one `simulate` call.

    Attributes:
        status: COMPLETE, ERROR or UNIMPLEMENTED.
        topology_id: The requested topology.
        waveform: The requested input waveform, when it could be interpreted.
        parameters: The clean ParameterSet the run used (empty if validation failed).
        time_series: Transient traces (COMPLETE only).
        frequency_response: Bode sweep (COMPLETE only).
        poles: Poles in quadratic-formula order; empty for first-order circuits.
        zeros: Finite zeros of the transfer function.
        stability: Stability verdict; None for first-order circuits.
        characteristics: First- or second-order characteristics.
        transfer_function: LaTeX rendering of H(s) for second-order circuits.
        final_value: Steady-state value of the primary trace (Step only, else 0).
        message: Human-readable status message.
        diagnostic_report: Full diagnostic report for ERROR results raised by a
                           diagnosable error.
    """
    status: SimulationStatus
    topology_id: str
    waveform: Optional[WaveformKind] = None
    parameters: Mapping[str, float] = field(default_factory=dict)
    time_series: Optional[TimeSeries] = None
    frequency_response: Optional[FrequencySweep] = None
    poles: Tuple[complex, ...] = ()
    zeros: Tuple[complex, ...] = ()
    stability: Optional[StabilityVerdict] = None
    characteristics: Optional[Characteristics] = None
    transfer_function: Optional[str] = None
    final_value: float = 0.0
    message: str = ""
    diagnostic_report: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is SimulationStatus.COMPLETE
