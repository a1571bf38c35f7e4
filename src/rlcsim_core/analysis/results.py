# src/rlcsim_core/analysis/results.py
"""
Defines the immutable data contracts produced by the analysis engines: the
frequency sweep, the pole/zero verdict, the root locus, the circuit
characteristics and the transient metric values.

Every contract is a frozen dataclass, so a result handed to a caller (or embedded
in a `SimulationResult`) can never be modified afterwards.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np


@dataclass(frozen=True)
class FrequencySweep:
    """
    The Bode data of one transfer function over a log-spaced frequency vector.
    All three arrays share the same length.
    """
    frequencies_hz: np.ndarray
    magnitude_db: np.ndarray
    phase_deg: np.ndarray

    def __len__(self) -> int:
        return self.frequencies_hz.shape[0]


class StabilityStatus(Enum):
    STABLE = "Stable"
    UNSTABLE = "Unstable"
    MARGINALLY_STABLE = "Marginally Stable"
    NOT_APPLICABLE = "N/A"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class StabilityVerdict:
    """A stability classification with the human-readable reason behind it."""
    status: StabilityStatus
    details: str

    def __str__(self) -> str:
        return f"{self.status}: {self.details}"


@dataclass(frozen=True)
class PoleZeroAnalysis:
    """
    The poles of a 2nd-order characteristic polynomial, in the order the
    quadratic formula yields them, and the resulting stability verdict.
    `poles` is empty when the analysis is not applicable.
    """
    poles: Tuple[complex, ...]
    stability: StabilityVerdict


@dataclass(frozen=True)
class LocusResult:
    """
    The pole trajectories produced by sweeping one component parameter.

    Attributes:
        topology_id: The topology the locus was generated for.
        parameter: The swept parameter name.
        parameter_values: The swept values, in sweep order. Shape (samples,).
        poles: Complex poles per sample, shape (samples, 2). Column k is branch k.
               Samples with no applicable poles hold complex(nan, nan).
    """
    topology_id: str
    parameter: str
    parameter_values: np.ndarray
    poles: np.ndarray

    @property
    def branches(self) -> np.ndarray:
        """The per-branch view, shape (2, samples)."""
        return self.poles.T

    @property
    def samples(self) -> int:
        return self.parameter_values.shape[0]


class DampingClass(Enum):
    OVERDAMPED = "Overdamped"
    CRITICALLY_DAMPED = "Critically Damped"
    UNDERDAMPED = "Underdamped"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class SecondOrderCharacteristics:
    """
    Attributes:
        alpha: Neper frequency (1/s).
        omega0: Undamped natural frequency (rad/s).
        zeta: Damping ratio, alpha / omega0.
        f0: Natural frequency in Hz, omega0 / (2*pi).
        damping: Damping classification derived from zeta.
    """
    alpha: float
    omega0: float
    zeta: float
    f0: float
    damping: DampingClass


@dataclass(frozen=True)
class FirstOrderCharacteristics:
    """`tau` is the time constant in seconds, None where it is undefined."""
    tau: Optional[float]


Characteristics = Union[FirstOrderCharacteristics, SecondOrderCharacteristics]


@dataclass(frozen=True)
class MetricValue:
    """A single scalar result (transient metric or impedance figure) with its unit symbol."""
    value: float
    unit: str

    def __str__(self) -> str:
        return f"{self.value} {self.unit}"
