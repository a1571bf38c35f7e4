# src/rlcsim_core/simulation/__init__.py
from .exceptions import (
    IntegrationInputError,
    NonFiniteResultError,
)
from .integrator import IntegrationResult, integrate_rk4
from .results import SimulationResult, SimulationStatus, TimeSeries
from .router import simulate
from .execution import run_simulation

__all__ = [
    # Exceptions
    "IntegrationInputError",
    "NonFiniteResultError",
    # Integrator
    "IntegrationResult",
    "integrate_rk4",
    # Result Contracts
    "SimulationResult",
    "SimulationStatus",
    "TimeSeries",
    # Entry Points
    "simulate",
    "run_simulation",
]
