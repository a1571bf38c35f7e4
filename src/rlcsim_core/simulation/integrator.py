# src/rlcsim_core/simulation/integrator.py
"""
Fixed-step, classical 4th-order Runge-Kutta integration of a state-space model.

The integrator knows nothing about circuits: it advances any `derivative(t, state,
params)` callable over a uniform time grid. There is no error control; accuracy
is governed solely by the number of points.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

from ..constants import DEFAULT_TIME_POINTS
from .exceptions import IntegrationInputError

logger = logging.getLogger(__name__)

DerivativeFn = Callable[[float, np.ndarray, Any], np.ndarray]


@dataclass(frozen=True)
class IntegrationResult:
    """
    The raw output of one integration run.

    Attributes:
        time: The uniform time grid, shape (points,). time[0] == t_start and
              time[-1] == t_end (up to floating-point rounding).
        states: The state history, shape (points, n). states[0] is the initial state.
    """
    time: np.ndarray
    states: np.ndarray

    @property
    def points(self) -> int:
        return self.time.shape[0]


def integrate_rk4(
    derivative: DerivativeFn,
    initial_state: np.ndarray,
    parameters: Any,
    t_start: float,
    t_end: float,
    points: int = DEFAULT_TIME_POINTS,
) -> IntegrationResult:
    """
    Integrates `derivative` from `t_start` to `t_end` with the classical RK4 scheme.

    Args:
        derivative: f(t, state, parameters) returning dstate/dt with the shape of state.
        initial_state: The state vector at t_start.
        parameters: Passed through unchanged to every derivative call.
        t_start: Start of the time grid.
        t_end: End of the time grid; must be greater than t_start.
        points: Number of samples, including both end points.

    Returns:
        An `IntegrationResult` with exactly `points` samples.

    Raises:
        IntegrationInputError: If fewer than two points are requested or the
            interval is empty, reversed or non-finite.

    Non-finite values produced by `derivative` are not trapped here; they
    propagate into the returned states for the caller to judge.
    """
    if points < 2:
        raise IntegrationInputError(
            details=f"At least two time points are required, got {points}.",
            t_start=t_start, t_end=t_end, points=points,
        )
    if not (np.isfinite(t_start) and np.isfinite(t_end)) or t_end <= t_start:
        raise IntegrationInputError(
            details=f"The time interval [{t_start}, {t_end}] is empty or not finite.",
            t_start=t_start, t_end=t_end, points=points,
        )

    h = (t_end - t_start) / (points - 1)
    time = t_start + h * np.arange(points, dtype=float)

    state = np.array(initial_state, dtype=float)
    states = np.empty((points, state.shape[0]), dtype=float)
    states[0] = state

    half_h = 0.5 * h
    for i in range(points - 1):
        t = time[i]
        k1 = derivative(t, state, parameters)
        k2 = derivative(t + half_h, state + half_h * k1, parameters)
        k3 = derivative(t + half_h, state + half_h * k2, parameters)
        k4 = derivative(t + h, state + h * k3, parameters)
        state = state + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)
        states[i + 1] = state

    logger.debug(f"RK4 integrated {state.shape[0]} state(s) over {points} points with h={h:.4e} s.")
    return IntegrationResult(time=time, states=states)
