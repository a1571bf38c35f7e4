# src/rlcsim_core/analysis/frequency.py
"""
Closed-form Bode analysis.

Each `TransferFunctionTag` has one registered evaluator returning the numerator
and denominator of H(jw) for a reduced circuit. `evaluate_frequency_response`
performs the guarded complex division and the dB / degree conversion for all of
them, so the evaluators themselves stay one-line formulas.
"""
import logging
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from ..constants import DEFAULT_FREQ_MAX_HZ, DEFAULT_FREQ_MIN_HZ, DEFAULT_FREQ_POINTS
from ..topologies.base import EquivalentCircuit
from ..topologies.base_enums import TransferFunctionTag
from .results import FrequencySweep

logger = logging.getLogger(__name__)

NumDen = Tuple[np.ndarray, np.ndarray]
TransferFunctionEvaluator = Callable[[np.ndarray, EquivalentCircuit], NumDen]

TRANSFER_FUNCTION_REGISTRY: Dict[TransferFunctionTag, TransferFunctionEvaluator] = {}


def transfer_function(tag: TransferFunctionTag):
    """Registers the decorated function as the H(jw) evaluator for `tag`."""
    def decorator(func: TransferFunctionEvaluator) -> TransferFunctionEvaluator:
        if tag in TRANSFER_FUNCTION_REGISTRY:
            logger.warning(f"Transfer function '{tag.name}' is being redefined/overwritten.")
        TRANSFER_FUNCTION_REGISTRY[tag] = func
        return func
    return decorator


def generate_frequency_vector(
    f_min: float = DEFAULT_FREQ_MIN_HZ,
    f_max: float = DEFAULT_FREQ_MAX_HZ,
    points: int = DEFAULT_FREQ_POINTS,
) -> np.ndarray:
    """
    Returns `points` frequencies spaced uniformly in log10 between f_min and f_max,
    both end points included.

    Raises:
        ValueError: If the bounds are not positive and increasing, or points < 2.
    """
    if points < 2:
        raise ValueError(f"A frequency sweep needs at least 2 points, got {points}.")
    if not (0 < f_min < f_max):
        raise ValueError(f"Frequency bounds must satisfy 0 < f_min < f_max, got f_min={f_min}, f_max={f_max}.")
    return np.logspace(np.log10(f_min), np.log10(f_max), points, dtype=float)


# --- Registered transfer functions ---

@transfer_function(TransferFunctionTag.RC_LOW_PASS)
def _rc_low_pass(w: np.ndarray, eq: EquivalentCircuit) -> NumDen:
    return np.ones_like(w, dtype=complex), 1 + 1j * w * eq.R * eq.C


@transfer_function(TransferFunctionTag.RL_LOW_PASS)
def _rl_low_pass(w: np.ndarray, eq: EquivalentCircuit) -> NumDen:
    return np.full_like(w, eq.R, dtype=complex), eq.R + 1j * w * eq.L


@transfer_function(TransferFunctionTag.SERIES_RLC_BAND_PASS)
def _series_rlc_band_pass(w: np.ndarray, eq: EquivalentCircuit) -> NumDen:
    num = 1j * w * eq.R * eq.C
    return num, 1 - w**2 * eq.L * eq.C + num


@transfer_function(TransferFunctionTag.PARALLEL_RLC_IMPEDANCE)
def _parallel_rlc_impedance(w: np.ndarray, eq: EquivalentCircuit) -> NumDen:
    num = 1j * w * eq.L
    return num, 1 - w**2 * eq.L * eq.C + num / eq.R


@transfer_function(TransferFunctionTag.SERIES_RLLC_LOW_PASS)
@transfer_function(TransferFunctionTag.SERIES_RLCC_LOW_PASS)
def _series_rlc_low_pass(w: np.ndarray, eq: EquivalentCircuit) -> NumDen:
    # Both composite circuits reduce to the same capacitor-voltage low-pass.
    return np.ones_like(w, dtype=complex), 1 - w**2 * eq.L * eq.C + 1j * w * eq.R * eq.C


def _guarded_divide(num: np.ndarray, den: np.ndarray) -> np.ndarray:
    """Elementwise num/den with a zero result wherever the denominator vanishes."""
    num = np.asarray(num, dtype=complex)
    den = np.asarray(den, dtype=complex)
    h = np.zeros(np.broadcast(num, den).shape, dtype=complex)
    num, den = np.broadcast_arrays(num, den)
    mask = den != 0
    h[mask] = num[mask] / den[mask]
    return h


def evaluate_frequency_response(
    tag: Optional[TransferFunctionTag],
    equivalent: EquivalentCircuit,
    f_min: float = DEFAULT_FREQ_MIN_HZ,
    f_max: float = DEFAULT_FREQ_MAX_HZ,
    points: int = DEFAULT_FREQ_POINTS,
) -> FrequencySweep:
    """
    Evaluates the closed-form H(jw) selected by `tag` for the reduced circuit.

    Magnitude is 20*log10(|H|) in dB (an exactly-zero gain gives -inf) and phase is
    atan2(Im, Re) in degrees. A tag with no registered evaluator degrades to an
    all-zero sweep and a logged warning instead of failing the run.
    """
    freqs = generate_frequency_vector(f_min, f_max, points)
    evaluator = TRANSFER_FUNCTION_REGISTRY.get(tag) if tag is not None else None
    if evaluator is None:
        logger.warning(f"No transfer function is registered for tag {tag!r}; returning an all-zero sweep.")
        return FrequencySweep(frequencies_hz=freqs, magnitude_db=np.zeros_like(freqs), phase_deg=np.zeros_like(freqs))

    w = 2.0 * np.pi * freqs
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        h = _guarded_divide(*evaluator(w, equivalent))
        magnitude_db = 20.0 * np.log10(np.abs(h))
    phase_deg = np.degrees(np.arctan2(h.imag, h.real))

    logger.debug(f"Evaluated {tag.name} over {points} points ({f_min:g} Hz to {f_max:g} Hz).")
    return FrequencySweep(frequencies_hz=freqs, magnitude_db=magnitude_db, phase_deg=phase_deg)
