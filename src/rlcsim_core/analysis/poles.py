# src/rlcsim_core/analysis/poles.py
"""
Pole/zero extraction and stability classification for the reduced
second-order circuits.

Poles are the roots of s^2 + b s + c with c = 1/(LC) and b = R/L (series) or
1/(RC) (parallel). Zeros are not computed: each transfer-function tag has a
fixed, known set of them.
"""
import logging
import math
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from ..constants import STABILITY_TOLERANCE
from ..topologies.base import EquivalentCircuit
from ..topologies.base_enums import PoleFormula, TransferFunctionTag
from .results import PoleZeroAnalysis, StabilityStatus, StabilityVerdict

logger = logging.getLogger(__name__)

# s in the numerator of H(s) puts a single zero at the origin.
_ZEROS: Dict[TransferFunctionTag, Tuple[complex, ...]] = {
    TransferFunctionTag.SERIES_RLC_BAND_PASS: (0j,),
    TransferFunctionTag.PARALLEL_RLC_IMPEDANCE: (0j,),
}


def zeros_for(tag: Optional[TransferFunctionTag]) -> Tuple[complex, ...]:
    """The finite zeros of the transfer function selected by `tag`."""
    return _ZEROS.get(tag, ())


def _not_applicable(details: str) -> PoleZeroAnalysis:
    return PoleZeroAnalysis(poles=(), stability=StabilityVerdict(StabilityStatus.NOT_APPLICABLE, details))


def characteristic_coefficients(equivalent: EquivalentCircuit, formula: PoleFormula) -> Optional[Tuple[float, float]]:
    """
    The (b, c) of the monic characteristic polynomial s^2 + b s + c, or None
    when the circuit has no physical second-order dynamics.
    """
    L, C, R = equivalent.L, equivalent.C, equivalent.R
    if L is None or C is None or L <= 0 or C <= 0:
        return None
    if formula is PoleFormula.SERIES:
        b = R / L
    elif formula is PoleFormula.PARALLEL:
        if R == 0:
            return None
        b = 1.0 / (R * C)
    else:  # pragma: no cover - enum is closed
        raise ValueError(f"Unsupported pole formula: {formula}")
    return b, 1.0 / (L * C)


def calculate_poles(equivalent: EquivalentCircuit, formula: PoleFormula) -> PoleZeroAnalysis:
    """
    Solves the characteristic quadratic of the reduced circuit.

    Real roots come out as (-b + sqrt(disc))/2 then (-b - sqrt(disc))/2; a complex
    pair comes out with the positive imaginary part first. Callers that track
    branches (the root locus) rely on this order.

    A non-positive L or C (or, for the parallel form, R == 0) has no physical
    pole set: the result is empty with a NOT_APPLICABLE verdict, not an error.
    """
    coefficients = characteristic_coefficients(equivalent, formula)
    if coefficients is None:
        return _not_applicable(
            "Pole analysis requires positive inductance and capacitance "
            "(and a non-zero resistance for the parallel form)."
        )
    b, c = coefficients

    disc = b * b - 4.0 * c
    if disc >= 0:
        root = math.sqrt(disc)
        poles = (complex((-b + root) / 2.0, 0.0), complex((-b - root) / 2.0, 0.0))
    else:
        real = -b / 2.0
        imag = math.sqrt(-disc) / 2.0
        poles = (complex(real, imag), complex(real, -imag))

    return PoleZeroAnalysis(poles=poles, stability=classify_stability(poles))


def classify_stability(poles: Sequence[complex], tol: float = STABILITY_TOLERANCE) -> StabilityVerdict:
    """
    Classifies a pole set.

    Any pole with Re > tol is UNSTABLE. Otherwise poles with |Re| <= tol lie on
    the imaginary axis: a repeated axis pole is UNSTABLE, simple ones are
    MARGINALLY_STABLE. With every pole strictly in the left half-plane the
    system is STABLE. An empty pole set is NOT_APPLICABLE.
    """
    if len(poles) == 0:
        return StabilityVerdict(StabilityStatus.NOT_APPLICABLE, "No poles to classify.")

    if any(p.real > tol for p in poles):
        return StabilityVerdict(StabilityStatus.UNSTABLE, "At least one pole with Re(p) > 0.")

    axis_poles = [p for p in poles if abs(p.real) <= tol]
    if axis_poles:
        repeated = any(
            abs(p - q) <= tol * max(1.0, abs(p))
            for i, p in enumerate(axis_poles)
            for q in axis_poles[i + 1:]
        )
        if repeated:
            return StabilityVerdict(StabilityStatus.UNSTABLE, "Repeated poles on the imaginary axis.")
        return StabilityVerdict(StabilityStatus.MARGINALLY_STABLE, "Simple poles on the imaginary axis (oscillatory).")

    return StabilityVerdict(StabilityStatus.STABLE, "All poles Re(p) < 0.")


def poles_as_array(analysis: PoleZeroAnalysis, order: int = 2) -> np.ndarray:
    """
    The poles as a fixed-length complex array, padded with complex(nan, nan)
    when the analysis produced none.
    """
    if len(analysis.poles) == order:
        return np.array(analysis.poles, dtype=complex)
    return np.full(order, complex(np.nan, np.nan), dtype=complex)
