# src/rlcsim_core/analysis/characteristics.py
"""
Derived circuit characteristics: the time constant of a first-order circuit, the
damping figures of a second-order one, and the LaTeX rendering of H(s).
"""
import logging
import math
from typing import Optional

from ..constants import CRITICAL_DAMPING_TOLERANCE
from ..topologies.base import EquivalentCircuit, TopologyBase, TransferFunctionCoefficients
from .poles import characteristic_coefficients
from .results import Characteristics, DampingClass, FirstOrderCharacteristics, SecondOrderCharacteristics

logger = logging.getLogger(__name__)


def classify_damping(zeta: float, tol: float = CRITICAL_DAMPING_TOLERANCE) -> DampingClass:
    if abs(zeta - 1.0) <= tol:
        return DampingClass.CRITICALLY_DAMPED
    if zeta > 1.0:
        return DampingClass.OVERDAMPED
    return DampingClass.UNDERDAMPED


def second_order_characteristics(topology: TopologyBase, equivalent: EquivalentCircuit) -> Optional[SecondOrderCharacteristics]:
    """
    alpha is half the s-coefficient of the characteristic polynomial, omega0 the
    square root of its constant term; both follow the topology's pole formula.
    Returns None when the circuit has no second-order dynamics.
    """
    coefficients = characteristic_coefficients(equivalent, topology.pole_formula)
    if coefficients is None:
        return None
    b, c = coefficients
    alpha = b / 2.0
    omega0 = math.sqrt(c)
    zeta = alpha / omega0
    return SecondOrderCharacteristics(
        alpha=alpha,
        omega0=omega0,
        zeta=zeta,
        f0=omega0 / (2.0 * math.pi),
        damping=classify_damping(zeta),
    )


def circuit_characteristics(topology: TopologyBase, equivalent: EquivalentCircuit) -> Optional[Characteristics]:
    if topology.is_second_order:
        return second_order_characteristics(topology, equivalent)
    return FirstOrderCharacteristics(tau=topology.time_constant(equivalent))


# --- Transfer-function rendering ---

def format_coefficient(value: float) -> str:
    """
    Formats a polynomial coefficient for display, avoiding exponent notation
    for everything but very large magnitudes.

    >>> format_coefficient(1e-6)
    '0.000001'
    >>> format_coefficient(0.00005)
    '0.00005'
    >>> format_coefficient(2.5e7)
    '2.50e+07'
    """
    if value == 0:
        return "0"
    if value == 1:
        return "1"
    magnitude = abs(value)
    if magnitude < 1e-3:
        text = f"{value:.10f}"
    elif magnitude < 1:
        text = f"{value:.6f}"
    elif magnitude > 1e6:
        return f"{value:.2e}"
    else:
        text = f"{value:.4f}"
    return text.rstrip("0").rstrip(".")


def render_transfer_function(coefficients: TransferFunctionCoefficients) -> str:
    """Renders H(s) as a display-math LaTeX string."""
    numerator = "1" if coefficients.numerator_s is None else f"{format_coefficient(coefficients.numerator_s)} s"
    denominator = f"{format_coefficient(coefficients.a2)} s^2 + {format_coefficient(coefficients.a1)} s + 1"
    return (
        f"$$H(s) = \\frac{{{coefficients.output_symbol}}}{{{coefficients.input_symbol}}}"
        f" = \\frac{{{numerator}}}{{{denominator}}}$$"
    )


def transfer_function_latex(topology: TopologyBase, equivalent: EquivalentCircuit) -> Optional[str]:
    coefficients = topology.transfer_function_coefficients(equivalent)
    if coefficients is None:
        return None
    return render_transfer_function(coefficients)
