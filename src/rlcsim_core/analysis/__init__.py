# src/rlcsim_core/analysis/__init__.py
"""
Defines the public interface for the analysis services package: Bode sweeps,
pole/zero and stability analysis, root loci, circuit characteristics,
transient metrics and impedance, together with their result contracts.
"""
from .results import (
    FrequencySweep,
    StabilityStatus,
    StabilityVerdict,
    PoleZeroAnalysis,
    LocusResult,
    DampingClass,
    FirstOrderCharacteristics,
    SecondOrderCharacteristics,
    MetricValue,
)
from .frequency import (
    TRANSFER_FUNCTION_REGISTRY,
    transfer_function,
    generate_frequency_vector,
    evaluate_frequency_response,
)
from .poles import calculate_poles, classify_stability, zeros_for
from .characteristics import (
    circuit_characteristics,
    classify_damping,
    format_coefficient,
    transfer_function_latex,
)
from .locus import generate_locus
from .metrics import calculate_metrics
from .impedance import calculate_impedance
from .exceptions import LocusRequestError, MetricsInputError

__all__ = [
    # Formal Result Contracts
    "FrequencySweep",
    "StabilityStatus",
    "StabilityVerdict",
    "PoleZeroAnalysis",
    "LocusResult",
    "DampingClass",
    "FirstOrderCharacteristics",
    "SecondOrderCharacteristics",
    "MetricValue",
    # Frequency Response
    "TRANSFER_FUNCTION_REGISTRY",
    "transfer_function",
    "generate_frequency_vector",
    "evaluate_frequency_response",
    # Poles, Zeros & Characteristics
    "calculate_poles",
    "classify_stability",
    "zeros_for",
    "circuit_characteristics",
    "classify_damping",
    "format_coefficient",
    "transfer_function_latex",
    # On-Demand Services
    "generate_locus",
    "calculate_metrics",
    "calculate_impedance",
    # Exceptions
    "LocusRequestError",
    "MetricsInputError",
]
