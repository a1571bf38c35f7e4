# src/rlcsim_core/topologies/base_enums.py
from enum import Enum, auto


class WaveformKind(Enum):
    """
    The excitation applied to a circuit. The value is the string used in saved
    sessions and by callers that pass the waveform by name.
    """
    STEP = "Step"   # Constant V for t >= 0.
    RAMP = "Ramp"   # V * t, V being a slope.
    SINE = "Sine"   # V * sin(2*pi*Freq*t).

    def __str__(self):
        return self.value


class TransferFunctionTag(Enum):
    """
    Selects the closed-form H(s) used for the Bode sweep and the zero lookup.
    Each member corresponds to exactly one registered evaluator.
    """
    RC_LOW_PASS = "1 / (1 + sRC)"
    RL_LOW_PASS = "R / (R + sL)"
    SERIES_RLC_BAND_PASS = "(sRC) / (s^2LC + sRC + 1)"
    PARALLEL_RLC_IMPEDANCE = "sL / (s^2LC + sL/R + 1)"
    SERIES_RLLC_LOW_PASS = "1 / (s^2*C*(L1+L2) + s*C*R + 1)"
    SERIES_RLCC_LOW_PASS = "1 / (s^2*L*C_eq + s*R*C_eq + 1)"


class PoleFormula(Enum):
    """Which characteristic quadratic a 2nd-order circuit obeys."""
    SERIES = auto()     # s^2 + (R/L) s + 1/(LC)
    PARALLEL = auto()   # s^2 + (1/(RC)) s + 1/(LC)


class MetricKind(Enum):
    """Transient performance metrics the MetricsCalculator can derive."""
    RISE_TIME = "riseTime"
    SETTLING_TIME = "settlingTime"
    OVERSHOOT = "overshoot"
    PEAK_TIME = "peakTime"
    PEAK_VALUE = "peakValue"

    def __str__(self):
        return self.value
