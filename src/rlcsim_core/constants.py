# --- src/rlcsim_core/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- Time-Domain Integration ---

#: Number of samples produced by every transient run (including t=0 and tEnd).
DEFAULT_TIME_POINTS: int = 1000

# --- Frequency Sweep ---

#: Lower bound of the Bode sweep in Hz.
DEFAULT_FREQ_MIN_HZ: float = 1.0

#: Upper bound of the Bode sweep in Hz.
DEFAULT_FREQ_MAX_HZ: float = 1.0e6

#: Number of log-spaced frequency points in the Bode sweep.
DEFAULT_FREQ_POINTS: int = 500

# --- Pole/Zero & Stability ---

#: A pole whose real part lies within this distance of zero is on the imaginary axis.
STABILITY_TOLERANCE: float = 1.0e-9

#: Relative tolerance for calling a damping ratio exactly critical (zeta == 1).
CRITICAL_DAMPING_TOLERANCE: float = 1.0e-9

#: Default number of samples in a root-locus sweep.
DEFAULT_LOCUS_SAMPLES: int = 50

# --- Transient Metrics ---

#: Below this magnitude the final value is treated as zero and overshoot is undefined.
OVERSHOOT_FINAL_VALUE_FLOOR: float = 1.0e-6

#: Rise time is measured between these fractions of the final value.
RISE_TIME_LOW_FRACTION: float = 0.1
RISE_TIME_HIGH_FRACTION: float = 0.9

#: Half-width of the settling band, as a fraction of the final value.
SETTLING_BAND_FRACTION: float = 0.02

logger.debug("Defined core constants: sweep defaults, stability and metric tolerances.")
