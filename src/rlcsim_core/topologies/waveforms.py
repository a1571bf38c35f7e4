# src/rlcsim_core/topologies/waveforms.py
"""
The excitation function shared by every circuit model.

Voltage-driven circuits read the value as Vin(t); the parallel RLC reads the
same value as a source current Iin(t). Source-free circuits use `InputWaveform.none()`.
"""
import logging
from dataclasses import dataclass
from typing import Mapping, Union

import numpy as np

from .base_enums import WaveformKind

logger = logging.getLogger(__name__)

ArrayOrFloat = Union[float, np.ndarray]


@dataclass(frozen=True)
class InputWaveform:
    """
    An immutable excitation: the waveform kind plus the amplitude (or slope,
    for Ramp) and frequency drawn from the ParameterSet.
    """
    kind: WaveformKind
    amplitude: float = 0.0
    frequency_hz: float = 0.0

    @classmethod
    def from_parameters(cls, kind: WaveformKind, parameters: Mapping[str, float]) -> "InputWaveform":
        """Builds the waveform from the V and Freq entries of a validated ParameterSet."""
        return cls(
            kind=kind,
            amplitude=float(parameters.get("V", 0.0)),
            frequency_hz=float(parameters.get("Freq", 0.0)) if kind is WaveformKind.SINE else 0.0,
        )

    @classmethod
    def none(cls) -> "InputWaveform":
        """A zero-amplitude step, used by source-free (discharge) circuits."""
        return cls(kind=WaveformKind.STEP, amplitude=0.0)

    def value(self, t: ArrayOrFloat) -> ArrayOrFloat:
        """
        Evaluates the excitation at time(s) t. Zero for t < 0.

        Works on scalars (inside the RK4 stages) and on whole time grids (when
        output traces are derived after integration).
        """
        t_arr = np.asarray(t, dtype=float)
        if self.kind is WaveformKind.STEP:
            out = np.full_like(t_arr, self.amplitude)
        elif self.kind is WaveformKind.RAMP:
            out = self.amplitude * t_arr
        elif self.kind is WaveformKind.SINE:
            out = self.amplitude * np.sin(2.0 * np.pi * self.frequency_hz * t_arr)
        else:  # pragma: no cover - enum is closed
            raise ValueError(f"Unsupported waveform kind: {self.kind}")
        out = np.where(t_arr >= 0.0, out, 0.0)
        return float(out) if out.ndim == 0 else out


def coerce_waveform_kind(waveform: Union[WaveformKind, str]) -> WaveformKind:
    """Accepts a WaveformKind or its string value ('Step', 'Ramp', 'Sine')."""
    if isinstance(waveform, WaveformKind):
        return waveform
    try:
        return WaveformKind(waveform)
    except ValueError:
        valid = ", ".join(k.value for k in WaveformKind)
        raise ValueError(f"Unknown input waveform '{waveform}'. Expected one of: {valid}.") from None
