# src/rlcsim_core/analysis/metrics.py
"""
Transient performance metrics computed from a sampled time series: peak
value/time, percent overshoot, 10-90% rise time and 2% settling time.
"""
import logging
from typing import TYPE_CHECKING, Dict, Iterable, Optional

import numpy as np

from ..constants import (
    OVERSHOOT_FINAL_VALUE_FLOOR,
    RISE_TIME_HIGH_FRACTION,
    RISE_TIME_LOW_FRACTION,
    SETTLING_BAND_FRACTION,
)
from ..topologies.base_enums import MetricKind
from ..units import trace_unit
from .exceptions import MetricsInputError
from .results import MetricValue

if TYPE_CHECKING:
    from ..simulation.results import TimeSeries

logger = logging.getLogger(__name__)

_PEAK_DEPENDENT = {MetricKind.PEAK_VALUE, MetricKind.PEAK_TIME, MetricKind.OVERSHOOT}


def find_crossing(time: np.ndarray, signal: np.ndarray, target: float) -> Optional[float]:
    """
    The time of the first sample at which the signal reaches `target`, coming
    from below (rising to >= target) or from above (falling to <= target).
    None when the signal never crosses.
    """
    previous = signal[:-1]
    current = signal[1:]
    crossed = ((previous < target) & (current >= target)) | ((previous > target) & (current <= target))
    indices = np.flatnonzero(crossed)
    if indices.size == 0:
        return None
    return float(time[indices[0] + 1])


def settling_time(time: np.ndarray, signal: np.ndarray, final_value: float) -> float:
    """
    The time after which the signal stays within +-2% of `final_value`, found by
    scanning backward for the last sample outside the band. The band is
    measured on |signal - final| so negative final values work too. A signal
    that never leaves the band settles at time[0].
    """
    band = SETTLING_BAND_FRACTION * abs(final_value)
    outside = np.flatnonzero(np.abs(signal - final_value) > band)
    if outside.size == 0:
        return float(time[0])
    last = outside[-1]
    return float(time[min(last + 1, len(time) - 1)])


def calculate_metrics(
    time_series: "TimeSeries",
    trace: str,
    final_value: float,
    kinds: Iterable[MetricKind],
) -> Dict[MetricKind, MetricValue]:
    """
    Computes the requested metrics for one trace of a completed run.

    Metrics that are undefined for the given signal are left out of the
    returned mapping rather than reported as NaN: overshoot when |final| is
    below 1e-6 or the peak does not exceed the final value, rise time when
    either threshold is never crossed.

    The peak is the extreme sample in the direction of the final value (the
    minimum for a negative step), so overshoot keeps its sign convention.

    Raises:
        MetricsInputError: If `trace` is not one of the series' traces.
    """
    if trace not in time_series.traces:
        raise MetricsInputError(trace=trace, available=list(time_series.traces))

    requested = set(kinds)
    time = time_series.time
    signal = np.asarray(time_series.traces[trace], dtype=float)
    metrics: Dict[MetricKind, MetricValue] = {}

    if requested & _PEAK_DEPENDENT:
        direction = -1.0 if final_value < 0 else 1.0
        peak_index = int(np.argmax(direction * signal))
        peak_value = float(signal[peak_index])
        metrics[MetricKind.PEAK_VALUE] = MetricValue(peak_value, trace_unit(trace))
        metrics[MetricKind.PEAK_TIME] = MetricValue(float(time[peak_index]), "s")

        if (
            MetricKind.OVERSHOOT in requested
            and abs(final_value) >= OVERSHOOT_FINAL_VALUE_FLOOR
            and direction * (peak_value - final_value) > 0
        ):
            overshoot = (peak_value - final_value) / final_value * 100.0
            metrics[MetricKind.OVERSHOOT] = MetricValue(overshoot, "%")

    if MetricKind.RISE_TIME in requested:
        t_low = find_crossing(time, signal, final_value * RISE_TIME_LOW_FRACTION)
        t_high = find_crossing(time, signal, final_value * RISE_TIME_HIGH_FRACTION)
        if t_low is not None and t_high is not None:
            metrics[MetricKind.RISE_TIME] = MetricValue(t_high - t_low, "s")

    if MetricKind.SETTLING_TIME in requested:
        metrics[MetricKind.SETTLING_TIME] = MetricValue(settling_time(time, signal, final_value), "s")

    logger.debug(f"Computed {[str(k) for k in metrics]} for trace '{trace}'.")
    return metrics
