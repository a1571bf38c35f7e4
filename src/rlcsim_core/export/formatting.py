# src/rlcsim_core/export/formatting.py
import logging
import math
from typing import Optional

from ..analysis.results import MetricValue
from ..units import Quantity

logger = logging.getLogger(__name__)

# Result unit symbols -> pint unit names.
_PINT_UNITS = {
    "s": "second",
    "V": "volt",
    "A": "ampere",
    "Ω": "ohm",
    "S": "siemens",
    "H": "henry",
    "F": "farad",
    "Hz": "hertz",
}


def format_metric(metric: Optional[MetricValue], precision: int = 2) -> str:
    """
    Formats a metric in compact engineering notation, e.g. '2.30 ms' or
    '1.50 kΩ'. Percentages and angles are never prefixed; a missing or NaN
    value is 'N/A'.
    """
    if metric is None or math.isnan(metric.value):
        return "N/A"
    if math.isinf(metric.value):
        return "Infinity" if metric.value > 0 else "-Infinity"

    unit = _PINT_UNITS.get(metric.unit)
    if unit is None:
        return f"{metric.value:.{precision}f} {metric.unit}".rstrip()
    quantity = Quantity(metric.value, unit).to_compact()
    return f"{quantity:.{precision}f~P}"
