# src/rlcsim_core/export/csv_export.py
"""
Column-wise CSV export of a completed simulation: the time grid, every trace,
and the Bode sweep, one column each. The transient and frequency data have
different lengths, so shorter columns are padded with empty cells.
"""
import csv
import io
import logging
from pathlib import Path
from typing import Dict, Union

import numpy as np

from ..simulation.results import SimulationResult

logger = logging.getLogger(__name__)


def result_columns(result: SimulationResult) -> Dict[str, np.ndarray]:
    """
    Every array-valued field of a result, in export order: 'time', the traces
    in declared order, then 'freq', 'mag' and 'phase'.

    Raises:
        ValueError: If the result carries no data to export.
    """
    if result.time_series is None:
        raise ValueError(f"No result data to export (status: {result.status}).")

    columns: Dict[str, np.ndarray] = {"time": result.time_series.time}
    columns.update(result.time_series.traces)
    if result.frequency_response is not None:
        columns["freq"] = result.frequency_response.frequencies_hz
        columns["mag"] = result.frequency_response.magnitude_db
        columns["phase"] = result.frequency_response.phase_deg
    return columns


def results_to_csv(result: SimulationResult) -> str:
    """Renders the result as CSV text with a header row of column names."""
    columns = result_columns(result)
    rows = max(len(values) for values in columns.values())

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(list(columns))
    for i in range(rows):
        writer.writerow([float(values[i]) if i < len(values) else "" for values in columns.values()])
    return buffer.getvalue()


def export_results_csv(result: SimulationResult, path: Union[str, Path]) -> Path:
    """Writes `results_to_csv(result)` to `path` and returns the path."""
    csv_path = Path(path)
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    with open(csv_path, "w", newline="", encoding="utf-8") as csvfile:
        csvfile.write(results_to_csv(result))
    logger.info(f"Exported {result.topology_id} results to {csv_path}.")
    return csv_path
