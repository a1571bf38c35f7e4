# src/rlcsim_core/export/__init__.py
from .formatting import format_metric
from .csv_export import result_columns, results_to_csv, export_results_csv
from .html_report import render_html_report, METRIC_LABELS, IMPEDANCE_LABELS

__all__ = [
    "format_metric",
    "result_columns",
    "results_to_csv",
    "export_results_csv",
    "render_html_report",
    "METRIC_LABELS",
    "IMPEDANCE_LABELS",
]
