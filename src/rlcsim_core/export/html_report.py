# src/rlcsim_core/export/html_report.py
"""
Standalone HTML report of a completed simulation: input parameters, transfer
function, system analysis, transient metrics and impedance tables. LaTeX in
the transfer function and labels is typeset by MathJax when the page is opened.
"""
import logging
from datetime import datetime
from html import escape
from typing import Dict, List, Mapping, Optional, Tuple

from ..analysis.impedance import calculate_impedance
from ..analysis.metrics import calculate_metrics
from ..analysis.results import FirstOrderCharacteristics, MetricValue, SecondOrderCharacteristics
from ..simulation.results import SimulationResult, SimulationStatus
from ..topologies.base import get_topology
from ..topologies.base_enums import MetricKind, WaveformKind
from .formatting import format_metric

logger = logging.getLogger(__name__)

METRIC_LABELS: Dict[MetricKind, str] = {
    MetricKind.RISE_TIME: "Rise Time (10-90%)",
    MetricKind.SETTLING_TIME: "Settling Time (±2%)",
    MetricKind.OVERSHOOT: "Overshoot (%OS)",
    MetricKind.PEAK_VALUE: "Peak Value",
    MetricKind.PEAK_TIME: "Time to Peak ($t_p$)",
}

IMPEDANCE_LABELS: Dict[str, str] = {
    "xl": "Inductive Reactance ($X_L$)",
    "xc": "Capacitive Reactance ($X_C$)",
    "g": "Conductance ($G$)",
    "bl": "Inductive Susceptance ($B_L$)",
    "bc": "Capacitive Susceptance ($B_C$)",
    "y": "Admittance ($Y$)",
    "z": "Impedance ($Z$)",
    "theta": "Phase Angle ($\\theta$)",
}

_PARAMETER_UNITS = {"R": "Ω", "L": "H", "C": "F", "V": "V", "I": "A"}

_STYLE = """
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif; margin: 0; padding: 0; background-color: #f4f7fa; color: #333; }
    .container { max-width: 800px; margin: 20px auto; padding: 20px; background-color: #ffffff; border-radius: 8px; box-shadow: 0 4px 12px rgba(0,0,0,0.05); }
    h1, h2 { color: #1a237e; border-bottom: 2px solid #3498db; padding-bottom: 8px; }
    table { width: 100%; border-collapse: collapse; margin-top: 15px; }
    th, td { padding: 12px 15px; text-align: left; border-bottom: 1px solid #e0e0e0; }
    th { background-color: #f9f9f9; font-weight: 600; width: 40%; }
    td { font-family: 'SFMono-Regular', Consolas, 'Liberation Mono', Menlo, monospace; color: #00796b; }
    .tf-box { background-color: #f0f6ff; border: 1px solid #3498db; border-radius: 4px; padding: 15px; margin: 15px 0; font-size: 1.2em; text-align: center; overflow-x: auto; }
    .footer { text-align: center; margin-top: 20px; font-size: 0.8em; color: #999; }
"""

Row = Tuple[str, str]


def _parameter_label(name: str, waveform: Optional[WaveformKind]) -> str:
    if name == "V" and waveform is WaveformKind.SINE:
        return "V (Amplitude)"
    if name == "V" and waveform is WaveformKind.RAMP:
        return "Slope"
    if name == "V0":
        return "V (Initial)"
    if name == "I0":
        return "I (Initial)"
    return name


def _parameter_rows(result: SimulationResult, parameter_names) -> List[Row]:
    params = result.parameters
    rows: List[Row] = [("Input Type", str(result.waveform))]
    rows.append(("Simulation Time", format_metric(MetricValue(params["tEnd"], "s"))))
    if result.waveform is WaveformKind.SINE:
        rows.append(("Frequency (f)", format_metric(MetricValue(params["Freq"], "Hz"))))
    for name in parameter_names:
        unit = _PARAMETER_UNITS.get(name[:1], "")
        if name == "V" and result.waveform is WaveformKind.RAMP:
            unit = "V/s"
        rows.append((_parameter_label(name, result.waveform), format_metric(MetricValue(params[name], unit))))
    return rows


def _analysis_rows(result: SimulationResult) -> List[Row]:
    rows: List[Row] = []
    if result.stability is not None:
        rows.append(("Stability", f"<b>{escape(str(result.stability.status))}</b> ({escape(result.stability.details)})"))
    characteristics = result.characteristics
    if isinstance(characteristics, SecondOrderCharacteristics):
        rows.append(("Damping", escape(str(characteristics.damping))))
        rows.append(("Damping Ratio ($\\zeta$)", f"{characteristics.zeta:.4f}"))
        rows.append(("Neper Frequency ($\\alpha$)", f"{characteristics.alpha:.4g} Np/s"))
        rows.append(("Natural Frequency ($\\omega_0$)", f"{characteristics.omega0:.4g} rad/s"))
        rows.append(("Natural Frequency ($f_0$)", f"{characteristics.f0:.4g} Hz"))
    elif isinstance(characteristics, FirstOrderCharacteristics):
        tau = MetricValue(characteristics.tau, "s") if characteristics.tau is not None else None
        rows.append(("Time Constant ($\\tau$)", format_metric(tau)))
    return rows


def _table(rows: List[Row], escape_values: bool = True) -> str:
    body = "".join(
        f"<tr><th>{escape(label)}</th><td>{escape(value) if escape_values else value}</td></tr>"
        for label, value in rows
    )
    return f"<table><tbody>{body}</tbody></table>"


def _section(title: str, content: str) -> str:
    return f"<h2>{escape(title)}</h2>{content}" if content else ""


def render_html_report(
    result: SimulationResult,
    metrics: Optional[Mapping[MetricKind, MetricValue]] = None,
    impedance: Optional[Mapping[str, MetricValue]] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Renders the report page for a COMPLETE result.

    When `metrics` is None the topology's applicable metrics are computed for its
    primary trace. When `impedance` is None it is computed for Sine runs only.

    Raises:
        ValueError: If the result is not COMPLETE.
    """
    if result.status is not SimulationStatus.COMPLETE:
        raise ValueError(f"Only complete results can be reported (status: {result.status}).")

    topology = get_topology(result.topology_id)
    if metrics is None:
        metrics = calculate_metrics(result.time_series, topology.primary_trace, result.final_value, topology.metrics)
    if impedance is None:
        impedance = calculate_impedance(result.topology_id, result.parameters) if result.waveform is WaveformKind.SINE else {}
    generated_at = generated_at or datetime.now()

    transient_rows = [(METRIC_LABELS.get(kind, str(kind)), format_metric(value)) for kind, value in metrics.items()]
    impedance_rows = [(IMPEDANCE_LABELS.get(key, key), format_metric(value)) for key, value in impedance.items()]
    analysis_rows = _analysis_rows(result)

    tf_section = (
        f'<h2>Transfer Function</h2><div class="tf-box">{escape(result.transfer_function)}</div>'
        if result.transfer_function else ""
    )

    html = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Simulation Report: {escape(topology.label)}</title>
  <style>{_STYLE}</style>
</head>
<body>
  <div class="container">
    <h1>Simulation Report</h1>
    <p>Generated on: {escape(generated_at.strftime('%Y-%m-%d %H:%M:%S'))}</p>
    <h2>Circuit: {escape(topology.label)}</h2>
    {_section("Input Parameters", _table(_parameter_rows(result, topology.parameters)))}
    {tf_section}
    {_section("System Analysis", _table(analysis_rows, escape_values=False) if analysis_rows else "")}
    {_section("Transient Performance Metrics", _table(transient_rows) if transient_rows else "")}
    {_section("Impedance Analysis", _table(impedance_rows) if impedance_rows else "")}
    <div class="footer">Report generated by RLCSim Core</div>
  </div>
  <script>
    window.MathJax = {{ tex: {{ inlineMath: [['$', '$'], ['\\\\(', '\\\\)']] }} }};
  </script>
  <script async src="https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"></script>
</body>
</html>
"""
    logger.info(f"Rendered HTML report for '{result.topology_id}'.")
    return html
