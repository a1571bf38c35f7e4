# src/rlcsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("RLCSim Core package initialized.")

from .units import ureg, pint, Quantity, to_base_units
from .topologies import (
    TOPOLOGY_REGISTRY, get_topology, WaveformKind, MetricKind,
    default_parameters, switch_waveform,
)
from .simulation import simulate, run_simulation, SimulationResult, SimulationStatus, integrate_rk4
from .analysis import (
    evaluate_frequency_response, calculate_poles, generate_locus,
    calculate_metrics, calculate_impedance,
)
from .config import SessionConfig, load_session, save_session
from .export import export_results_csv, results_to_csv, render_html_report
from .errors import RLCSimError, SimulationRunError, ConfigError

__all__ = [
    # Units
    "ureg", "pint", "Quantity", "to_base_units",
    # Circuit Models
    "TOPOLOGY_REGISTRY", "get_topology", "WaveformKind", "MetricKind",
    "default_parameters", "switch_waveform",
    # Simulation
    "simulate", "run_simulation", "SimulationResult", "SimulationStatus", "integrate_rk4",
    # Analysis
    "evaluate_frequency_response", "calculate_poles", "generate_locus",
    "calculate_metrics", "calculate_impedance",
    # Sessions
    "SessionConfig", "load_session", "save_session",
    # Export
    "export_results_csv", "results_to_csv", "render_html_report",
    # Top-Level Errors (Actionable Diagnostics)
    "RLCSimError", "SimulationRunError", "ConfigError",
]
