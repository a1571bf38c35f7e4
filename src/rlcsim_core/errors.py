# src/rlcsim_core/errors.py
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class RLCSimError(Exception):
    """Base class for all custom, user-facing errors in RLCSim Core."""
    pass

class SimulationRunError(RLCSimError):
    """
    Raised by the raising facade when a simulation does not complete, either
    because of invalid input or a numerical failure.
    The message is a pre-formatted, user-friendly diagnostic report.
    """
    pass

class ConfigError(RLCSimError):
    """
    Raised when a saved session document cannot be loaded, validated, or converted
    to base units. The message is a pre-formatted, user-friendly diagnostic report.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    Anything that can describe its own failure as a formatted report.

    The on-demand analysis errors are raised straight to the caller and mix this
    in next to `ValueError`; `isinstance(e, Diagnosable)` finds the report on
    any of them.
    """
    def get_diagnostic_report(self) -> str:
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    Base class for the pipeline errors that the simulation router turns into an
    ERROR result. Subclasses must override `get_diagnostic_report`.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Invalid Parameter").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (topology, parameter,
                 waveform, source file).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "================ RLCSim Core: Actionable Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if topology := context.get('topology'):
        lines.append(f"Topology:       {topology}")
    if parameter := context.get('parameter'):
        lines.append(f"Parameter:      {parameter}")
    if waveform := context.get('waveform'):
        lines.append(f"Waveform:       {waveform}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("==========================================================================")
    return "\n".join(lines)
