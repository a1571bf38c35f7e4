# src/rlcsim_core/topologies/exceptions.py
"""
Defines the custom, diagnosable exceptions for the circuit model library.
"""
from dataclasses import dataclass, field
from typing import List

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class UnimplementedTopologyError(DiagnosableError):
    """Raised when a topology id has no registered model."""
    topology_id: str
    available: List[str] = field(default_factory=list)

    def __str__(self):
        return f"No circuit model is registered for topology '{self.topology_id}'."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unimplemented Topology",
            details=(
                f"{self}\n"
                f"Registered topologies: {', '.join(self.available) or 'none'}."
            ),
            suggestion="Pick one of the registered topologies; this circuit is not supported yet.",
            context={'topology': self.topology_id}
        )


@dataclass()
class IllPosedCircuitError(DiagnosableError):
    """
    Raised when component values violate a topology's legal range, e.g. a zero
    capacitance that would appear as a divisor in the state equations.
    """
    topology_id: str
    parameter: str
    details: str

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Ill-Posed Circuit",
            details=self.details,
            suggestion="Use non-zero values for every element that divides the circuit equations.",
            context={'topology': self.topology_id, 'parameter': self.parameter}
        )
