# src/rlcsim_core/simulation/exceptions.py
"""
Defines the diagnosable exceptions raised while a transient run is being
computed: bad integration requests and numerically unusable results.

Both inherit from `DiagnosableError`, so the simulation router can fold either
of them into an ERROR result carrying the full diagnostic report.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class IntegrationInputError(DiagnosableError):
    """Raised when the integrator is asked for an impossible time grid."""
    details: str
    t_start: Optional[float] = None
    t_end: Optional[float] = None
    points: Optional[int] = None

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Integration Input Error",
            details=(
                f"{self.details}\n"
                f"Requested grid: t_start={self.t_start}, t_end={self.t_end}, points={self.points}."
            ),
            suggestion="Use a positive end time (tEnd) and at least two time points.",
            context={'parameter': 'tEnd'}
        )


@dataclass()
class NonFiniteResultError(DiagnosableError):
    """
    Raised when a completed run contains NaN or infinite samples, which would
    otherwise leak into plots and metrics as a silently corrupt result.
    """
    topology_id: str
    quantity: str
    details: str

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Non-Finite Simulation Result",
            details=self.details,
            suggestion=(
                "The component values drive the solution out of floating-point range. "
                "Check for extreme ratios between R, L and C, or shorten tEnd."
            ),
            context={'topology': self.topology_id, 'parameter': self.quantity}
        )
