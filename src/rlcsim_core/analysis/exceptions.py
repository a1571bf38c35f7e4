# src/rlcsim_core/analysis/exceptions.py
"""
Defines custom, diagnosable exceptions for the on-demand analysis services.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import Diagnosable, format_diagnostic_report


@dataclass()
class LocusRequestError(ValueError, Diagnosable):
    """Raised for a root-locus request that cannot be honoured."""
    topology_id: str
    details: str
    parameter: Optional[str] = None

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Root-Locus Request",
            details=self.details,
            suggestion=(
                "Root loci exist for second-order circuits only. Sweep one of the circuit's "
                "R, L or C parameters over a finite range with at least one sample."
            ),
            context={'topology': self.topology_id, 'parameter': self.parameter}
        )


@dataclass()
class MetricsInputError(ValueError, Diagnosable):
    """Raised when transient metrics are requested for a trace that does not exist."""
    trace: str
    available: List[str] = field(default_factory=list)

    def __str__(self):
        return f"Unknown trace '{self.trace}'. Available traces: {', '.join(self.available) or 'none'}."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Metrics Request",
            details=str(self),
            suggestion="Request metrics for one of the traces produced by the simulation.",
            context={'parameter': self.trace}
        )
