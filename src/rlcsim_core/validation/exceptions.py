# src/rlcsim_core/validation/exceptions.py
"""
Defines the diagnosable exception raised when a ParameterSet does not satisfy
the requirements of its topology and input waveform.
"""
from typing import List, Optional

from .issues import ValidationIssue, ValidationIssueLevel
from ..errors import DiagnosableError, format_diagnostic_report


class ParameterValidationError(DiagnosableError):
    """
    Raised when parameter validation finds one or more error-level issues.

    It keeps only the `ERROR` issues; `parameter` names the first offending
    parameter (None when the failure is the waveform itself).
    """
    def __init__(self, issues: List[ValidationIssue]):
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.level == ValidationIssueLevel.ERROR
        ]
        first_issue = self.issues[0] if self.issues else None
        self.parameter: Optional[str] = first_issue.parameter if first_issue else None
        self.topology_id: Optional[str] = first_issue.topology_id if first_issue else None

        if not self.issues:
            summary_message = "ParameterValidationError was raised with no error-level issues."
        elif len(self.issues) == 1:
            summary_message = self.issues[0].message
        else:
            summary_message = (
                f"Parameter validation failed with {len(self.issues)} error(s):\n"
                + "\n".join(f"  - {issue.message}" for issue in self.issues)
            )
        super().__init__(summary_message)

    def get_diagnostic_report(self) -> str:
        details = (
            f"The parameters do not satisfy the selected circuit and input.\n"
            f"Found {len(self.issues)} error(s):\n\n"
            + "\n".join(f"  - {issue}" for issue in self.issues)
        )
        first_issue = self.issues[0] if self.issues else None
        context = {}
        if first_issue:
            context['topology'] = first_issue.topology_id
            context['parameter'] = first_issue.parameter
            context['waveform'] = first_issue.details.get('waveform')
        return format_diagnostic_report(
            error_type="Invalid Simulation Parameters",
            details=details,
            suggestion="Supply every required parameter as a finite number in base SI units (ohm, henry, farad, volt, ampere, second, hertz).",
            context=context
        )
