# src/rlcsim_core/config/exceptions.py
"""
Defines the diagnosable exceptions for loading and validating saved session
documents. The public functions of `config.session` wrap both of them in the
user-facing `ConfigError`.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class SessionFileError(DiagnosableError):
    """Raised when a session file is missing, unreadable or not valid YAML/JSON."""
    details: str
    file_path: Optional[Path] = None

    def __str__(self):
        return f"Session file error in '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Session File Error",
            details=self.details,
            suggestion="Ensure the file exists, is readable, and contains a single YAML or JSON mapping.",
            context={'source_file': self.file_path}
        )


@dataclass()
class SessionSchemaError(DiagnosableError):
    """Raised when a session document does not match the session schema."""
    errors: Dict[str, Any]
    file_path: Optional[Path] = None

    def _error_lines(self):
        return [f"  - Field '{field}': {messages}" for field, messages in sorted(self.errors.items())]

    def __str__(self):
        return "Session document failed schema validation:\n" + "\n".join(self._error_lines())

    def get_diagnostic_report(self) -> str:
        details = (
            "The session document does not conform to the required structure.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n" + "\n".join(self._error_lines())
        )
        return format_diagnostic_report(
            error_type="Session Schema Validation Error",
            details=details,
            suggestion=(
                "A session needs 'circuitId' (a registered topology), 'inputType' "
                "(Step, Ramp or Sine) and a flat 'params' mapping of numbers or quantity strings."
            ),
            context={'source_file': self.file_path}
        )
