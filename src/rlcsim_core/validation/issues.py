# src/rlcsim_core/validation/issues.py
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class ValidationIssueLevel(Enum):
    """Severity level of a validation issue."""
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self):
        return self.value


@dataclass
class ValidationIssue:
    """
    Represents a single problem found while checking a ParameterSet against a
    topology and input waveform.
    """
    level: ValidationIssueLevel
    code: str
    message: str
    parameter: Optional[str] = None
    topology_id: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.level.name} - {self.code}]"]
        if self.topology_id:
            parts.append(f"Topology: {self.topology_id}")
        if self.parameter:
            parts.append(f"Parameter: {self.parameter}")
        parts.append(f"Message: {self.message}")
        return " ".join(parts)
