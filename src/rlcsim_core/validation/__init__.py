# src/rlcsim_core/validation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import ParameterIssueCode
from .parameter_validator import ParameterValidator, validate_parameters
from .exceptions import ParameterValidationError

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "ParameterIssueCode",
    "ParameterValidator",
    "validate_parameters",
    "ParameterValidationError",
]
