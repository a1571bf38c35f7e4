# src/rlcsim_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ParameterIssueCode(Enum):
    """
    Registry of parameter validation issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Input Waveform Issues (INPUT_...) ---
    INPUT_KIND_UNSUPPORTED = ("INPUT_KIND_UNSUPPORTED", "Topology '{topology_id}' does not accept a {waveform} input. Supported inputs: {supported}.")

    # --- Parameter Value Issues (PARAM_...) ---
    PARAM_MISSING = ("PARAM_MISSING", "Required parameter '{parameter_name}' is missing. Topology '{topology_id}' with a {waveform} input requires: {required}.")
    PARAM_NOT_NUMERIC = ("PARAM_NOT_NUMERIC", "Parameter '{parameter_name}' must be a real number, got {value_repr} of type '{value_type}'.")
    PARAM_NOT_FINITE = ("PARAM_NOT_FINITE", "Parameter '{parameter_name}' must be finite, got {value_repr}.")

    # --- Informational (PARAM_INFO_...) ---
    PARAM_INFO_UNUSED = ("PARAM_INFO_UNUSED", "Parameter '{parameter_name}' is not used by topology '{topology_id}' and was dropped.")
    PARAM_INFO_OPTIONAL_INVALID = ("PARAM_INFO_OPTIONAL_INVALID", "Optional parameter '{parameter_name}' has unusable value {value_repr} and was dropped.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
