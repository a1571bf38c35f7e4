# src/rlcsim_core/validation/parameter_validator.py
import logging
import math
import numbers
from typing import Any, Dict, List, Mapping, Optional

from ..topologies.base import TopologyBase
from ..topologies.base_enums import WaveformKind
from .exceptions import ParameterValidationError
from .issue_codes import ParameterIssueCode
from .issues import ValidationIssue, ValidationIssueLevel

logger = logging.getLogger(__name__)

# Accepted by every topology even when the waveform does not need them.
OPTIONAL_PARAMETERS = ("Freq",)


def _as_real_number(value: Any) -> Optional[float]:
    """The value as a float if it is a real number (bool excluded), else None."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    return float(value)


class ParameterValidator:
    """
    Checks a ParameterSet against a topology and input waveform.

    The waveform must be one the topology accepts; every required parameter
    must be present and a finite real number. Optional and unknown names never
    fail validation: they are reported at INFO level and left out of the clean
    ParameterSet when unusable.
    """

    def __init__(self, topology: TopologyBase, waveform: WaveformKind):
        self.topology = topology
        self.waveform = waveform
        self.issues: List[ValidationIssue] = []
        self.clean: Dict[str, float] = {}

    def validate(self, parameters: Mapping[str, Any]) -> List[ValidationIssue]:
        """
        Runs every check and returns all issues found. The clean, float-valued
        ParameterSet is left in `self.clean`.
        """
        self.issues = []
        self.clean = {}

        if not self.topology.supports(self.waveform):
            self._add_issue(
                ValidationIssueLevel.ERROR, ParameterIssueCode.INPUT_KIND_UNSUPPORTED,
                supported=", ".join(str(k) for k in self.topology.input_kinds),
            )
            return self.issues

        required = self.topology.required_parameters(self.waveform)
        for name in required:
            self._check_required(name, parameters)

        for name, value in parameters.items():
            if name in required:
                continue
            if name in OPTIONAL_PARAMETERS:
                number = _as_real_number(value)
                if number is None or not math.isfinite(number):
                    self._add_issue(
                        ValidationIssueLevel.INFO, ParameterIssueCode.PARAM_INFO_OPTIONAL_INVALID,
                        parameter_name=name, value_repr=repr(value),
                    )
                else:
                    self.clean[name] = number
            else:
                self._add_issue(ValidationIssueLevel.INFO, ParameterIssueCode.PARAM_INFO_UNUSED, parameter_name=name)

        errors = sum(1 for i in self.issues if i.level == ValidationIssueLevel.ERROR)
        logger.debug(
            f"Validated parameters for '{self.topology.topology_id}' ({self.waveform}): "
            f"{errors} error(s), {len(self.issues) - errors} other issue(s)."
        )
        return self.issues

    def _check_required(self, name: str, parameters: Mapping[str, Any]) -> None:
        if name not in parameters:
            self._add_issue(
                ValidationIssueLevel.ERROR, ParameterIssueCode.PARAM_MISSING,
                parameter_name=name, required=", ".join(self.topology.required_parameters(self.waveform)),
            )
            return
        value = parameters[name]
        number = _as_real_number(value)
        if number is None:
            self._add_issue(
                ValidationIssueLevel.ERROR, ParameterIssueCode.PARAM_NOT_NUMERIC,
                parameter_name=name, value_repr=repr(value), value_type=type(value).__name__,
            )
        elif not math.isfinite(number):
            self._add_issue(
                ValidationIssueLevel.ERROR, ParameterIssueCode.PARAM_NOT_FINITE,
                parameter_name=name, value_repr=repr(value),
            )
        else:
            self.clean[name] = number

    def _add_issue(self, level: ValidationIssueLevel, code_enum: ParameterIssueCode, **kwargs):
        kwargs.setdefault("topology_id", self.topology.topology_id)
        kwargs.setdefault("waveform", str(self.waveform))
        self.issues.append(ValidationIssue(
            level=level,
            code=code_enum.code,
            message=code_enum.format_message(**kwargs),
            parameter=kwargs.get("parameter_name"),
            topology_id=self.topology.topology_id,
            details={"waveform": str(self.waveform)},
        ))


def validate_parameters(
    topology: TopologyBase,
    parameters: Mapping[str, Any],
    waveform: WaveformKind,
) -> Dict[str, float]:
    """
    Validates `parameters` for a run of `topology` with `waveform` and returns
    the clean ParameterSet (plain floats, unused names removed).

    Validation is idempotent: the returned mapping passes again unchanged.

    Raises:
        ParameterValidationError: If any error-level issue was found.
    """
    validator = ParameterValidator(topology, waveform)
    issues = validator.validate(parameters)
    if any(issue.level == ValidationIssueLevel.ERROR for issue in issues):
        raise ParameterValidationError(issues)
    for issue in issues:
        logger.info(str(issue))
    return validator.clean
