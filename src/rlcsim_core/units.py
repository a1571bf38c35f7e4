# --- src/rlcsim_core/units.py ---
import logging
from numbers import Real
from typing import Dict, Union

import pint

from .errors import ConfigError, format_diagnostic_report

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.info("Pint Unit Registry initialized.")

# Canonical base unit of every fixed parameter name. Component names such as
# 'L1' or 'C2' resolve through their leading letter (see `base_unit_for`).
PARAMETER_BASE_UNITS: Dict[str, str] = {
    "V": "volt",
    "V0": "volt",
    "I0": "ampere",
    "tEnd": "second",
    "Freq": "hertz",
}

_COMPONENT_PREFIX_UNITS: Dict[str, str] = {
    "R": "ohm",
    "L": "henry",
    "C": "farad",
}


def base_unit_for(parameter_name: str) -> str:
    """Returns the pint unit name a parameter is expressed in inside the engine."""
    if parameter_name in PARAMETER_BASE_UNITS:
        return PARAMETER_BASE_UNITS[parameter_name]
    unit = _COMPONENT_PREFIX_UNITS.get(parameter_name[:1])
    if unit is None:
        raise KeyError(f"No base unit is known for parameter '{parameter_name}'.")
    return unit


def trace_unit(trace_name: str) -> str:
    """Symbol of an output trace: currents are named i*, everything else is a voltage."""
    return "A" if trace_name.startswith("i") else "V"


def to_base_units(parameter_name: str, value: Union[Real, str]) -> float:
    """
    Converts a user-supplied parameter value to the engine's base units.

    Plain numbers are taken to be in base units already. Strings are parsed by
    pint, so '10 mH' for 'L' yields 0.01 and a bare '4.7' yields 4.7.

    Raises:
        ConfigError: If the string cannot be parsed or has the wrong dimension.
    """
    if isinstance(value, bool):
        raise ConfigError(format_diagnostic_report(
            error_type="Invalid Parameter Value",
            details=f"Boolean value {value!r} is not a valid number.",
            suggestion="Provide a number in base units or a quantity string such as '10 mH'.",
            context={'parameter': parameter_name}
        ))
    if isinstance(value, Real):
        return float(value)

    unit = base_unit_for(parameter_name)
    try:
        qty = Quantity(value)
        if qty.dimensionless and not qty.unitless:
            # e.g. '10 percent' for a resistor is never intended.
            raise pint.DimensionalityError(qty.units, ureg.Unit(unit))
        if qty.unitless:
            return float(qty.magnitude)
        return float(qty.to(unit).magnitude)
    except (pint.DimensionalityError, pint.UndefinedUnitError, ValueError, TypeError, AttributeError) as e:
        raise ConfigError(format_diagnostic_report(
            error_type="Invalid Parameter Value",
            details=f"Could not convert '{value}' to {unit}: {e}",
            suggestion=f"Express '{parameter_name}' in a unit compatible with {unit}.",
            context={'parameter': parameter_name, 'user_input': value}
        )) from e
