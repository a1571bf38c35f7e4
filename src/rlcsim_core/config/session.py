# src/rlcsim_core/config/session.py
"""
Saved session documents: a topology id, an input waveform and a flat mapping of
parameter values, as written by the interactive front end.

    circuitId: 2-rlc-series
    inputType: Step
    params:
      V: 10
      R: 50 ohm
      L: 10 mH
      C: 1 uF
      tEnd: 10 ms

Values may be plain numbers (already in base units) or pint quantity strings.
Documents are read with `yaml.safe_load` (JSON is accepted as a YAML subset),
validated with cerberus, and converted to base units.
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import cerberus
import yaml

from ..errors import ConfigError
from ..topologies.base import TOPOLOGY_REGISTRY, ALWAYS_REQUIRED, SINE_REQUIRED, get_topology
from ..topologies.base_enums import WaveformKind
from ..units import to_base_units
from .exceptions import SessionFileError, SessionSchemaError

logger = logging.getLogger(__name__)

PARAMETER_NAME_REGEX = r"^[A-Za-z][A-Za-z0-9_]*$"


class SessionValidator(cerberus.Validator):
    """Cerberus validator with a rule that checks ids against the topology registry."""

    def _validate_registered_topology(self, constraint: bool, field: str, value: Any):
        """
        Validates that the value is the id of a registered topology.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if constraint and isinstance(value, str) and value not in TOPOLOGY_REGISTRY:
            self._error(
                field,
                f"Unknown topology '{value}'. Registered topologies: {sorted(TOPOLOGY_REGISTRY)}",
            )


SESSION_SCHEMA: Dict[str, Any] = {
    "circuitId": {"type": "string", "required": True, "empty": False, "registered_topology": True},
    "inputType": {"type": "string", "required": True, "allowed": [k.value for k in WaveformKind]},
    "params": {
        "type": "dict",
        "required": True,
        "keysrules": {"type": "string", "regex": PARAMETER_NAME_REGEX},
        "valuesrules": {"type": ["number", "string"]},
    },
}


@dataclass(frozen=True)
class SessionConfig:
    """A validated session with every parameter in base units."""
    circuit_id: str
    input_type: WaveformKind
    params: Dict[str, float] = field(default_factory=dict)

    def to_document(self) -> Dict[str, Any]:
        """The flat document form written by `save_session`."""
        return {
            "circuitId": self.circuit_id,
            "inputType": self.input_type.value,
            "params": dict(self.params),
        }


def parse_session(document: Mapping[str, Any], source: Optional[Path] = None) -> SessionConfig:
    """
    Validates a session mapping and converts its parameters to base units.

    Raises:
        ConfigError: If the document violates the schema, names a parameter the
            topology does not use, pairs the topology with an input it does not
            accept, or holds a value that cannot be converted.
    """
    try:
        return _parse_session(document, source)
    except (SessionSchemaError, SessionFileError) as e:
        logger.error(str(e))
        raise ConfigError(e.get_diagnostic_report()) from e


def _parse_session(document: Mapping[str, Any], source: Optional[Path]) -> SessionConfig:
    if not isinstance(document, Mapping):
        raise SessionFileError(details="The root of a session document must be a mapping.", file_path=source)

    validator = SessionValidator(SESSION_SCHEMA)
    validator.allow_unknown = False
    if not validator.validate(dict(document)):
        raise SessionSchemaError(errors=validator.errors, file_path=source)
    validated = validator.document

    topology = get_topology(validated["circuitId"])
    kind = WaveformKind(validated["inputType"])
    if not topology.supports(kind):
        raise SessionSchemaError(
            errors={"inputType": [f"'{topology.topology_id}' does not accept a {kind} input."]},
            file_path=source,
        )

    known = set(topology.parameters + ALWAYS_REQUIRED + SINE_REQUIRED)
    unknown = sorted(name for name in validated["params"] if name not in known)
    if unknown:
        raise SessionSchemaError(
            errors={f"params.{name}": [f"not a parameter of '{topology.topology_id}'"] for name in unknown},
            file_path=source,
        )

    params = {name: to_base_units(name, value) for name, value in validated["params"].items()}
    logger.info(f"Loaded session for '{topology.topology_id}' ({kind}) with {len(params)} parameter(s).")
    return SessionConfig(circuit_id=topology.topology_id, input_type=kind, params=params)


def load_session(path: Union[str, Path]) -> SessionConfig:
    """
    Reads, validates and converts a session file (YAML or JSON).

    Raises:
        ConfigError: For file, syntax, schema or unit conversion problems.
    """
    source = Path(path).resolve()
    try:
        document = _load_document(source)
    except SessionFileError as e:
        logger.error(str(e))
        raise ConfigError(e.get_diagnostic_report()) from e
    return parse_session(document, source)


def _load_document(source: Path) -> Dict[str, Any]:
    if not source.is_file():
        raise SessionFileError(details=f"Session file not found at path: {source}", file_path=source)
    try:
        with source.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except PermissionError as e:
        raise SessionFileError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
    except yaml.YAMLError as e:
        raise SessionFileError(details=f"Invalid YAML/JSON syntax: {e}", file_path=source) from e
    if content is None:
        raise SessionFileError(details="The session file is empty.", file_path=source)
    if not isinstance(content, dict):
        raise SessionFileError(details="The root of the session file must be a mapping.", file_path=source)
    return content


def save_session(config: SessionConfig, path: Union[str, Path]) -> Path:
    """Writes `config` as an indented JSON document and returns the path written."""
    target = Path(path)
    with target.open("w", encoding="utf-8") as f:
        json.dump(config.to_document(), f, indent=2)
        f.write("\n")
    logger.info(f"Saved session for '{config.circuit_id}' to {target}.")
    return target
