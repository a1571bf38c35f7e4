# src/rlcsim_core/topologies/defaults.py
"""
Default ParameterSets per topology and waveform, and the rule for carrying a
user's values across a waveform change.

Nothing here mutates the class-level `defaults` of a topology; every call
returns a new dictionary.
"""
import logging
from typing import Dict, Mapping, Union

from .base import get_topology
from .base_enums import WaveformKind
from .waveforms import coerce_waveform_kind

logger = logging.getLogger(__name__)

#: Amplitude used for Sine inputs, whatever the topology's Step/Ramp default.
SINE_AMPLITUDE_DEFAULT: float = 1.0


def default_parameters(topology_id: str, waveform: Union[WaveformKind, str] = WaveformKind.STEP) -> Dict[str, float]:
    """
    Returns the declared defaults of `topology_id` adjusted for `waveform`.

    Raises:
        UnimplementedTopologyError: If `topology_id` is not registered.
        ValueError: If the topology does not accept `waveform`.
    """
    topology = get_topology(topology_id)
    kind = coerce_waveform_kind(waveform)
    if not topology.supports(kind):
        raise ValueError(f"Topology '{topology_id}' does not accept a {kind} input.")

    params = topology.default_parameters()
    if kind is WaveformKind.SINE and "V" in params:
        params["V"] = SINE_AMPLITUDE_DEFAULT
    return params


def switch_waveform(
    topology_id: str,
    held: Mapping[str, float],
    old_waveform: Union[WaveformKind, str],
    new_waveform: Union[WaveformKind, str],
) -> Dict[str, float]:
    """
    Builds the ParameterSet to use after switching from `old_waveform` to
    `new_waveform`.

    Every parameter starts from the new waveform's default. A held value that
    still equals the old waveform's default follows the new default (so the
    amplitude moves between 10 and 1 for voltage-driven circuits); any value the
    user changed is kept. Names the topology does not use are dropped.
    """
    old_defaults = default_parameters(topology_id, old_waveform)
    params = default_parameters(topology_id, new_waveform)

    for name, value in held.items():
        if name not in params:
            logger.debug(f"Dropping '{name}': not a parameter of '{topology_id}'.")
            continue
        if name in old_defaults and value == old_defaults[name]:
            continue
        params[name] = value

    logger.debug(f"Switched '{topology_id}' from {old_waveform} to {new_waveform}: {params}")
    return params
