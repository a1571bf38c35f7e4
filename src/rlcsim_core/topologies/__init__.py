# src/rlcsim_core/topologies/__init__.py
import logging
logger = logging.getLogger(__name__)

# Import base first to define registry and decorator
from .base import (
    TopologyBase, TOPOLOGY_REGISTRY, register_topology, get_topology,
    EquivalentCircuit, ModelContext, TransferFunctionCoefficients,
)
from .base_enums import WaveformKind, TransferFunctionTag, PoleFormula, MetricKind
from .exceptions import UnimplementedTopologyError, IllPosedCircuitError
from .waveforms import InputWaveform, coerce_waveform_kind
# Import concrete circuits to trigger registration
from .first_order import RcCharge, RcDischarge, RlEnergize, RlDeEnergize
from .second_order import RlcSeries, RlcParallel, RllcSeries, RlccSeries, series_capacitance
from .defaults import default_parameters, switch_waveform

logger.info(f"Available topologies: {list(TOPOLOGY_REGISTRY.keys())}")

__all__ = [
    "TopologyBase",
    "TOPOLOGY_REGISTRY",
    "register_topology",
    "get_topology",
    "EquivalentCircuit",
    "ModelContext",
    "TransferFunctionCoefficients",
    "WaveformKind",
    "TransferFunctionTag",
    "PoleFormula",
    "MetricKind",
    "UnimplementedTopologyError",
    "IllPosedCircuitError",
    "InputWaveform",
    "coerce_waveform_kind",
    "RcCharge",
    "RcDischarge",
    "RlEnergize",
    "RlDeEnergize",
    "RlcSeries",
    "RlcParallel",
    "RllcSeries",
    "RlccSeries",
    "series_capacitance",
    "default_parameters",
    "switch_waveform",
]
