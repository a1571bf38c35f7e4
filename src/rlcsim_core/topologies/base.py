# src/rlcsim_core/topologies/base.py

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Dict, Mapping, Optional, Tuple, Type

import numpy as np

from .base_enums import MetricKind, PoleFormula, TransferFunctionTag, WaveformKind
from .exceptions import IllPosedCircuitError, UnimplementedTopologyError
from .waveforms import InputWaveform


logger = logging.getLogger(__name__)

# Parameters every run needs on top of the topology's own list.
ALWAYS_REQUIRED: Tuple[str, ...] = ("tEnd",)
SINE_REQUIRED: Tuple[str, ...] = ("Freq",)


@dataclass(frozen=True)
class EquivalentCircuit:
    """
    The reduced (R, L, C) view of a topology. Composite circuits are folded into
    this form exactly once, by `TopologyBase.reduce`, and every downstream stage
    (integration, Bode sweep, poles, characteristics) consumes it.
    An element the circuit does not contain is None.
    """
    R: float
    L: Optional[float] = None
    C: Optional[float] = None


@dataclass(frozen=True)
class ModelContext:
    """The opaque 'params' handed to the integrator alongside every derivative call."""
    equivalent: EquivalentCircuit
    excitation: InputWaveform


@dataclass(frozen=True)
class TransferFunctionCoefficients:
    """
    H(s) = (k s or 1) / (a2 s^2 + a1 s + 1) for a 2nd-order topology, with the
    symbols used when the expression is rendered.
    """
    output_symbol: str
    input_symbol: str
    a2: float
    a1: float
    numerator_s: Optional[float] = None


class TopologyBase(ABC):
    """
    The abstract base class for every supported circuit.

    A subclass is one closed variant of the topology catalog: it declares its
    metadata as class variables and implements the state equations, the output
    mapping and the equivalence reduction. Analysis engines never inspect the
    topology id; they only use this interface.
    """
    topology_id: ClassVar[str] = "BaseTopology"
    label: ClassVar[str] = ""
    order: ClassVar[int] = 0
    parameters: ClassVar[Tuple[str, ...]] = ()
    defaults: ClassVar[Mapping[str, float]] = {}
    input_kinds: ClassVar[Tuple[WaveformKind, ...]] = (WaveformKind.STEP, WaveformKind.RAMP, WaveformKind.SINE)
    traces: ClassVar[Tuple[str, ...]] = ()
    primary_trace: ClassVar[str] = ""
    metrics: ClassVar[Tuple[MetricKind, ...]] = ()
    transfer_function_tag: ClassVar[Optional[TransferFunctionTag]] = None
    pole_formula: ClassVar[Optional[PoleFormula]] = None

    # Divisors of the state equations, checked before any computation.
    nonzero_parameters: ClassVar[Tuple[str, ...]] = ()

    # Source-free circuits ignore the waveform amplitude entirely.
    source_driven: ClassVar[bool] = True

    # --- Metadata queries ---

    @property
    def is_second_order(self) -> bool:
        """True for order-2 topologies and the "3rd order" ones that reduce to order 2."""
        return self.order in (2, 3)

    @property
    def component_parameters(self) -> Tuple[str, ...]:
        """The R/L/C-type parameters (the ones a root locus may sweep)."""
        return tuple(p for p in self.parameters if p[:1] in ("R", "L", "C"))

    def required_parameters(self, waveform: WaveformKind) -> Tuple[str, ...]:
        """Every name that must be present and finite for a run with `waveform`."""
        required = self.parameters + ALWAYS_REQUIRED
        if waveform is WaveformKind.SINE:
            required += SINE_REQUIRED
        return required

    def supports(self, waveform: WaveformKind) -> bool:
        return waveform in self.input_kinds

    def excitation(self, waveform: WaveformKind, parameters: Mapping[str, float]) -> InputWaveform:
        if not self.source_driven:
            return InputWaveform.none()
        return InputWaveform.from_parameters(waveform, parameters)

    # --- Model contract ---

    @abstractmethod
    def reduce(self, parameters: Mapping[str, float]) -> EquivalentCircuit:
        """Folds the ParameterSet into the equivalent (R, L, C) circuit."""
        pass

    @abstractmethod
    def initial_state(self, parameters: Mapping[str, float]) -> np.ndarray:
        """The state vector at t=0."""
        pass

    @abstractmethod
    def derivative(self, t: float, state: np.ndarray, context: ModelContext) -> np.ndarray:
        """The state derivative at time t, from the circuit equations."""
        pass

    @abstractmethod
    def map_outputs(
        self,
        time: np.ndarray,
        states: np.ndarray,
        parameters: Mapping[str, float],
        context: ModelContext,
    ) -> Dict[str, np.ndarray]:
        """Derives every promised trace from the raw (points, n) state history."""
        pass

    def steady_state_value(self, parameters: Mapping[str, float], waveform: WaveformKind) -> float:
        """Final value of the primary trace. Only Step inputs settle to a constant."""
        return 0.0

    @staticmethod
    def time_constant(equivalent: EquivalentCircuit) -> Optional[float]:
        """The time constant tau of a first-order circuit; None where undefined."""
        return None

    def transfer_function_coefficients(self, equivalent: EquivalentCircuit) -> Optional[TransferFunctionCoefficients]:
        """Coefficients of the rendered H(s); None where no expression is shown."""
        return None

    def check_well_posed(self, parameters: Mapping[str, float]) -> None:
        """
        Enforces the topology's legal parameter ranges. Only exact zeros are
        rejected: a negative L or C still integrates to a finite trajectory
        and is reported by pole analysis as NOT_APPLICABLE.

        Raises:
            IllPosedCircuitError: For a zero divisor in `nonzero_parameters`.
        """
        for name in self.nonzero_parameters:
            if parameters[name] == 0:
                raise IllPosedCircuitError(
                    topology_id=self.topology_id,
                    parameter=name,
                    details=f"Parameter '{name}' divides the state equations of '{self.topology_id}' and must be non-zero.",
                )

    def default_parameters(self) -> Dict[str, float]:
        """A fresh copy of the declared defaults; callers may mutate it freely."""
        return dict(self.defaults)

    def __str__(self) -> str:
        return f"{type(self).__name__}('{self.topology_id}')"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(topology_id='{self.topology_id}')"


# --- Global Topology Registry and Decorator ---

TOPOLOGY_REGISTRY: Dict[str, Type[TopologyBase]] = {}


def register_topology(topology_id: str):
    """
    A class decorator to register a topology class in the global registry,
    making it available to the simulation router by id.
    """
    def decorator(cls: Type[TopologyBase]):
        if not issubclass(cls, TopologyBase):
            raise TypeError(f"Class {cls.__name__} must inherit from TopologyBase.")

        if cls.order not in (1, 2, 3):
            raise TypeError(f"Topology class '{cls.__name__}' declares unsupported order {cls.order}.")
        if len(set(cls.parameters)) != len(cls.parameters):
            raise TypeError(
                f"Topology class '{cls.__name__}' violates API contract. "
                f"parameters must be unique, but found duplicates in: {cls.parameters}."
            )
        if cls.primary_trace not in cls.traces:
            raise TypeError(
                f"Topology class '{cls.__name__}' declares primary trace '{cls.primary_trace}' "
                f"which is not one of its traces {cls.traces}."
            )
        if cls.order in (2, 3) and cls.pole_formula is None:
            raise TypeError(f"Second-order topology class '{cls.__name__}' must declare a pole_formula.")
        missing_defaults = [p for p in cls.parameters + ALWAYS_REQUIRED if p not in cls.defaults]
        if missing_defaults:
            raise TypeError(f"Topology class '{cls.__name__}' has no defaults for: {missing_defaults}.")

        if topology_id in TOPOLOGY_REGISTRY:
            logger.warning(f"Topology '{topology_id}' is being redefined/overwritten.")
        cls.topology_id = topology_id
        TOPOLOGY_REGISTRY[topology_id] = cls
        logger.info(f"Registered topology '{topology_id}' -> {cls.__name__}")
        return cls
    return decorator


def get_topology(topology_id: str) -> TopologyBase:
    """
    Looks up a registered topology by id and returns an instance of it.

    Raises:
        UnimplementedTopologyError: If no model is registered under `topology_id`.
    """
    cls = TOPOLOGY_REGISTRY.get(topology_id)
    if cls is None:
        raise UnimplementedTopologyError(topology_id=topology_id, available=sorted(TOPOLOGY_REGISTRY))
    return cls()
