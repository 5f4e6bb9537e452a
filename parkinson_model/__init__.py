"""Agent-based model of Parkinson's disease at the cellular level."""

from .config import DEFAULT_SIMULATION_CONFIG, SimulationConfig
from .elements import (
    AntiInflammatoryCytokine,
    Astrocyte,
    CreationRequest,
    Cytokine,
    Element,
    ElementType,
    GuestElement,
    Microglia,
    NetworkEdge,
    Neuron,
    NeuronStateDescription,
    ProInflammatoryCytokine,
    TargetEffect,
)
from .engine import SimulationEngine, SimulationReport, StopReason, build_nervous_system
from .errors import EmptyPopulationError, SimulationError, ValidationError
from .factory import ElementFactory
from .network import NeuronNetwork
from .statistics import DataCollector, PopulationStatistics, collect_statistics
from .system import NervousSystem

__all__ = [
    "AntiInflammatoryCytokine",
    "Astrocyte",
    "CreationRequest",
    "Cytokine",
    "DEFAULT_SIMULATION_CONFIG",
    "DataCollector",
    "Element",
    "ElementFactory",
    "ElementType",
    "EmptyPopulationError",
    "GuestElement",
    "Microglia",
    "NervousSystem",
    "NetworkEdge",
    "Neuron",
    "NeuronNetwork",
    "NeuronStateDescription",
    "PopulationStatistics",
    "ProInflammatoryCytokine",
    "SimulationConfig",
    "SimulationEngine",
    "SimulationError",
    "SimulationReport",
    "StopReason",
    "TargetEffect",
    "ValidationError",
    "build_nervous_system",
    "collect_statistics",
]
