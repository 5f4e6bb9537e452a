"""Agents of the nervous-system model."""

from .base import Element, MoveableElement
from .cytokines import AntiInflammatoryCytokine, Cytokine, ProInflammatoryCytokine, TargetEffect
from .glia import Astrocyte, Microglia
from .models import (
    CYTOKINE_TYPES,
    ORGANELLE_TYPES,
    CreationRequest,
    ElementType,
    NetworkEdge,
    NeuronStateDescription,
    Position,
)
from .neuron import Neuron, NeuronState
from .organelles import GuestElement

__all__ = [
    "AntiInflammatoryCytokine",
    "Astrocyte",
    "CYTOKINE_TYPES",
    "CreationRequest",
    "Cytokine",
    "Element",
    "ElementType",
    "GuestElement",
    "Microglia",
    "MoveableElement",
    "NetworkEdge",
    "Neuron",
    "NeuronState",
    "NeuronStateDescription",
    "ORGANELLE_TYPES",
    "Position",
    "ProInflammatoryCytokine",
    "TargetEffect",
]
