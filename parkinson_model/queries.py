"""Derived, side-effect-free views over a population of elements.

Nothing here mutates state; the functions filter the population or the organelle
lists of a neuron and are shared by the agents, the population registry and the
statistics layer.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from .elements.models import ElementType

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .elements.base import Element
    from .elements.glia import Astrocyte
    from .elements.neuron import Neuron
    from .elements.organelles import GuestElement
    from .system import NervousSystem


def active(elements: Iterable["Element"]) -> List["Element"]:
    return [element for element in elements if not element.deleted]


def alive(neurons: Iterable["Neuron"]) -> List["Neuron"]:
    return [neuron for neuron in neurons if neuron.is_alive()]


def contained_organelles(neuron: "Neuron", kind: ElementType) -> List["GuestElement"]:
    """Return the live organelles of ``kind`` still attached to ``neuron``."""

    return [guest for guest in neuron.organelles(kind) if not guest.deleted and guest.neuron is neuron]


def lewy_body_mitochondria_ratio(neuron: "Neuron") -> float:
    """``|Lewy bodies| / (|mitochondria| + 1)``; the ``+ 1`` keeps it finite."""

    lewy_bodies = len(contained_organelles(neuron, ElementType.LEWYBODY))
    mitochondria = len(contained_organelles(neuron, ElementType.MITOCHONDRIA))
    return lewy_bodies / (mitochondria + 1)


def first_active_astrocyte(system: "NervousSystem") -> Optional["Astrocyte"]:
    return next((astrocyte for astrocyte in system.astrocytes() if astrocyte.active), None)


def detect_lewy_bodies(system: "NervousSystem") -> bool:
    """Return ``True`` when any living neuron carries at least one Lewy body."""

    return any(contained_organelles(neuron, ElementType.LEWYBODY) for neuron in system.alive_neurons())


def isolated_neurons(system: "NervousSystem") -> List["Neuron"]:
    network = system.network
    return [neuron for neuron in system.alive_neurons() if not network.associated_edges(neuron)]


def type_counts(elements: Iterable["Element"]) -> Dict[ElementType, int]:
    """Count active elements per type; every type is present in the result."""

    counts = Counter(element.type for element in elements if not element.deleted)
    return {kind: counts.get(kind, 0) for kind in ElementType}


__all__ = [
    "active",
    "alive",
    "contained_organelles",
    "detect_lewy_bodies",
    "first_active_astrocyte",
    "isolated_neurons",
    "lewy_body_mitochondria_ratio",
    "type_counts",
]
