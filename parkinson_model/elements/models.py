"""Core value types shared by the nervous-system elements.

The element kinds follow the categories of the disease model: neurons, the
organelles hosted by neurons, the two glial cell types and the two cytokine
variants released by microglia.  Requests to the element factory and edges of
the neuron network are immutable values so they can be passed around freely
between agents during a tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from ..errors import ValidationError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .base import Element
    from .neuron import Neuron


class ElementType(str, Enum):
    """Supported element kinds."""

    NEURON = "neuron"
    MITOCHONDRIA = "mitochondria"
    LEWYBODY = "lewybody"
    MICROGLIA = "microglia"
    ASTROCYTE = "astrocyte"
    PRO_CYTOKINE = "pro_cytokine"
    ANTI_CYTOKINE = "anti_cytokine"

    @property
    def is_organelle(self) -> bool:
        return self in ORGANELLE_TYPES

    @property
    def is_cytokine(self) -> bool:
        return self in CYTOKINE_TYPES


ORGANELLE_TYPES: frozenset[ElementType] = frozenset({ElementType.MITOCHONDRIA, ElementType.LEWYBODY})
CYTOKINE_TYPES: frozenset[ElementType] = frozenset({ElementType.PRO_CYTOKINE, ElementType.ANTI_CYTOKINE})


class NeuronStateDescription(str, Enum):
    """Health states of a neuron.  ``DEAD`` is terminal."""

    HEALTHY = "healthy"
    DEGENERATING = "degenerating"
    DEAD = "dead"


Position = Tuple[float, float, float]


@dataclass(frozen=True)
class CreationRequest:
    """Immutable description of an element the factory should build.

    ``parent`` is the owning neuron for organelles and the producing microglia
    for cytokines.  ``target`` is only meaningful for cytokines.
    """

    kind: ElementType
    position: Position
    target: Optional["Element"] = None
    parent: Optional["Element"] = None
    lifespan: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ElementType):
            object.__setattr__(self, "kind", ElementType(self.kind))
        if len(self.position) != 3:
            raise ValidationError("position must have exactly three components")
        object.__setattr__(self, "position", tuple(float(value) for value in self.position))


@dataclass(frozen=True, eq=False)
class NetworkEdge:
    """Undirected connection between two distinct neurons."""

    first: "Neuron"
    second: "Neuron"

    def __post_init__(self) -> None:
        if self.first is None or self.second is None:
            raise ValidationError("an edge requires two neurons")
        if self.first is self.second:
            raise ValidationError(f"cannot connect {self.first!r} to itself")

    @property
    def endpoints(self) -> frozenset["Neuron"]:
        return frozenset((self.first, self.second))

    def touches(self, neuron: "Neuron") -> bool:
        return neuron is self.first or neuron is self.second

    def other(self, neuron: "Neuron") -> "Neuron":
        """Return the endpoint opposite to ``neuron``."""

        if neuron is self.first:
            return self.second
        if neuron is self.second:
            return self.first
        raise ValidationError(f"{neuron!r} is not an endpoint of {self!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NetworkEdge):
            return NotImplemented
        return self.endpoints == other.endpoints

    def __hash__(self) -> int:
        return hash(self.endpoints)

    def __repr__(self) -> str:
        return f"NetworkEdge({self.first!r} - {self.second!r})"


__all__ = [
    "CYTOKINE_TYPES",
    "CreationRequest",
    "ElementType",
    "NetworkEdge",
    "NeuronStateDescription",
    "ORGANELLE_TYPES",
    "Position",
]
