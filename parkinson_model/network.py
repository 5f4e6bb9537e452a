"""Undirected connectivity graph over the neurons of a nervous system."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Set

from .elements.models import NetworkEdge

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .elements.neuron import Neuron
    from .system import NervousSystem


LOGGER = logging.getLogger(__name__)

DEFAULT_CONNECTION_PROBABILITY = 0.05


class NeuronNetwork:
    """Roster of neurons plus the set of undirected edges between them.

    Dead neurons remain on the roster so they can still be counted, but they
    lose every edge when they die and are never connected again.
    """

    def __init__(self, system: "NervousSystem") -> None:
        self._system = system
        self._neurons: Dict[int, "Neuron"] = {}
        # Insertion-ordered so adjacency follows creation order under a fixed seed.
        self._edges: Dict[NetworkEdge, None] = {}

    @property
    def system(self) -> "NervousSystem":
        return self._system

    @property
    def neurons(self) -> List["Neuron"]:
        return list(self._neurons.values())

    @property
    def edges(self) -> Set[NetworkEdge]:
        return set(self._edges)

    def __len__(self) -> int:
        return len(self._neurons)

    def is_member(self, neuron: "Neuron") -> bool:
        return neuron is not None and self._neurons.get(neuron.element_id) is neuron

    def add_neuron(self, neuron: "Neuron") -> bool:
        if self.is_member(neuron):
            return False
        self._neurons[neuron.element_id] = neuron
        return True

    def delete_neuron(self, neuron: "Neuron") -> bool:
        """Drop ``neuron`` from the roster together with its edges."""

        if not self.is_member(neuron):
            return False
        removed = self.delete_edges_of(neuron)
        del self._neurons[neuron.element_id]
        return removed

    # -- edges ------------------------------------------------------------------

    def connected(self, first: "Neuron", second: "Neuron") -> bool:
        if first is second or not (self.is_member(first) and self.is_member(second)):
            return False
        return NetworkEdge(first, second) in self._edges

    def add_edge(self, first: "Neuron", second: "Neuron") -> bool:
        """Connect two member neurons.

        Returns ``False`` when either neuron is not a living member or the
        edge already exists.  Connecting a neuron to itself is rejected.
        """

        edge = NetworkEdge(first, second)
        if not (self.is_member(first) and self.is_member(second)):
            return False
        if not (first.is_alive() and second.is_alive()):
            return False
        if edge in self._edges:
            return False
        self._edges[edge] = None
        LOGGER.debug("%r added", edge)
        return True

    def delete_edge(self, edge: NetworkEdge) -> bool:
        if edge is None or edge not in self._edges:
            return False
        del self._edges[edge]
        LOGGER.debug("%r deleted", edge)
        return True

    def delete_edge_between(self, first: "Neuron", second: "Neuron") -> bool:
        if first is second:
            return False
        return self.delete_edge(NetworkEdge(first, second))

    def delete_edges_of(self, neuron: "Neuron") -> bool:
        """Remove every edge incident to ``neuron``.

        Returns ``True`` only if every deletion succeeded.
        """

        results = [self.delete_edge(edge) for edge in self.associated_edges(neuron)]
        return all(results)

    def associated_edges(self, neuron: "Neuron") -> List[NetworkEdge]:
        return [edge for edge in self._edges if edge.touches(neuron)]

    def adjacent_neurons(self, neuron: "Neuron") -> List["Neuron"]:
        return [edge.other(neuron) for edge in self.associated_edges(neuron)]

    def degree(self, neuron: "Neuron") -> int:
        return sum(1 for edge in self._edges if edge.touches(neuron))

    def generate_random_connections(self, probability: float = DEFAULT_CONNECTION_PROBABILITY) -> int:
        """Connect every unordered pair of neurons independently with ``probability``.

        Each pair is tested exactly once, in roster order, so a seeded generator
        always yields the same graph.  Returns the number of edges added.
        """

        rng = self._system.rng
        roster = self.neurons
        added = 0
        for i, first in enumerate(roster):
            for second in roster[i + 1 :]:
                if rng.random() < probability and self.add_edge(first, second):
                    added += 1
        LOGGER.info("Random connections generated: %d edges over %d neurons", added, len(roster))
        return added

    def __repr__(self) -> str:
        return f"NeuronNetwork(neurons={len(self._neurons)}, connections={len(self._edges)})"


__all__ = ["DEFAULT_CONNECTION_PROBABILITY", "NeuronNetwork"]
