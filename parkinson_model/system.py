"""Population registry owning every element of one simulated nervous system."""

from __future__ import annotations

import heapq
import logging
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from . import queries
from .elements.models import CreationRequest, ElementType
from .errors import EmptyPopulationError, ValidationError
from .factory import ElementFactory
from .network import NeuronNetwork

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import SimulationConfig
    from .elements.base import Element
    from .elements.cytokines import Cytokine
    from .elements.glia import Astrocyte, Microglia
    from .elements.neuron import Neuron
    from .elements.organelles import GuestElement


LOGGER = logging.getLogger(__name__)

DEFAULT_DIMENSIONS = (50, 50, 50)


class NervousSystem:
    """Arena of elements plus the neuron network, the factory and the RNG.

    Elements register themselves on construction and are only physically
    removed by :meth:`step`, which sweeps every element flagged as deleted.
    Until then a soft-deleted element is still *contained* but no longer
    *active*.  All randomness of the model flows through :attr:`rng` so a seed
    reproduces a whole run.
    """

    def __init__(
        self,
        dimensions: Sequence[float] = DEFAULT_DIMENSIONS,
        *,
        mito_transfer_threshold: float = 30.0,
        lewy_body_degeneration_threshold: int = 5,
        base_degeneration_probability: float = 0.01,
        mitochondria_per_neuron: int = 5,
        cytokine_lifespan: int = 50,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ) -> None:
        dims = tuple(float(value) for value in dimensions)
        if len(dims) != 3 or any(value <= 0 for value in dims):
            raise ValidationError(f"dimensions must be three positive numbers, got {tuple(dimensions)!r}")
        if mitochondria_per_neuron < 0:
            raise ValidationError("mitochondria_per_neuron must not be negative")
        if cytokine_lifespan <= 0:
            raise ValidationError("cytokine_lifespan must be positive")
        self._dimensions: Tuple[float, float, float] = dims  # type: ignore[assignment]
        self.mito_transfer_threshold = float(mito_transfer_threshold)
        # Reserved by the model; no rule reads them yet.
        self.lewy_body_degeneration_threshold = int(lewy_body_degeneration_threshold)
        self.base_degeneration_probability = float(base_degeneration_probability)
        self.mitochondria_per_neuron = int(mitochondria_per_neuron)
        self.cytokine_lifespan = int(cytokine_lifespan)
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._elements: Dict[int, "Element"] = {}
        # Arena members per type, in id order; rebuilt by the sweep.
        self._by_type: Dict[ElementType, Dict[int, "Element"]] = {kind: {} for kind in ElementType}
        self._active_cache: Optional[List["Element"]] = None
        self._next_id = 0
        self._network = NeuronNetwork(self)
        self._factory = ElementFactory(self)

    @classmethod
    def from_config(cls, config: "SimulationConfig", rng: Optional[np.random.Generator] = None) -> "NervousSystem":
        return cls(
            config.dimensions,
            mito_transfer_threshold=config.mito_transfer_threshold,
            lewy_body_degeneration_threshold=config.lewy_body_degeneration_threshold,
            base_degeneration_probability=config.base_degeneration_probability,
            mitochondria_per_neuron=config.mitochondria_per_neuron,
            cytokine_lifespan=config.cytokine_lifespan,
            rng=rng,
            seed=config.seed,
        )

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        return self._dimensions

    @property
    def rng(self) -> np.random.Generator:
        return self._rng

    @property
    def network(self) -> NeuronNetwork:
        return self._network

    @property
    def factory(self) -> ElementFactory:
        return self._factory

    # -- registry -----------------------------------------------------------

    def next_element_id(self) -> int:
        element_id = self._next_id
        self._next_id += 1
        return element_id

    def add_element(self, element: "Element") -> None:
        if element is None:
            raise ValidationError("cannot register a missing element")
        if element.system is not self:
            raise ValidationError(f"{element!r} belongs to another nervous system")
        if element.element_id in self._elements:
            raise ValidationError(f"{element!r} is already registered")
        self._elements[element.element_id] = element
        self._by_type[element.type][element.element_id] = element
        self._active_cache = None

    def element_deleted(self, element: "Element") -> None:
        """Called by an element when it is soft-deleted."""

        self._active_cache = None

    def contains(self, element: "Element") -> bool:
        return element is not None and self._elements.get(element.element_id) is element

    def __contains__(self, element: object) -> bool:
        return self.contains(element)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator["Element"]:
        return iter(list(self._elements.values()))

    def step(self) -> int:
        """Sweep every soft-deleted element out of the arena.

        This is the only place elements are physically removed.  Returns the
        number of elements swept.
        """

        survivors = {element_id: element for element_id, element in self._elements.items() if not element.deleted}
        swept = len(self._elements) - len(survivors)
        self._elements = survivors
        self._active_cache = None
        if swept:
            self._by_type = {kind: {} for kind in ElementType}
            for element_id, element in survivors.items():
                self._by_type[element.type][element_id] = element
            LOGGER.debug("Swept %d deleted elements, %d remain", swept, len(survivors))
        return swept

    # -- element streams ------------------------------------------------------

    def elements(self) -> List["Element"]:
        return list(self._elements.values())

    def _active(self) -> List["Element"]:
        if self._active_cache is None:
            self._active_cache = queries.active(self._elements.values())
        return self._active_cache

    def active_elements(self) -> List["Element"]:
        return list(self._active())

    def of_type(self, *kinds: ElementType) -> List["Element"]:
        """Return the active elements of ``kinds`` in creation order."""

        indexed = [self._by_type[ElementType(kind)].values() for kind in kinds]
        merged = indexed[0] if len(indexed) == 1 else heapq.merge(*indexed, key=lambda element: element.element_id)
        return queries.active(merged)

    def deleted_elements(self) -> List["Element"]:
        return [element for element in self._elements.values() if element.deleted]

    def neurons(self) -> List["Neuron"]:
        return self.of_type(ElementType.NEURON)  # type: ignore[return-value]

    def alive_neurons(self) -> List["Neuron"]:
        return queries.alive(self.neurons())

    def astrocytes(self) -> List["Astrocyte"]:
        return self.of_type(ElementType.ASTROCYTE)  # type: ignore[return-value]

    def active_astrocytes(self) -> List["Astrocyte"]:
        return [astrocyte for astrocyte in self.astrocytes() if astrocyte.active]

    def microglia(self) -> List["Microglia"]:
        return self.of_type(ElementType.MICROGLIA)  # type: ignore[return-value]

    def cytokines(self) -> List["Cytokine"]:
        return self.of_type(ElementType.PRO_CYTOKINE, ElementType.ANTI_CYTOKINE)  # type: ignore[return-value]

    def guest_elements(self) -> List["GuestElement"]:
        return self.of_type(ElementType.MITOCHONDRIA, ElementType.LEWYBODY)  # type: ignore[return-value]

    # -- random selection -------------------------------------------------------

    def _choose(self, candidates: List["Element"], label: str) -> "Element":
        if not candidates:
            raise EmptyPopulationError(f"no {label} to choose from")
        return candidates[int(self._rng.integers(len(candidates)))]

    def random_element(self) -> "Element":
        return self._choose(self._active(), "active elements")

    def random_neuron(self) -> "Neuron":
        return self._choose(self.alive_neurons(), "alive neurons")  # type: ignore[return-value]

    def random_position(self) -> Tuple[float, float, float]:
        x, y, z = (float(self._rng.uniform(0.0, limit)) for limit in self._dimensions)
        return (x, y, z)

    # -- population builders ------------------------------------------------

    def _add(self, kind: ElementType, count: int) -> List["Element"]:
        if count < 0:
            raise ValidationError(f"cannot add a negative number of {kind.value} elements")
        return [self._factory.create(CreationRequest(kind, self.random_position())) for _ in range(count)]

    def add_neurons(self, count: int) -> List["Neuron"]:
        """Place ``count`` neurons at random positions and rewire the network."""

        neurons = self._add(ElementType.NEURON, count)
        self._network.generate_random_connections()
        LOGGER.info("Neurons added: %d", len(neurons))
        return neurons  # type: ignore[return-value]

    def add_astrocytes(self, count: int) -> List["Astrocyte"]:
        astrocytes = self._add(ElementType.ASTROCYTE, count)
        LOGGER.info("Astrocytes added: %d", len(astrocytes))
        return astrocytes  # type: ignore[return-value]

    def add_microglia(self, count: int) -> List["Microglia"]:
        microglia = self._add(ElementType.MICROGLIA, count)
        LOGGER.info("Microglia added: %d", len(microglia))
        return microglia  # type: ignore[return-value]

    def filter_out_neurons(self) -> int:
        """Delete every living neuron without connections; returns how many."""

        isolated = queries.isolated_neurons(self)
        pruned = sum(1 for neuron in isolated if neuron.delete())
        LOGGER.info("Isolated neurons filtered out: %d", pruned)
        return pruned

    def summary(self) -> Dict[str, int]:
        counts = queries.type_counts(self._elements.values())
        summary = {kind.value: counts[kind] for kind in ElementType}
        summary["connections"] = len(self._network.edges)
        return summary

    def __repr__(self) -> str:
        return (
            f"NervousSystem(dimensions={self._dimensions}, elements={len(self._elements)}, "
            f"network={self._network!r})"
        )


__all__ = ["DEFAULT_DIMENSIONS", "NervousSystem"]
