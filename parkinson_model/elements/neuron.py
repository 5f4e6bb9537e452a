"""Neuron agent and its health state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from .. import queries
from ..errors import ValidationError
from .base import Element
from .models import CreationRequest, ElementType, NeuronStateDescription, Position

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..network import NeuronNetwork
    from .organelles import GuestElement


LOGGER = logging.getLogger(__name__)

INITIAL_DOPAMINE = 100.0
DEGENERATION_GAIN = 1.25
DOPAMINE_GAIN = 10.0
MITOCHONDRIA_SPAWN_PROBABILITY = 0.5
LEWY_BODY_SPAWN_PROBABILITY = 0.1
DEGENERATING_LEWY_BODY_SPAWN_PROBABILITY = 0.6
# Probabilities above 1.0 always succeed.
GUARANTEED = 2.0


@dataclass(slots=True)
class NeuronState:
    """Mutable health record of a neuron."""

    description: NeuronStateDescription = NeuronStateDescription.HEALTHY
    dopamine_level: float = INITIAL_DOPAMINE
    myelin_level: int = 0

    def update_dopamine(self, delta: float) -> float:
        self.dopamine_level = max(self.dopamine_level + float(delta), 0.0)
        return self.dopamine_level

    def update_myelin(self, delta: int) -> int:
        self.myelin_level = max(self.myelin_level + int(delta), 0)
        return self.myelin_level


class Neuron(Element):
    """Dopaminergic neuron: the principal state machine of the model.

    A neuron moves between ``HEALTHY`` and ``DEGENERATING`` with a probability
    driven by its Lewy-body to mitochondria ratio, balances its dopamine level
    accordingly and dies once a degenerating neuron runs out of dopamine.
    """

    def __init__(self, network: "NeuronNetwork", position: Position) -> None:
        if network is None:
            raise ValidationError("a neuron requires a neuron network")
        self._network = network
        self._state = NeuronState()
        self._organelles: Dict[ElementType, List["GuestElement"]] = {
            ElementType.MITOCHONDRIA: [],
            ElementType.LEWYBODY: [],
        }
        super().__init__(network.system, ElementType.NEURON, position)
        network.add_neuron(self)
        for _ in range(self.system.mitochondria_per_neuron):
            self.generate_organelle(ElementType.MITOCHONDRIA, GUARANTEED)

    @property
    def network(self) -> "NeuronNetwork":
        return self._network

    @property
    def state(self) -> NeuronState:
        return self._state

    @property
    def description(self) -> NeuronStateDescription:
        return self._state.description

    @property
    def dopamine_level(self) -> float:
        return self._state.dopamine_level

    @property
    def myelin_level(self) -> int:
        return self._state.myelin_level

    def is_healthy(self) -> bool:
        return self._state.description is NeuronStateDescription.HEALTHY

    def is_degenerating(self) -> bool:
        return self._state.description is NeuronStateDescription.DEGENERATING

    def is_dead(self) -> bool:
        return self._state.description is NeuronStateDescription.DEAD

    def is_alive(self) -> bool:
        return not self.deleted and not self.is_dead()

    def is_myelinated(self) -> bool:
        return self._state.myelin_level > 0

    # -- organelle bookkeeping ---------------------------------------------

    def _adopt(self, guest: "GuestElement") -> None:
        self._organelles[guest.type].append(guest)

    def _release(self, guest: "GuestElement") -> None:
        hosted = self._organelles.get(guest.type, [])
        if guest in hosted:
            hosted.remove(guest)

    def organelles(self, kind: ElementType | None = None) -> List["GuestElement"]:
        """Return the attached organelles, optionally restricted to ``kind``."""

        if kind is None:
            return [guest for hosted in self._organelles.values() for guest in hosted]
        return list(self._organelles.get(ElementType(kind), []))

    def mitochondria(self) -> List["GuestElement"]:
        return queries.contained_organelles(self, ElementType.MITOCHONDRIA)

    def lewy_bodies(self) -> List["GuestElement"]:
        return queries.contained_organelles(self, ElementType.LEWYBODY)

    def lewy_body_mitochondria_ratio(self) -> float:
        return queries.lewy_body_mitochondria_ratio(self)

    def adjacent_neurons(self) -> List["Neuron"]:
        return self._network.adjacent_neurons(self)

    def generate_organelle(self, kind: ElementType, probability: float) -> Optional["GuestElement"]:
        """Spawn an organelle of ``kind`` near the neuron with ``probability``."""

        kind = ElementType(kind)
        if not kind.is_organelle:
            raise ValidationError(f"{kind.name} is not an organelle type")
        if self.system.rng.random() >= probability:
            return None
        return self.system.factory.create(CreationRequest(kind=kind, position=self.position, parent=self))

    def delete_organelle(self, guest: "GuestElement") -> bool:
        if guest is None or guest.neuron is not self:
            return False
        return guest.delete()

    def delete_random_organelle(self, kind: ElementType) -> bool:
        """Delete one randomly chosen attached organelle of ``kind``."""

        candidates = queries.contained_organelles(self, kind)
        if not candidates:
            return False
        chosen = candidates[int(self.system.rng.integers(len(candidates)))]
        return chosen.delete()

    # -- energy balance ------------------------------------------------------

    def is_dopamine_level_low(self) -> bool:
        return self._state.dopamine_level < self.system.mito_transfer_threshold

    def has_excess_mitochondria(self) -> bool:
        if self.is_dopamine_level_low():
            return False
        required = (100.0 - self._state.dopamine_level) / 10.0
        return len(self.mitochondria()) > required

    def degeneration_probability(self) -> float:
        return DEGENERATION_GAIN * self.lewy_body_mitochondria_ratio()

    def should_degenerate(self) -> bool:
        return self.system.rng.random() < self.degeneration_probability()

    def send_mitochondria(self, needy: "Neuron") -> bool:
        """Hand one mitochondrion over to ``needy``.

        Nothing changes unless ``needy`` is alive and one of this neuron's own
        mitochondria was removed first.
        """

        if needy is None or needy is self or not needy.is_alive():
            return False
        if not self.delete_random_organelle(ElementType.MITOCHONDRIA):
            return False
        needy.generate_organelle(ElementType.MITOCHONDRIA, GUARANTEED)
        LOGGER.debug("Mitochondria transferred from %r to %r", self, needy)
        return True

    def request_mitochondria(self) -> bool:
        astrocyte = queries.first_active_astrocyte(self.system)
        if astrocyte is None:
            return False
        return astrocyte.transfer_mitochondria(self)

    # -- lifecycle ------------------------------------------------------------

    def work(self) -> None:
        """Advance the neuron by one tick."""

        if self.is_dead() or self.deleted:
            return
        ratio = self.lewy_body_mitochondria_ratio()
        should_degenerate = self.system.rng.random() < DEGENERATION_GAIN * ratio
        if not self.is_degenerating() and should_degenerate:
            self._state.description = NeuronStateDescription.DEGENERATING
            LOGGER.debug("%r started degenerating (ratio=%.3f)", self, ratio)
        elif self.is_degenerating() and not should_degenerate:
            self._state.description = NeuronStateDescription.HEALTHY
            LOGGER.debug("%r recovered (ratio=%.3f)", self, ratio)

        scaled_ratio = DOPAMINE_GAIN * ratio
        self._state.update_dopamine(-scaled_ratio if self.is_degenerating() else scaled_ratio)

        self.generate_organelle(ElementType.MITOCHONDRIA, MITOCHONDRIA_SPAWN_PROBABILITY)
        self.generate_organelle(
            ElementType.LEWYBODY,
            DEGENERATING_LEWY_BODY_SPAWN_PROBABILITY if self.is_degenerating() else LEWY_BODY_SPAWN_PROBABILITY,
        )

        if self.is_dopamine_level_low():
            self.request_mitochondria()

        if self.is_degenerating() and self._state.dopamine_level <= 0:
            LOGGER.info("Neuron dying: %r", self)
            self.delete()

    def delete(self) -> bool:
        """Kill the neuron, dropping its organelles and connections."""

        if self.deleted:
            return False
        self._state.description = NeuronStateDescription.DEAD
        for guest in self.organelles():
            guest.delete()
        self._network.delete_edges_of(self)
        return super().delete()


__all__ = ["Neuron", "NeuronState"]
