"""Glial agents: cytokine-producing microglia and supportive astrocytes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .. import queries
from ..errors import EmptyPopulationError
from .base import Element
from .models import CreationRequest, ElementType, Position

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..system import NervousSystem
    from .cytokines import Cytokine
    from .neuron import Neuron


LOGGER = logging.getLogger(__name__)

PRODUCTION_PROBABILITY = 0.5
# Inclusive bounds of the astrocyte support boost.
SUPPORT_BOOST_RANGE = (1, 5)


class Microglia(Element):
    """Immune cell that releases cytokines into the nervous system."""

    def __init__(self, system: "NervousSystem", position: Position) -> None:
        super().__init__(system, ElementType.MICROGLIA, position)

    def produce_cytokines(self) -> Optional["Cytokine"]:
        """Run the per-tick production decision.

        Half of the time a pro-inflammatory cytokine is released towards a
        random active element.  Otherwise one is released only when some living
        neuron carries a Lewy body.
        """

        if self.system.rng.random() < PRODUCTION_PROBABILITY:
            return self.produce_cytokine(pro_inflammatory=True)
        if queries.detect_lewy_bodies(self.system):
            return self.produce_cytokine(pro_inflammatory=True)
        return None

    def produce_cytokine(self, pro_inflammatory: bool) -> Optional["Cytokine"]:
        """Release one cytokine of the requested variant.

        Pro-inflammatory cytokines target any active element, anti-inflammatory
        ones a living neuron.  Nothing is released when no candidate exists.
        """

        try:
            if pro_inflammatory:
                target: Element = self.system.random_element()
                kind = ElementType.PRO_CYTOKINE
            else:
                target = self.system.random_neuron()
                kind = ElementType.ANTI_CYTOKINE
        except EmptyPopulationError as exc:
            LOGGER.debug("%r produced no cytokine: %s", self, exc)
            return None
        cytokine = self.system.factory.create(
            CreationRequest(kind=kind, position=self.position, target=target, parent=self)
        )
        LOGGER.debug("Cytokine created: %r", cytokine)
        return cytokine  # type: ignore[return-value]


class Astrocyte(Element):
    """Support cell that nourishes neurons and brokers mitochondria transfers."""

    def __init__(self, system: "NervousSystem", position: Position) -> None:
        self._active = True
        self._mitochondria_transfer_count = 0
        super().__init__(system, ElementType.ASTROCYTE, position)

    @property
    def active(self) -> bool:
        return self._active

    @property
    def mitochondria_transfer_count(self) -> int:
        return self._mitochondria_transfer_count

    def activate(self) -> None:
        if self._active:
            self.support_neurons()

    def deactivate(self) -> None:
        if self._active:
            LOGGER.debug("%r deactivated", self)
        self._active = False

    def support_neurons(self) -> Optional["Neuron"]:
        """Boost myelin and dopamine of one random living neuron."""

        try:
            neuron = self.system.random_neuron()
        except EmptyPopulationError as exc:
            LOGGER.debug("%r has no neuron to support: %s", self, exc)
            return None
        rng = self.system.rng
        low, high = SUPPORT_BOOST_RANGE
        neuron.state.update_myelin(int(rng.integers(low, high + 1)))
        neuron.state.update_dopamine(int(rng.integers(low, high + 1)))
        return neuron

    def transfer_mitochondria(self, needy: "Neuron") -> bool:
        """Ask a neighbour of ``needy`` with surplus mitochondria to share one."""

        donor = next((neighbour for neighbour in needy.adjacent_neurons() if neighbour.has_excess_mitochondria()), None)
        if donor is None:
            return False
        if not donor.send_mitochondria(needy):
            return False
        self._mitochondria_transfer_count += 1
        return True


__all__ = ["Astrocyte", "Microglia"]
