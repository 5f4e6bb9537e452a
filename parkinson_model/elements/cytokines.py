"""Signalling molecules released by microglia."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from ..errors import ValidationError
from .base import Element, MoveableElement
from .models import ElementType, Position

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .glia import Microglia
    from .neuron import Neuron


LOGGER = logging.getLogger(__name__)

DEFAULT_LIFESPAN = 50
APPROACH_STEP = 0.5
ATTACHMENT_DISTANCE = 1.0
PRO_INFLAMMATORY_PROBABILITY = 0.4
ANTI_INFLAMMATORY_PROBABILITY = 0.6
# Bounds of the integer draw used to strip myelin (upper bound exclusive).
MYELIN_DAMAGE_RANGE = (1, 5)


class TargetEffect(str, Enum):
    """Effect a pro-inflammatory cytokine applies, resolved from its target."""

    NEURON = "neuron"
    ASTROCYTE = "astrocyte"
    MICROGLIA = "microglia"
    INERT = "inert"

    @classmethod
    def for_target(cls, target: Element) -> "TargetEffect":
        return _EFFECT_BY_TYPE.get(target.type, cls.INERT)


_EFFECT_BY_TYPE = {
    ElementType.NEURON: TargetEffect.NEURON,
    ElementType.ASTROCYTE: TargetEffect.ASTROCYTE,
    ElementType.MICROGLIA: TargetEffect.MICROGLIA,
}


class Cytokine(MoveableElement):
    """Short-lived agent that homes in on a target and then acts on it.

    Every step consumes one unit of lifespan.  A cytokine whose lifespan is
    exhausted, or whose target has left the population, deletes itself.
    """

    def __init__(
        self,
        kind: ElementType,
        target: Element,
        parent: "Microglia",
        position: Position,
        lifespan: int = DEFAULT_LIFESPAN,
    ) -> None:
        if target is None:
            raise ValidationError("a cytokine requires a target")
        if parent is None:
            raise ValidationError("a cytokine requires a parent microglia")
        if parent.type is not ElementType.MICROGLIA:
            raise ValidationError(f"cytokine parent must be a microglia, got {parent.type.name}")
        system = parent.system
        if not system.contains(target):
            raise ValidationError("Target must be present in nervous system")
        self._target = target
        self._parent = parent
        self._lifespan = int(lifespan)
        self._attached = False
        super().__init__(system, kind, position)

    @property
    def target(self) -> Element:
        return self._target

    @property
    def parent_microglia(self) -> "Microglia":
        return self._parent

    @property
    def lifespan(self) -> int:
        return self._lifespan

    @property
    def attached(self) -> bool:
        return self._attached

    def step(self) -> None:
        if self.deleted:
            return
        self._lifespan -= 1
        if self._lifespan <= 0 or not self.system.contains(self._target):
            self.delete()
        elif not self._attached:
            self.move_towards(self._target, APPROACH_STEP)
            self.attach_to_target()
        else:
            self.interact_with_target()

    def attach_to_target(self) -> bool:
        if self.distance_to(self._target) <= ATTACHMENT_DISTANCE:
            self._attached = True
        return self._attached

    def interact_with_target(self) -> None:  # pragma: no cover - implemented by subclasses
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{super().__repr__()} target={self._target.type.name}#{self._target.element_id}"


class ProInflammatoryCytokine(Cytokine):
    """Cytokine that damages neurons, silences astrocytes and excites microglia."""

    def __init__(
        self,
        target: Element,
        parent: "Microglia",
        position: Position,
        lifespan: int = DEFAULT_LIFESPAN,
    ) -> None:
        super().__init__(ElementType.PRO_CYTOKINE, target, parent, position, lifespan)
        self._effect = TargetEffect.for_target(target)

    @property
    def effect(self) -> TargetEffect:
        return self._effect

    def interact_with_target(self) -> None:
        if self._effect is TargetEffect.NEURON:
            self._damage_neuron(self._target)  # type: ignore[arg-type]
        elif self._effect is TargetEffect.ASTROCYTE:
            self._target.deactivate()  # type: ignore[attr-defined]
        elif self._effect is TargetEffect.MICROGLIA:
            self._target.produce_cytokines()  # type: ignore[attr-defined]

    def _damage_neuron(self, neuron: "Neuron") -> None:
        rng = self.system.rng
        if rng.random() >= PRO_INFLAMMATORY_PROBABILITY:
            return
        if neuron.is_myelinated():
            low, high = MYELIN_DAMAGE_RANGE
            neuron.state.update_myelin(-int(rng.integers(low, high)))
            return
        neuron.delete_random_organelle(ElementType.MITOCHONDRIA)


class AntiInflammatoryCytokine(Cytokine):
    """Cytokine that clears Lewy bodies from its target neuron."""

    def __init__(
        self,
        target: "Neuron",
        parent: "Microglia",
        position: Position,
        lifespan: int = DEFAULT_LIFESPAN,
    ) -> None:
        if target is not None and target.type is not ElementType.NEURON:
            raise ValidationError(f"anti-inflammatory cytokines target neurons, got {target.type.name}")
        super().__init__(ElementType.ANTI_CYTOKINE, target, parent, position, lifespan)

    def interact_with_target(self) -> None:
        if self.system.rng.random() < ANTI_INFLAMMATORY_PROBABILITY:
            self._target.delete_random_organelle(ElementType.LEWYBODY)  # type: ignore[attr-defined]


__all__ = [
    "AntiInflammatoryCytokine",
    "Cytokine",
    "DEFAULT_LIFESPAN",
    "ProInflammatoryCytokine",
    "TargetEffect",
]
