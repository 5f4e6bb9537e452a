"""Builds elements from immutable :class:`CreationRequest` values."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict

import numpy as np

from .elements.cytokines import AntiInflammatoryCytokine, ProInflammatoryCytokine
from .elements.glia import Astrocyte, Microglia
from .elements.models import CreationRequest, ElementType, Position
from .elements.neuron import Neuron
from .elements.organelles import GuestElement
from .errors import ValidationError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .elements.base import Element
    from .system import NervousSystem


LOGGER = logging.getLogger(__name__)

# Organelles and cytokines appear within this distance of their parent on each axis.
SPAWN_JITTER = 1.0


class ElementFactory:
    """Create any element kind for one nervous system.

    Neurons and glia are placed exactly at the requested position.  Organelles
    and cytokines are scattered around it by a uniform offset per axis, clipped
    into the simulation space.
    """

    def __init__(self, system: "NervousSystem") -> None:
        self._system = system
        self._builders: Dict[ElementType, Callable[[CreationRequest], "Element"]] = {
            ElementType.NEURON: self._neuron,
            ElementType.ASTROCYTE: self._astrocyte,
            ElementType.MICROGLIA: self._microglia,
            ElementType.MITOCHONDRIA: self._organelle,
            ElementType.LEWYBODY: self._organelle,
            ElementType.PRO_CYTOKINE: self._pro_cytokine,
            ElementType.ANTI_CYTOKINE: self._anti_cytokine,
        }

    @property
    def system(self) -> "NervousSystem":
        return self._system

    def create(self, request: CreationRequest) -> "Element":
        if request is None:
            raise ValidationError("a creation request is required")
        return self._builders[request.kind](request)

    def jitter(self, position: Position) -> Position:
        """Offset ``position`` by up to :data:`SPAWN_JITTER` per axis inside the space."""

        offset = self._system.rng.uniform(-SPAWN_JITTER, SPAWN_JITTER, size=3)
        moved = np.clip(np.asarray(position, dtype=float) + offset, 0.0, np.asarray(self._system.dimensions, dtype=float))
        return (float(moved[0]), float(moved[1]), float(moved[2]))

    # -- builders -------------------------------------------------------------

    def _neuron(self, request: CreationRequest) -> Neuron:
        return Neuron(self._system.network, request.position)

    def _astrocyte(self, request: CreationRequest) -> Astrocyte:
        return Astrocyte(self._system, request.position)

    def _microglia(self, request: CreationRequest) -> Microglia:
        return Microglia(self._system, request.position)

    def _organelle(self, request: CreationRequest) -> GuestElement:
        parent = request.parent
        if parent is None or parent.type is not ElementType.NEURON:
            raise ValidationError(f"{request.kind.name} requires a parent neuron")
        return GuestElement(parent, request.kind, self.jitter(request.position))  # type: ignore[arg-type]

    def _lifespan(self, request: CreationRequest) -> int:
        if request.lifespan is not None:
            return int(request.lifespan)
        return self._system.cytokine_lifespan

    def _check_cytokine(self, request: CreationRequest) -> None:
        if request.target is None:
            raise ValidationError(f"{request.kind.name} requires a target")
        if request.parent is None:
            raise ValidationError(f"{request.kind.name} requires a parent microglia")

    def _pro_cytokine(self, request: CreationRequest) -> ProInflammatoryCytokine:
        self._check_cytokine(request)
        return ProInflammatoryCytokine(
            request.target,
            request.parent,  # type: ignore[arg-type]
            self.jitter(request.position),
            self._lifespan(request),
        )

    def _anti_cytokine(self, request: CreationRequest) -> AntiInflammatoryCytokine:
        self._check_cytokine(request)
        return AntiInflammatoryCytokine(
            request.target,  # type: ignore[arg-type]
            request.parent,  # type: ignore[arg-type]
            self.jitter(request.position),
            self._lifespan(request),
        )


__all__ = ["ElementFactory", "SPAWN_JITTER"]
