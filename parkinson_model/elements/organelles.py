"""Organelles and inclusions hosted by a single neuron."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..errors import ValidationError
from .base import Element
from .models import ElementType, Position

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .neuron import Neuron


class GuestElement(Element):
    """A mitochondrion or Lewy body attached to exactly one neuron.

    The back-reference is non-owning: the neuron decides when its guests die,
    and a deleted guest forgets its host.
    """

    def __init__(self, neuron: "Neuron", kind: ElementType, position: Position) -> None:
        if neuron is None:
            raise ValidationError("an organelle requires a host neuron")
        kind = ElementType(kind)
        if not kind.is_organelle:
            raise ValidationError(f"{kind.name} is not an organelle type")
        if neuron.deleted or neuron.is_dead():
            raise ValidationError(f"cannot attach an organelle to dead neuron {neuron!r}")
        self._neuron: Optional["Neuron"] = neuron
        super().__init__(neuron.system, kind, position)
        neuron._adopt(self)

    @property
    def neuron(self) -> Optional["Neuron"]:
        return self._neuron

    @property
    def attached(self) -> bool:
        return self._neuron is not None

    def delete(self) -> bool:
        removed = super().delete()
        if removed and self._neuron is not None:
            self._neuron._release(self)
        self._neuron = None
        return removed


__all__ = ["GuestElement"]
