"""Base classes for every agent living in the nervous system."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Tuple

import numpy as np

from ..errors import ValidationError
from .models import ElementType, Position

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..system import NervousSystem


LOGGER = logging.getLogger(__name__)

_AXES = ("x", "y", "z")


class Element:
    """Identity, bounded 3D position and soft-delete flag shared by all agents.

    Elements register themselves with their :class:`NervousSystem` while they
    are constructed.  ``delete()`` only raises the ``deleted`` flag; the
    population removes flagged elements during its end-of-tick sweep.
    """

    def __init__(self, system: "NervousSystem", kind: ElementType, position: Position) -> None:
        if system is None:
            raise ValidationError("an element requires a nervous system")
        if kind is None:
            raise ValidationError("an element requires a type")
        self._system = system
        self._type = ElementType(kind)
        self._deleted = False
        self._x = 0.0
        self._y = 0.0
        self._z = 0.0
        x, y, z = position
        self.x = x
        self.y = y
        self.z = z
        self._id = system.next_element_id()
        system.add_element(self)
        LOGGER.debug("%r created", self)

    @property
    def element_id(self) -> int:
        return self._id

    @property
    def system(self) -> "NervousSystem":
        return self._system

    @property
    def type(self) -> ElementType:
        return self._type

    @property
    def deleted(self) -> bool:
        return self._deleted

    # -- position -----------------------------------------------------------

    def _bounded(self, axis: int, value: float) -> float:
        limit = self._system.dimensions[axis]
        value = float(value)
        if not np.isfinite(value):
            raise ValidationError(f"Invalid {_AXES[axis].upper()} coordinate {value!r}")
        if value > limit:
            raise ValidationError(f"Invalid {_AXES[axis].upper()} coordinate {value:.3f} (dimension {limit})")
        return max(value, 0.0)

    @property
    def x(self) -> float:
        return self._x

    @x.setter
    def x(self, value: float) -> None:
        self._x = self._bounded(0, value)

    @property
    def y(self) -> float:
        return self._y

    @y.setter
    def y(self, value: float) -> None:
        self._y = self._bounded(1, value)

    @property
    def z(self) -> float:
        return self._z

    @z.setter
    def z(self, value: float) -> None:
        self._z = self._bounded(2, value)

    @property
    def position(self) -> Position:
        return (self._x, self._y, self._z)

    def distance_vector(self, other: "Element") -> Tuple[float, float, float]:
        """Return the vector pointing from this element to ``other``."""

        return (other.x - self._x, other.y - self._y, other.z - self._z)

    def distance_to(self, other: "Element") -> float:
        return float(np.linalg.norm(self.distance_vector(other)))

    # -- lifecycle ----------------------------------------------------------

    def delete(self) -> bool:
        """Flag the element as deleted.

        Returns ``False`` when the element had already been deleted.
        """

        if self._deleted:
            return False
        self._deleted = True
        self._system.element_deleted(self)
        LOGGER.debug("%r deleted", self)
        return True

    def __repr__(self) -> str:
        return f"{self._type.name}#{getattr(self, '_id', '?')} pos=({self._x:.2f}, {self._y:.2f}, {self._z:.2f})"


class MoveableElement(Element):
    """Element that can travel through the simulation space."""

    def move_to(self, x: float, y: float, z: float) -> None:
        self.x = x
        self.y = y
        self.z = z

    def move_towards(self, target: Element, step_size: float) -> None:
        """Move ``step_size`` of the way towards ``target`` (linear interpolation)."""

        current = np.array(self.position)
        moved = current + (np.array(target.position) - current) * step_size
        # Interpolation rounding must not push a coordinate past the boundary.
        x, y, z = np.clip(moved, 0.0, self._system.dimensions)
        self.move_to(float(x), float(y), float(z))


__all__ = ["Element", "MoveableElement"]
