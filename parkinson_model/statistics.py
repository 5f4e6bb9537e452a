"""Population statistics collected while a simulation runs."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import numpy as np

from . import queries
from .elements.models import ElementType, NeuronStateDescription
from .errors import ValidationError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .system import NervousSystem


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PopulationStatistics:
    """Snapshot of the population at the end of one tick."""

    tick: int
    healthy_neurons: int
    degenerating_neurons: int
    dead_neurons: int
    total_dopamine: float
    mitochondria: int
    lewy_bodies: int
    lewy_body_mitochondria_ratio: float
    pro_inflammatory_cytokines: int
    anti_inflammatory_cytokines: int
    mitochondria_transfers: int
    active_astrocytes: int

    @property
    def alive_neurons(self) -> int:
        return self.healthy_neurons + self.degenerating_neurons

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def columns(cls) -> List[str]:
        return [item.name for item in fields(cls)]


def collect_statistics(system: "NervousSystem", tick: int) -> PopulationStatistics:
    """Summarise ``system`` without touching any element."""

    roster = system.network.neurons
    by_state = {description: 0 for description in NeuronStateDescription}
    for neuron in roster:
        by_state[NeuronStateDescription.DEAD if neuron.deleted else neuron.description] += 1
    counts = queries.type_counts(system.elements())
    mitochondria = counts[ElementType.MITOCHONDRIA]
    lewy_bodies = counts[ElementType.LEWYBODY]
    astrocytes = system.astrocytes()
    return PopulationStatistics(
        tick=int(tick),
        healthy_neurons=by_state[NeuronStateDescription.HEALTHY],
        degenerating_neurons=by_state[NeuronStateDescription.DEGENERATING],
        dead_neurons=by_state[NeuronStateDescription.DEAD],
        total_dopamine=float(sum(neuron.dopamine_level for neuron in roster)),
        mitochondria=mitochondria,
        lewy_bodies=lewy_bodies,
        lewy_body_mitochondria_ratio=lewy_bodies / mitochondria if mitochondria else 0.0,
        pro_inflammatory_cytokines=counts[ElementType.PRO_CYTOKINE],
        anti_inflammatory_cytokines=counts[ElementType.ANTI_CYTOKINE],
        mitochondria_transfers=sum(astrocyte.mitochondria_transfer_count for astrocyte in astrocytes),
        active_astrocytes=sum(1 for astrocyte in astrocytes if astrocyte.active),
    )


class DataCollector:
    """Record a statistics snapshot every ``interval`` ticks."""

    def __init__(self, system: "NervousSystem", interval: int = 10) -> None:
        if interval <= 0:
            raise ValidationError("interval must be positive")
        self._system = system
        self._interval = int(interval)
        self._history: List[PopulationStatistics] = []

    @property
    def interval(self) -> int:
        return self._interval

    @property
    def history(self) -> List[PopulationStatistics]:
        return list(self._history)

    @property
    def latest(self) -> Optional[PopulationStatistics]:
        return self._history[-1] if self._history else None

    def collect(self, tick: int, force: bool = False) -> Optional[PopulationStatistics]:
        if not force and tick % self._interval != 0:
            return None
        snapshot = collect_statistics(self._system, tick)
        self._history.append(snapshot)
        LOGGER.debug("Statistics collected at tick %d: %s", tick, snapshot)
        return snapshot

    def as_array(self) -> np.ndarray:
        """Return the history as a ``(snapshots, columns)`` float matrix."""

        columns = PopulationStatistics.columns()
        if not self._history:
            return np.empty((0, len(columns)), dtype=float)
        return np.array([[float(getattr(row, name)) for name in columns] for row in self._history], dtype=float)


__all__ = ["DataCollector", "PopulationStatistics", "collect_statistics"]
