"""Reference tick scheduler driving a :class:`NervousSystem`."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np

from .config import DEFAULT_SIMULATION_CONFIG, SimulationConfig
from .statistics import DataCollector, PopulationStatistics, collect_statistics
from .system import NervousSystem


LOGGER = logging.getLogger(__name__)


class StopReason(str, Enum):
    MAX_TICKS = "max_ticks"
    NO_ALIVE_NEURONS = "no_alive_neurons"


@dataclass(frozen=True)
class SimulationReport:
    """Outcome of :meth:`SimulationEngine.run`."""

    ticks: int
    stop_reason: StopReason
    final: PopulationStatistics
    history: List[PopulationStatistics] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "ticks": self.ticks,
            "stop_reason": self.stop_reason.value,
            "final": self.final.as_dict(),
            "history": [snapshot.as_dict() for snapshot in self.history],
        }


def build_nervous_system(
    config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
    rng: Optional[np.random.Generator] = None,
) -> NervousSystem:
    """Create and populate a nervous system following ``config``.

    Neurons are placed first and wired together, then astrocytes and microglia
    are added.  Isolated neurons are pruned when ``filter_isolated_neurons`` is
    set.
    """

    system = NervousSystem.from_config(config, rng=rng)
    system.add_neurons(config.initial_neurons)
    system.add_astrocytes(config.initial_astrocytes)
    system.add_microglia(config.initial_microglia)
    if config.filter_isolated_neurons:
        system.filter_out_neurons()
        system.step()
    LOGGER.info("Nervous system built: %s", system.summary())
    return system


class SimulationEngine:
    """Run the agents of a nervous system tick by tick.

    Every phase iterates over a snapshot taken when the phase starts.  Agents
    created in an earlier phase already act in the later phases of the same
    tick (a freshly produced cytokine steps right away); agents created within
    a phase wait for the next tick.  Agents deleted earlier in the tick are
    skipped.
    """

    def __init__(self, system: NervousSystem, config: SimulationConfig = DEFAULT_SIMULATION_CONFIG) -> None:
        self._system = system
        self._config = config
        self._tick = 0
        self._collector = DataCollector(system, config.statistics_interval)

    @property
    def system(self) -> NervousSystem:
        return self._system

    @property
    def current_tick(self) -> int:
        return self._tick

    @property
    def collector(self) -> DataCollector:
        return self._collector

    def tick(self) -> int:
        """Advance the population by one tick and return the new tick number."""

        system = self._system
        for neuron in system.neurons():
            if not neuron.deleted:
                neuron.work()
        for microglia in system.microglia():
            if not microglia.deleted:
                microglia.produce_cytokines()
        for cytokine in system.cytokines():
            cytokine.step()
        for astrocyte in system.astrocytes():
            if not astrocyte.deleted:
                astrocyte.activate()
        self._tick += 1
        if self._tick % self._config.sweep_interval == 0:
            system.step()
        self._collector.collect(self._tick)
        return self._tick

    def run(self, max_ticks: Optional[int] = None) -> SimulationReport:
        """Tick until ``max_ticks`` or until no neuron is left alive."""

        limit = self._config.max_ticks if max_ticks is None else int(max_ticks)
        start = self._tick
        reason = StopReason.MAX_TICKS
        while self._tick - start < limit:
            if not self._system.alive_neurons():
                reason = StopReason.NO_ALIVE_NEURONS
                break
            self.tick()
        else:
            if not self._system.alive_neurons():
                reason = StopReason.NO_ALIVE_NEURONS
        self._system.step()
        final = collect_statistics(self._system, self._tick)
        LOGGER.info(
            "Simulation finished after %d ticks (%s): %d alive, %d dead neurons",
            self._tick - start,
            reason.value,
            final.alive_neurons,
            final.dead_neurons,
        )
        return SimulationReport(
            ticks=self._tick - start,
            stop_reason=reason,
            final=final,
            history=self._collector.history,
        )


__all__ = ["SimulationEngine", "SimulationReport", "StopReason", "build_nervous_system"]
