import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from typing import Callable, Iterable, Sequence

import numpy as np
import pytest

from parkinson_model.config import SimulationConfig
from parkinson_model.elements.models import CreationRequest, ElementType
from parkinson_model.system import NervousSystem


class ScriptedRng:
    """Stand-in for ``numpy.random.Generator`` replaying queued draws.

    ``random()`` pops from ``randoms`` and falls back to ``default`` (0.99 keeps
    every probabilistic branch below 1.0 from firing).  ``integers`` pops from
    ``ints`` or returns the lower bound.  ``uniform`` returns the midpoint, so
    spawned organelles and cytokines land exactly on their parent.
    """

    def __init__(self, randoms: Iterable[float] = (), ints: Iterable[int] = (), default: float = 0.99) -> None:
        self.randoms = list(randoms)
        self.ints = list(ints)
        self.default = default

    def random(self) -> float:
        return self.randoms.pop(0) if self.randoms else self.default

    def integers(self, low, high=None, size=None):
        if self.ints:
            return self.ints.pop(0)
        return 0 if high is None else low

    def uniform(self, low=0.0, high=1.0, size=None):
        middle = (low + high) / 2.0
        if size is None:
            return middle
        return np.full(size, middle, dtype=float)


@pytest.fixture()
def rng() -> ScriptedRng:
    return ScriptedRng()


@pytest.fixture()
def system(rng: ScriptedRng) -> NervousSystem:
    """Empty 50^3 population driven by the scripted generator."""

    return NervousSystem((50, 50, 50), mitochondria_per_neuron=2, rng=rng)


@pytest.fixture()
def seeded_system() -> NervousSystem:
    return NervousSystem((50, 50, 50), seed=1234)


@pytest.fixture()
def spawn(system: NervousSystem) -> Callable[..., object]:
    """Create an element of ``kind`` at ``position`` through the factory."""

    def _spawn(kind: ElementType, position: Sequence[float] = (10.0, 10.0, 10.0), **kwargs):
        return system.factory.create(CreationRequest(kind, tuple(position), **kwargs))

    return _spawn


@pytest.fixture()
def small_config() -> SimulationConfig:
    return SimulationConfig(
        dimension_x=20,
        dimension_y=20,
        dimension_z=20,
        initial_neurons=30,
        initial_astrocytes=3,
        initial_microglia=3,
        seed=7,
        statistics_interval=5,
        max_ticks=40,
    )
