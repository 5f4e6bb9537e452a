import pytest

from parkinson_model.elements.cytokines import (
    AntiInflammatoryCytokine,
    ProInflammatoryCytokine,
    TargetEffect,
)
from parkinson_model.elements.models import CreationRequest, ElementType
from parkinson_model.errors import ValidationError
from parkinson_model.system import NervousSystem

from conftest import ScriptedRng


def _cytokine(system, kind, target, parent, lifespan=None):
    return system.factory.create(CreationRequest(kind, parent.position, target=target, parent=parent, lifespan=lifespan))


def test_target_must_be_present(system, spawn) -> None:
    microglia = spawn(ElementType.MICROGLIA)
    other = NervousSystem((50, 50, 50), rng=ScriptedRng())
    foreign = other.factory.create(CreationRequest(ElementType.ASTROCYTE, (1.0, 1.0, 1.0)))

    with pytest.raises(ValidationError):
        ProInflammatoryCytokine(foreign, microglia, microglia.position)


def test_target_and_parent_are_required(system, spawn) -> None:
    microglia = spawn(ElementType.MICROGLIA)
    neuron = spawn(ElementType.NEURON)

    with pytest.raises(ValidationError):
        system.factory.create(CreationRequest(ElementType.PRO_CYTOKINE, (1.0, 1.0, 1.0), parent=microglia))
    with pytest.raises(ValidationError):
        system.factory.create(CreationRequest(ElementType.ANTI_CYTOKINE, (1.0, 1.0, 1.0), target=neuron))
    with pytest.raises(ValidationError):
        ProInflammatoryCytokine(neuron, neuron, neuron.position)  # type: ignore[arg-type]


def test_anti_inflammatory_targets_neurons_only(spawn) -> None:
    microglia = spawn(ElementType.MICROGLIA)
    astrocyte = spawn(ElementType.ASTROCYTE)

    with pytest.raises(ValidationError):
        AntiInflammatoryCytokine(astrocyte, microglia, microglia.position)  # type: ignore[arg-type]


def test_effect_is_resolved_from_target(system, spawn) -> None:
    microglia = spawn(ElementType.MICROGLIA)
    neuron = spawn(ElementType.NEURON)
    astrocyte = spawn(ElementType.ASTROCYTE)
    mitochondrion = neuron.mitochondria()[0]

    assert _cytokine(system, ElementType.PRO_CYTOKINE, neuron, microglia).effect is TargetEffect.NEURON
    assert _cytokine(system, ElementType.PRO_CYTOKINE, astrocyte, microglia).effect is TargetEffect.ASTROCYTE
    assert _cytokine(system, ElementType.PRO_CYTOKINE, microglia, microglia).effect is TargetEffect.MICROGLIA
    assert _cytokine(system, ElementType.PRO_CYTOKINE, mitochondrion, microglia).effect is TargetEffect.INERT


def test_lifespan_decreases_every_step(system, spawn) -> None:
    microglia = spawn(ElementType.MICROGLIA, (0.0, 0.0, 0.0))
    astrocyte = spawn(ElementType.ASTROCYTE, (40.0, 40.0, 40.0))
    cytokine = _cytokine(system, ElementType.PRO_CYTOKINE, astrocyte, microglia, lifespan=3)

    lifespans = []
    while not cytokine.deleted:
        cytokine.step()
        lifespans.append(cytokine.lifespan)

    assert lifespans == [2, 1, 0]
    assert cytokine.deleted


def test_default_lifespan_comes_from_the_population(spawn) -> None:
    microglia = spawn(ElementType.MICROGLIA)
    cytokine = _cytokine(microglia.system, ElementType.PRO_CYTOKINE, microglia, microglia)

    assert cytokine.lifespan == microglia.system.cytokine_lifespan == 50


def test_cytokine_dies_once_target_is_swept(system, spawn) -> None:
    microglia = spawn(ElementType.MICROGLIA)
    astrocyte = spawn(ElementType.ASTROCYTE, (30.0, 30.0, 30.0))
    cytokine = _cytokine(system, ElementType.PRO_CYTOKINE, astrocyte, microglia)

    astrocyte.delete()
    cytokine.step()
    assert not cytokine.deleted

    system.step()
    cytokine.step()
    assert cytokine.deleted


def test_cytokine_approaches_then_attaches(system, spawn) -> None:
    microglia = spawn(ElementType.MICROGLIA, (0.0, 0.0, 0.0))
    astrocyte = spawn(ElementType.ASTROCYTE, (8.0, 0.0, 0.0))
    cytokine = _cytokine(system, ElementType.PRO_CYTOKINE, astrocyte, microglia)

    cytokine.step()
    assert cytokine.position == (4.0, 0.0, 0.0)
    assert not cytokine.attached
    cytokine.step()
    assert cytokine.position == (6.0, 0.0, 0.0)
    assert not cytokine.attached
    cytokine.step()
    assert cytokine.attached
    assert astrocyte.active

    cytokine.step()
    assert not astrocyte.active


def test_pro_inflammatory_strips_myelin(system, spawn, rng) -> None:
    microglia = spawn(ElementType.MICROGLIA)
    neuron = spawn(ElementType.NEURON)
    neuron.state.myelin_level = 5
    cytokine = _cytokine(system, ElementType.PRO_CYTOKINE, neuron, microglia)
    cytokine.step()
    assert cytokine.attached

    rng.randoms = [0.1]
    rng.ints = [3]
    cytokine.step()

    assert neuron.myelin_level == 2
    assert len(neuron.mitochondria()) == 2


def test_myelin_never_goes_negative(system, spawn, rng) -> None:
    microglia = spawn(ElementType.MICROGLIA)
    neuron = spawn(ElementType.NEURON)
    neuron.state.myelin_level = 1
    cytokine = _cytokine(system, ElementType.PRO_CYTOKINE, neuron, microglia)
    cytokine.step()

    rng.randoms = [0.1]
    rng.ints = [4]
    cytokine.step()

    assert neuron.myelin_level == 0


def test_pro_inflammatory_removes_mitochondria_from_bare_neuron(system, spawn, rng) -> None:
    microglia = spawn(ElementType.MICROGLIA)
    neuron = spawn(ElementType.NEURON)
    cytokine = _cytokine(system, ElementType.PRO_CYTOKINE, neuron, microglia)
    cytokine.step()

    rng.randoms = [0.5]
    cytokine.step()
    assert len(neuron.mitochondria()) == 2

    rng.randoms = [0.3]
    cytokine.step()
    assert len(neuron.mitochondria()) == 1


def test_pro_inflammatory_excites_microglia(system, spawn, rng) -> None:
    source = spawn(ElementType.MICROGLIA)
    excited = spawn(ElementType.MICROGLIA)
    cytokine = _cytokine(system, ElementType.PRO_CYTOKINE, excited, source)
    cytokine.step()

    rng.randoms = [0.1]
    cytokine.step()

    produced = [item for item in system.cytokines() if item is not cytokine]
    assert len(produced) == 1
    assert produced[0].parent_microglia is excited


def test_pro_inflammatory_is_inert_on_organelles(system, spawn, rng) -> None:
    microglia = spawn(ElementType.MICROGLIA)
    neuron = spawn(ElementType.NEURON)
    mitochondrion = neuron.mitochondria()[0]
    cytokine = _cytokine(system, ElementType.PRO_CYTOKINE, mitochondrion, microglia)
    cytokine.step()

    rng.randoms = [0.0]
    cytokine.step()

    assert not mitochondrion.deleted
    assert rng.randoms == [0.0]


def test_anti_inflammatory_clears_lewy_bodies(seeded_system) -> None:
    microglia = seeded_system.factory.create(CreationRequest(ElementType.MICROGLIA, (20.0, 20.0, 20.0)))
    neuron = seeded_system.factory.create(CreationRequest(ElementType.NEURON, (20.0, 20.0, 20.0)))
    neuron.generate_organelle(ElementType.LEWYBODY, 2.0)
    assert len(neuron.lewy_bodies()) == 1
    cytokine = seeded_system.factory.create(
        CreationRequest(ElementType.ANTI_CYTOKINE, neuron.position, target=neuron, parent=microglia, lifespan=100)
    )

    counts = []
    for _ in range(60):
        cytokine.step()
        counts.append(len(neuron.lewy_bodies()))

    assert cytokine.attached
    assert counts[-1] == 0
    first_clear = counts.index(0)
    assert all(count == 0 for count in counts[first_clear:])
