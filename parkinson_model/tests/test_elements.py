import math

import pytest

from parkinson_model.elements.glia import Microglia
from parkinson_model.elements.models import CreationRequest, ElementType, NetworkEdge
from parkinson_model.errors import ValidationError


def test_element_type_groups() -> None:
    assert ElementType.MITOCHONDRIA.is_organelle
    assert ElementType.LEWYBODY.is_organelle
    assert not ElementType.NEURON.is_organelle
    assert ElementType.PRO_CYTOKINE.is_cytokine
    assert ElementType.ANTI_CYTOKINE.is_cytokine
    assert not ElementType.MICROGLIA.is_cytokine


def test_creation_request_normalises_values() -> None:
    request = CreationRequest("astrocyte", (1, 2, 3))

    assert request.kind is ElementType.ASTROCYTE
    assert request.position == (1.0, 2.0, 3.0)
    with pytest.raises(AttributeError):
        request.kind = ElementType.NEURON  # type: ignore[misc]
    with pytest.raises(ValidationError):
        CreationRequest(ElementType.NEURON, (1.0, 2.0))


def test_network_edge_is_unordered(spawn) -> None:
    first = spawn(ElementType.NEURON)
    second = spawn(ElementType.NEURON)

    forward = NetworkEdge(first, second)
    backward = NetworkEdge(second, first)

    assert forward == backward
    assert hash(forward) == hash(backward)
    assert forward.other(first) is second
    assert backward.other(first) is second
    assert forward.touches(first) and forward.touches(second)


def test_network_edge_rejects_self_loop(spawn) -> None:
    neuron = spawn(ElementType.NEURON)

    with pytest.raises(ValidationError):
        NetworkEdge(neuron, neuron)


def test_negative_coordinates_are_clamped(system) -> None:
    microglia = Microglia(system, (-3.0, 5.0, -0.5))

    assert microglia.position == (0.0, 5.0, 0.0)


def test_coordinates_beyond_dimension_are_rejected(system) -> None:
    edge = Microglia(system, (50.0, 50.0, 50.0))
    assert edge.position == (50.0, 50.0, 50.0)

    with pytest.raises(ValidationError):
        Microglia(system, (10.0, 50.5, 10.0))
    with pytest.raises(ValidationError):
        edge.z = 51
    assert edge.z == 50.0


def test_element_ids_are_unique_and_increasing(spawn) -> None:
    ids = [spawn(ElementType.MICROGLIA).element_id for _ in range(5)]

    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_delete_is_idempotent(system, spawn) -> None:
    microglia = spawn(ElementType.MICROGLIA)

    assert microglia.delete() is True
    assert microglia.delete() is False
    assert microglia.deleted
    assert system.contains(microglia)


def test_distance_between_elements(spawn) -> None:
    first = spawn(ElementType.ASTROCYTE, (0.0, 0.0, 0.0))
    second = spawn(ElementType.ASTROCYTE, (3.0, 4.0, 0.0))

    assert first.distance_vector(second) == (3.0, 4.0, 0.0)
    assert math.isclose(first.distance_to(second), 5.0)
    assert math.isclose(second.distance_to(first), 5.0)
