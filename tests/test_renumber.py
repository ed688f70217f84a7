from __future__ import annotations

import pytest

from pdfgraphx.core import DanglingReferenceError, Dictionary, ObjectId, Reference
from pdfgraphx.merge import renumber_disjoint, renumber_objects

from conftest import build_graph, page_labels


def test_renumber_objects_returns_next_free_id() -> None:
    graph = build_graph("A", 2)

    next_id = renumber_objects(graph, 10)

    assert next_id == 16
    assert sorted(graph.objects) == [ObjectId(number, 0) for number in range(10, 16)]
    assert graph.max_id == 15


def test_renumber_objects_rewrites_references_and_trailer() -> None:
    graph = build_graph("A", 2)

    renumber_objects(graph, 10)

    assert graph.trailer["Root"] == Reference.to(10)
    assert graph.objects[ObjectId(10)]["Pages"] == Reference.to(11)
    assert graph.objects[ObjectId(11)]["Kids"] == [Reference.to(12), Reference.to(14)]
    assert graph.objects[ObjectId(12)]["Parent"] == Reference.to(11)
    assert graph.objects[ObjectId(12)]["Contents"] == Reference.to(13)
    assert graph.dangling_references() == []
    assert page_labels(graph) == [b"A1", b"A2"]


def test_renumber_objects_keeps_relative_order_and_resets_generations() -> None:
    graph = build_graph("A", 1)
    page = graph.objects.pop(ObjectId(3))
    graph.objects[ObjectId(3, 2)] = page
    graph.objects[ObjectId(2)]["Kids"] = [Reference.to(3, 2)]

    renumber_objects(graph, 1)

    assert graph.objects[ObjectId(3, 0)]["Label"] == b"A1"
    assert all(object_id.generation == 0 for object_id in graph.objects)


def test_renumber_objects_fails_fast_on_dangling_reference() -> None:
    graph = build_graph("A", 1)
    graph.objects[ObjectId(3)]["Annots"] = [Reference.to(99)]
    before = graph.copy()

    with pytest.raises(DanglingReferenceError) as excinfo:
        renumber_objects(graph, 50)

    assert excinfo.value.reference == Reference.to(99)
    assert graph.objects == before.objects
    assert graph.trailer == before.trailer


def test_renumber_objects_rejects_non_positive_start() -> None:
    with pytest.raises(ValueError):
        renumber_objects(build_graph("A", 1), 0)


def test_renumber_empty_graph() -> None:
    graph = build_graph("A", 0)
    graph.objects.clear()
    graph.trailer = Dictionary()

    assert renumber_objects(graph, 5) == 5
    assert graph.max_id == 4


def test_renumber_disjoint_chains_identifier_ranges() -> None:
    first, second, third = build_graph("A", 2), build_graph("B", 3), build_graph("C", 0)

    renumber_disjoint([first, second, third])

    assert sorted(first.objects)[0] == ObjectId(1) and sorted(first.objects)[-1] == ObjectId(6)
    assert sorted(second.objects)[0] == ObjectId(7) and sorted(second.objects)[-1] == ObjectId(14)
    assert sorted(third.objects) == [ObjectId(15), ObjectId(16)]
    assert not set(first.objects) & set(second.objects)
    assert not set(second.objects) & set(third.objects)
