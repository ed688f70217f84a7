"""Identity renumbering for document graphs."""

from __future__ import annotations

from ..core.exceptions import DanglingReferenceError
from ..core.graph import DocumentGraph
from ..core.objects import ObjectId, Reference, map_references
from ..core.utils import get_logger

LOGGER = get_logger("pdfgraphx.merge")


def renumber_objects(graph: DocumentGraph, start_id: int = 1) -> int:
    """Renumber *graph* in place from *start_id* and return the next free id.

    Objects keep their relative order: the smallest old identifier becomes
    ``start_id``, the next one ``start_id + 1`` and so on, all with
    generation 0. Every reference in every object and in the trailer is
    rewritten to match.

    Raises:
        DanglingReferenceError: If any reference points at an object that is
            not in *graph*. The graph is left untouched in that case.
    """

    if start_id < 1:
        raise ValueError(f"start_id must be positive, got {start_id}")

    dangling = graph.dangling_references()
    if dangling:
        raise DanglingReferenceError(dangling[0])

    mapping = {
        old_id: Reference(ObjectId(start_id + offset, 0))
        for offset, old_id in enumerate(sorted(graph.objects))
    }

    def _remap(reference: Reference) -> Reference:
        return mapping[reference.object_id]

    graph.objects = {
        mapping[old_id].object_id: map_references(value, _remap)
        for old_id, value in sorted(graph.objects.items())
    }
    graph.trailer = map_references(graph.trailer, _remap)

    next_free = start_id + len(mapping)
    graph.max_id = next_free - 1
    LOGGER.debug("Renumbered %d objects into range [%d, %d)", len(mapping), start_id, next_free)
    return next_free


__all__ = ["renumber_objects"]
