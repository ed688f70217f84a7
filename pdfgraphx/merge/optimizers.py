"""Graph maintenance run on a merged graph before it is encoded."""

from __future__ import annotations

from pypdf.filters import FlateDecode

from ..core.graph import DocumentGraph
from ..core.objects import Name, ObjectId, Reference, Stream, iter_references, map_references
from ..core.utils import get_logger
from .renumber import renumber_objects

LOGGER = get_logger("pdfgraphx.merge")

# XMP packets must stay readable by tools that do not decode streams.
UNCOMPRESSED_STREAM_TYPES = frozenset({"Metadata"})


def prune_objects(graph: DocumentGraph) -> int:
    """Drop objects unreachable from the trailer; return how many were removed.

    References to objects that do not exist are replaced with null, which is
    how a conforming reader treats them.
    """

    reachable: set[ObjectId] = set()
    missing: set[ObjectId] = set()
    stack = list(iter_references(graph.trailer))
    while stack:
        object_id = stack.pop().object_id
        if object_id in reachable or object_id in missing:
            continue
        if object_id not in graph.objects:
            missing.add(object_id)
            continue
        reachable.add(object_id)
        stack.extend(iter_references(graph.objects[object_id]))

    removed = len(graph.objects) - len(reachable)
    graph.objects = {
        object_id: value for object_id, value in graph.objects.items() if object_id in reachable
    }

    if missing:
        LOGGER.warning("Replacing references to %d missing object(s) with null", len(missing))

        def _nullify(reference: Reference) -> Reference | None:
            return None if reference.object_id in missing else reference

        graph.objects = {
            object_id: map_references(value, _nullify) for object_id, value in graph.objects.items()
        }
        graph.trailer = map_references(graph.trailer, _nullify)

    LOGGER.debug("Pruned %d unreachable object(s)", removed)
    return removed


def compress_graph(graph: DocumentGraph, *, level: int = -1) -> int:
    """Flate-encode unfiltered streams in place; return how many changed.

    Streams that already carry a ``Filter`` are left alone, and the encoded
    form is only kept when it is smaller than the original data.
    """

    compressed = 0
    for value in graph.objects.values():
        if not isinstance(value, Stream) or not value.data:
            continue
        if "Filter" in value.dictionary or value.type_name in UNCOMPRESSED_STREAM_TYPES:
            continue
        encoded = FlateDecode.encode(value.data, level)
        if len(encoded) >= len(value.data):
            continue
        value.data = encoded
        value.dictionary["Filter"] = Name("FlateDecode")
        value.dictionary.pop("DecodeParms", None)
        compressed += 1
    LOGGER.debug("Compressed %d stream(s)", compressed)
    return compressed


def finalize_graph(graph: DocumentGraph, *, compress: bool = True) -> DocumentGraph:
    """Prune, renumber contiguously from 1 and optionally compress *graph*."""

    prune_objects(graph)
    renumber_objects(graph, 1)
    if compress:
        compress_graph(graph)
    return graph


__all__ = ["UNCOMPRESSED_STREAM_TYPES", "compress_graph", "finalize_graph", "prune_objects"]
