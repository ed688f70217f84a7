"""Serialize a :class:`~pdfgraphx.core.graph.DocumentGraph` to PDF bytes.

Individual objects are written by pypdf's generic object classes; this
module only lays out the file body, cross-reference table and trailer.
"""

from __future__ import annotations

from io import BytesIO
from typing import Any

from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    ByteStringObject,
    DictionaryObject,
    FloatObject,
    IndirectObject,
    NameObject,
    NullObject,
    NumberObject,
    PdfObject,
    StreamObject,
    TextStringObject,
)

from ..core.exceptions import EncodeError
from ..core.graph import DocumentGraph
from ..core.objects import Dictionary, Name, PdfValue, Reference, Stream
from ..core.utils import get_logger

LOGGER = get_logger("pdfgraphx.codec")

_BINARY_MARKER = b"%\xe2\xe3\xcf\xd3\n"
_FREE_HEAD = b"0000000000 65535 f \n"
_FREE_ENTRY = b"0000000000 00000 f \n"


def _name(key: str) -> NameObject:
    return NameObject(f"/{key}")


def to_pypdf(value: PdfValue) -> PdfObject:
    """Convert a graph value into the equivalent pypdf generic object."""

    if value is None:
        return NullObject()
    if isinstance(value, bool):
        return BooleanObject(value)
    if isinstance(value, Name):
        return _name(value)
    if isinstance(value, int):
        return NumberObject(value)
    if isinstance(value, float):
        return FloatObject(value)
    if isinstance(value, (bytes, bytearray)):
        return ByteStringObject(bytes(value))
    if isinstance(value, str):
        return TextStringObject(value)
    if isinstance(value, Reference):
        return IndirectObject(value.object_id.number, value.object_id.generation, None)
    if isinstance(value, Stream):
        stream = StreamObject()
        stream.update(_dictionary_items(value.dictionary))
        stream.set_data(value.data)
        return stream
    if isinstance(value, Dictionary):
        dictionary = DictionaryObject()
        dictionary.update(_dictionary_items(value))
        return dictionary
    if isinstance(value, list):
        return ArrayObject(to_pypdf(item) for item in value)
    raise EncodeError(f"Cannot encode value of type {type(value).__name__}")


def _dictionary_items(dictionary: Dictionary) -> dict[NameObject, Any]:
    return {_name(key): to_pypdf(item) for key, item in dictionary.items()}


def _check_encodable(graph: DocumentGraph) -> None:
    if graph.root_id is None:
        raise EncodeError("Graph trailer has no Root reference")
    dangling = graph.dangling_references()
    if dangling:
        raise EncodeError(
            f"Graph has {len(dangling)} dangling reference(s), first: {dangling[0]}"
        )
    numbers = [object_id.number for object_id in graph.objects]
    if len(numbers) != len(set(numbers)):
        raise EncodeError("Object numbers must be unique across generations")
    if any(number <= 0 for number in numbers):
        raise EncodeError("Object numbers must be positive")


def encode_document(graph: DocumentGraph) -> bytes:
    """Return *graph* serialized as a PDF file with a classic xref table.

    Raises:
        EncodeError: If the graph has no root, contains references that do
            not resolve, or holds values outside the object model.
    """

    _check_encodable(graph)

    buffer = BytesIO()
    buffer.write(f"%PDF-{graph.version}\n".encode("ascii"))
    buffer.write(_BINARY_MARKER)

    offsets: dict[int, tuple[int, int]] = {}
    for object_id in sorted(graph.objects):
        offsets[object_id.number] = (buffer.tell(), object_id.generation)
        buffer.write(f"{object_id.number} {object_id.generation} obj\n".encode("ascii"))
        try:
            to_pypdf(graph.objects[object_id]).write_to_stream(buffer)
        except EncodeError:
            raise
        except Exception as exc:
            LOGGER.error("Failed to serialize object %s: %s", object_id, exc)
            raise EncodeError(f"Failed to serialize object {object_id}") from exc
        buffer.write(b"\nendobj\n")

    size = max(offsets, default=0) + 1
    xref_offset = buffer.tell()
    buffer.write(f"xref\n0 {size}\n".encode("ascii"))
    buffer.write(_FREE_HEAD)
    for number in range(1, size):
        entry = offsets.get(number)
        if entry is None:
            buffer.write(_FREE_ENTRY)
        else:
            offset, generation = entry
            buffer.write(f"{offset:010d} {generation:05d} n \n".encode("ascii"))

    trailer = DictionaryObject()
    trailer[NameObject("/Size")] = NumberObject(size)
    for key in ("Root", "Info"):
        if graph.trailer.get(key) is not None:
            trailer[_name(key)] = to_pypdf(graph.trailer[key])
    buffer.write(b"trailer\n")
    trailer.write_to_stream(buffer)
    buffer.write(f"\nstartxref\n{xref_offset}\n%%EOF\n".encode("ascii"))

    LOGGER.debug("Encoded %d objects into %d bytes", len(offsets), buffer.tell())
    return buffer.getvalue()


__all__ = ["encode_document", "to_pypdf"]
