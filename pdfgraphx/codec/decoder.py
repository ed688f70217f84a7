"""Decode PDF bytes into a :class:`~pdfgraphx.core.graph.DocumentGraph`."""

from __future__ import annotations

from collections import deque
from io import BytesIO
import re
from typing import Any

from pypdf import PdfReader
from pypdf.errors import PdfReadError
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
    StreamObject,
    TextStringObject,
)

from ..core.exceptions import DecodeError, MalformedDocumentError
from ..core.graph import DEFAULT_VERSION, DocumentGraph
from ..core.objects import Dictionary, Name, ObjectId, PdfValue, Reference, Stream
from ..core.utils import get_logger

LOGGER = get_logger("pdfgraphx.codec")

_VERSION_PATTERN = re.compile(r"%PDF-(\d+\.\d+)")
_TRAILER_KEYS = ("Root", "Info")


def _name(value: str) -> str:
    return value[1:] if value.startswith("/") else value


class _GraphBuilder:
    """Collects every object reachable from the trailer of a pypdf reader."""

    def __init__(self, reader: PdfReader) -> None:
        self.reader = reader
        self.objects: dict[ObjectId, PdfValue] = {}
        self._pending: deque[ObjectId] = deque()
        self._seen: set[ObjectId] = set()

    def build(self) -> DocumentGraph:
        trailer = Dictionary()
        for key in _TRAILER_KEYS:
            if f"/{key}" not in self.reader.trailer:
                continue
            raw = self.reader.trailer.raw_get(f"/{key}")
            if not isinstance(raw, IndirectObject):
                # A direct catalog or info dictionary becomes an indirect object.
                raw = self._adopt(raw)
            trailer[key] = self._convert(raw)

        if "Root" not in trailer:
            raise MalformedDocumentError("Document trailer has no Root entry")

        while self._pending:
            object_id = self._pending.popleft()
            resolved = self.reader.get_object(IndirectObject(object_id.number, object_id.generation, self.reader))
            if resolved is None or isinstance(resolved, NullObject):
                LOGGER.warning("Object %s is referenced but not defined; storing null", object_id)
                self.objects[object_id] = None
                continue
            self.objects[object_id] = self._convert(resolved)

        return DocumentGraph(
            objects=self.objects,
            trailer=trailer,
            max_id=max((object_id.number for object_id in self.objects), default=0),
            version=self._version(),
        )

    def _adopt(self, value: Any) -> Reference:
        number = max((oid.number for oid in self._seen), default=0)
        number = max(number, int(self.reader.trailer.get("/Size", 0) or 0)) + 1
        object_id = ObjectId(number, 0)
        self._seen.add(object_id)
        self.objects[object_id] = self._convert(value)
        return Reference(object_id)

    def _version(self) -> str:
        try:
            match = _VERSION_PATTERN.match(self.reader.pdf_header)
        except Exception:  # pragma: no cover - header parsing varies
            match = None
        return match.group(1) if match else DEFAULT_VERSION

    def _convert(self, value: Any) -> PdfValue:
        if isinstance(value, Reference):
            return value
        if isinstance(value, IndirectObject):
            object_id = ObjectId(value.idnum, value.generation)
            if object_id not in self._seen:
                self._seen.add(object_id)
                self._pending.append(object_id)
            return Reference(object_id)
        if isinstance(value, StreamObject):
            return Stream(self._convert_dictionary(value, stream=True), bytes(value._data or b""))
        if isinstance(value, DictionaryObject):
            return self._convert_dictionary(value)
        if isinstance(value, ArrayObject):
            return [self._convert(item) for item in value]
        if isinstance(value, BooleanObject):
            return bool(value.value)
        if isinstance(value, NameObject):
            return Name(_name(str(value)))
        if isinstance(value, TextStringObject):
            return bytes(value.get_encoded_bytes())
        if isinstance(value, ByteStringObject):
            return bytes(value)
        if isinstance(value, NumberObject):
            return int(value)
        if isinstance(value, FloatObject):
            return float(value)
        if value is None or isinstance(value, NullObject):
            return None
        raise MalformedDocumentError(f"Unsupported PDF object {type(value).__name__}")

    def _convert_dictionary(self, value: DictionaryObject, *, stream: bool = False) -> Dictionary:
        dictionary = Dictionary()
        for key, item in value.items():
            name = _name(str(key))
            if stream and name == "Length":
                continue
            dictionary[name] = self._convert(item)
        return dictionary


def decode_document(data: bytes, *, strict: bool = False) -> DocumentGraph:
    """Decode *data* into a :class:`DocumentGraph`.

    Only objects reachable from the trailer's ``Root`` and ``Info`` entries
    are collected. Stream lengths are dropped; the encoder recomputes them.

    Raises:
        DecodeError: If *data* is empty, unreadable, encrypted or structurally
            unusable.
    """

    if not data:
        raise DecodeError("Cannot decode an empty buffer")

    try:
        reader = PdfReader(BytesIO(bytes(data)), strict=strict)
    except PdfReadError as exc:
        LOGGER.error("Failed to read PDF buffer: %s", exc)
        raise DecodeError(f"Corrupted or invalid PDF data: {exc}") from exc
    except Exception as exc:
        LOGGER.error("Unexpected error reading PDF buffer: %s", exc)
        raise DecodeError(f"Unexpected error reading PDF data: {exc}") from exc

    if reader.is_encrypted:
        raise DecodeError("Encrypted PDF documents are not supported")

    try:
        graph = _GraphBuilder(reader).build()
    except DecodeError:
        raise
    except Exception as exc:
        LOGGER.error("Failed to decode PDF object graph: %s", exc)
        raise DecodeError(f"Unable to decode PDF object graph: {exc}") from exc

    LOGGER.debug(
        "Decoded PDF %s with %d objects (max id %d)",
        graph.version,
        len(graph.objects),
        graph.max_id,
    )
    return graph


__all__ = ["decode_document"]
