"""Object model and graph container shared by the pdfgraphx layers."""

from __future__ import annotations

from .exceptions import (
    DanglingReferenceError,
    DecodeError,
    EncodeError,
    MalformedDocumentError,
    PdfGraphError,
)
from .graph import DEFAULT_VERSION, INHERITABLE_PAGE_ATTRIBUTES, DocumentGraph
from .objects import (
    Dictionary,
    Name,
    ObjectId,
    PdfValue,
    Reference,
    Stream,
    as_dictionary,
    clone_object,
    iter_references,
    map_references,
    type_name,
)

__all__ = [
    "DEFAULT_VERSION",
    "INHERITABLE_PAGE_ATTRIBUTES",
    "DocumentGraph",
    "Dictionary",
    "Name",
    "ObjectId",
    "PdfValue",
    "Reference",
    "Stream",
    "as_dictionary",
    "clone_object",
    "iter_references",
    "map_references",
    "type_name",
    "PdfGraphError",
    "DecodeError",
    "MalformedDocumentError",
    "DanglingReferenceError",
    "EncodeError",
]
