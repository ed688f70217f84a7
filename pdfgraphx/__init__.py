"""Merge PDF documents by reconciling their object graphs.

Quick start::

    >>> from pdfgraphx import merge_documents
    >>> merged = merge_documents([first_bytes, second_bytes])

The pipeline is exposed step by step as well: :func:`decode_document`,
:func:`renumber_objects`, :func:`merge_graphs`, :func:`compress_graph` and
:func:`encode_document`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from . import codec, core, merge
from .codec import decode_document, encode_document
from .core import (
    DanglingReferenceError,
    DecodeError,
    Dictionary,
    DocumentGraph,
    EncodeError,
    MalformedDocumentError,
    Name,
    ObjectId,
    PdfGraphError,
    Reference,
    Stream,
)
from .merge import (
    EmptyInputError,
    MissingCatalogRootError,
    MissingPagesRootError,
    PDFInfo,
    PdfMergeError,
    PdfValidationError,
    compress_graph,
    finalize_graph,
    get_pdf_info,
    merge_documents,
    merge_graphs,
    merge_pdfs,
    prune_objects,
    renumber_objects,
    validate_graph,
)

__version__ = "0.1.0"

__all__ = [
    "codec",
    "core",
    "merge",
    "decode_document",
    "encode_document",
    "renumber_objects",
    "merge_graphs",
    "compress_graph",
    "prune_objects",
    "finalize_graph",
    "merge_documents",
    "merge_pdfs",
    "merge_files",
    "validate_graph",
    "get_pdf_info",
    "PDFInfo",
    "DocumentGraph",
    "Dictionary",
    "Name",
    "ObjectId",
    "Reference",
    "Stream",
    "PdfGraphError",
    "DecodeError",
    "MalformedDocumentError",
    "DanglingReferenceError",
    "EncodeError",
    "PdfMergeError",
    "PdfValidationError",
    "EmptyInputError",
    "MissingPagesRootError",
    "MissingCatalogRootError",
    "__version__",
]


def merge_files(inputs: Iterable[str | Path], output: str | Path, **options) -> Path:
    """Convenience wrapper around :func:`merge.merge_pdfs`."""

    return merge_pdfs(inputs, output, **options)
