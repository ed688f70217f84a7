"""Merge utilities for the :mod:`pdfgraphx` toolkit."""

from __future__ import annotations

from .exceptions import (
    EmptyInputError,
    MissingCatalogRootError,
    MissingPagesRootError,
    PdfMergeError,
    PdfValidationError,
)
from .graph_merger import ObjectRole, classify, merge_graphs, merge_pages_fields
from .merger import merge_documents, merge_pdfs, renumber_disjoint
from .optimizers import compress_graph, finalize_graph, prune_objects
from .renumber import renumber_objects
from .validators import PDFInfo, get_pdf_info, validate_graph

__all__ = [
    "merge_documents",
    "merge_pdfs",
    "merge_graphs",
    "merge_pages_fields",
    "renumber_objects",
    "renumber_disjoint",
    "classify",
    "ObjectRole",
    "compress_graph",
    "prune_objects",
    "finalize_graph",
    "validate_graph",
    "get_pdf_info",
    "PDFInfo",
    "PdfMergeError",
    "PdfValidationError",
    "EmptyInputError",
    "MissingPagesRootError",
    "MissingCatalogRootError",
]
