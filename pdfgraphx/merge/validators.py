"""Validation utilities for the :mod:`pdfgraphx.merge` package."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
import logging
from pathlib import Path
from typing import Any, Dict, Union

from pypdf import PdfReader

from ..core.graph import DocumentGraph
from ..core.objects import Dictionary, Reference
from ..core.utils import PathLike, ensure_path
from .exceptions import PdfValidationError

LOGGER = logging.getLogger("pdfgraphx.merge")

PdfSource = Union[PathLike, bytes]


@dataclass(frozen=True)
class PDFInfo:
    """Summary information describing a PDF document."""

    path: Path | None
    num_pages: int
    is_encrypted: bool
    version: str
    metadata: Dict[str, Any]


def validate_graph(graph: DocumentGraph) -> bool:
    """Return ``True`` if *graph* has the shape a merged document must have.

    Checked: every reference resolves, the trailer root is the only
    ``Catalog``, its ``Pages`` entry is the only ``Pages`` node, ``Count``
    matches ``Kids`` and every kid is a ``Page`` whose ``Parent`` is that
    root. ``PdfValidationError`` is raised for the first violation found.
    """

    dangling = graph.dangling_references()
    if dangling:
        raise PdfValidationError(f"Reference {dangling[0]} does not resolve")

    catalog = graph.catalog
    if catalog is None or catalog.type_name != "Catalog":
        raise PdfValidationError("Trailer Root does not resolve to a Catalog")

    catalogs = [oid for oid, value in graph.objects.items() if _typed(value, "Catalog")]
    if catalogs != [graph.root_id]:
        raise PdfValidationError(f"Expected exactly one Catalog, found {len(catalogs)}")

    pages_id = graph.pages_root_id
    pages_nodes = [oid for oid, value in graph.objects.items() if _typed(value, "Pages")]
    if pages_id is None or pages_nodes != [pages_id]:
        raise PdfValidationError(f"Expected exactly one Pages root, found {len(pages_nodes)}")

    pages_root = graph.objects[pages_id]
    kids = pages_root.get("Kids", [])
    if pages_root.get("Count") != len(kids):
        raise PdfValidationError(
            f"Pages Count {pages_root.get('Count')!r} does not match {len(kids)} kid(s)"
        )
    for kid in kids:
        page = graph.resolve(kid)
        if not _typed(page, "Page"):
            raise PdfValidationError(f"Kid {kid} is not a Page")
        if page.get("Parent") != Reference(pages_id):
            raise PdfValidationError(f"Page {kid} does not point at the Pages root")

    LOGGER.debug("Validated merged graph with %d page(s)", len(kids))
    return True


def _typed(value: object, kind: str) -> bool:
    return isinstance(value, Dictionary) and value.type_name == kind


def _open_reader(source: PdfSource) -> tuple[PdfReader, Path | None]:
    if isinstance(source, (bytes, bytearray)):
        return PdfReader(BytesIO(bytes(source))), None
    pdf_path = ensure_path(source)
    return PdfReader(str(pdf_path)), pdf_path


def get_pdf_info(source: PdfSource) -> PDFInfo:
    """Return :class:`PDFInfo` for a PDF given as a path or as bytes."""

    try:
        reader, pdf_path = _open_reader(source)
        is_encrypted = reader.is_encrypted
        num_pages = 0 if is_encrypted else len(reader.pages)
        version = reader.pdf_header.replace("%PDF-", "")
        metadata: Dict[str, Any] = {}
        if not is_encrypted and reader.metadata:
            metadata = {key: value for key, value in reader.metadata.items() if value is not None}
    except Exception as exc:
        LOGGER.error("Failed to read PDF info: %s", exc)
        raise PdfValidationError(f"Unable to read PDF: {exc}") from exc

    info = PDFInfo(
        path=pdf_path,
        num_pages=num_pages,
        is_encrypted=is_encrypted,
        version=version,
        metadata=metadata,
    )
    LOGGER.info(
        "PDF info: path=%s, pages=%s, encrypted=%s",
        info.path,
        info.num_pages,
        info.is_encrypted,
    )
    return info


__all__ = ["PDFInfo", "PdfSource", "get_pdf_info", "validate_graph"]
