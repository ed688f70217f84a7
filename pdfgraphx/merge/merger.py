"""Merge entry points for the :mod:`pdfgraphx.merge` package."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Sequence

from ..codec import decode_document, encode_document
from ..core.exceptions import PdfGraphError
from ..core.graph import DocumentGraph
from ..core.utils import PathLike, ensure_iterable, ensure_path, get_logger
from .exceptions import EmptyInputError, PdfMergeError
from .graph_merger import merge_graphs
from .optimizers import finalize_graph
from .renumber import renumber_objects

LOGGER = get_logger("pdfgraphx.merge")


def renumber_disjoint(graphs: Iterable[DocumentGraph]) -> list[DocumentGraph]:
    """Renumber *graphs* in place so their identifiers never overlap.

    The first graph starts at 1 and every following graph starts at the next
    free identifier returned for its predecessor.
    """

    renumbered: list[DocumentGraph] = []
    next_id = 1
    for graph in graphs:
        next_id = renumber_objects(graph, next_id)
        renumbered.append(graph)
    return renumbered


def merge_documents(
    buffers: Sequence[bytes],
    *,
    metadata: bool = True,
    document_info: Mapping[str, object] | None = None,
    compress: bool = True,
    inherit_page_attributes: bool = True,
) -> bytes:
    """Merge PDF *buffers*, in order, and return the merged PDF bytes.

    Args:
        buffers: PDF documents as bytes. Their order is the page order of
            the result.
        metadata: Keep the document information of the first input.
        document_info: Explicit document information for the result, e.g.
            ``{"title": "Report"}``. Takes precedence over *metadata*.
        compress: Flate-encode unfiltered streams of the result.
        inherit_page_attributes: Copy inherited page attributes onto each
            page before the input page trees are flattened.

    Raises:
        EmptyInputError: If *buffers* is empty.
        DecodeError: If any buffer is not a usable, unencrypted PDF.
        MissingPagesRootError: If no input has a page tree root.
        MissingCatalogRootError: If no input has a catalog.
        EncodeError: If the merged graph cannot be serialized.
    """

    buffers = list(buffers)
    if not buffers:
        raise EmptyInputError("No input PDFs provided")

    graphs = []
    for index, buffer in enumerate(buffers):
        LOGGER.debug("Decoding input document %d (%d bytes)", index, len(buffer))
        graphs.append(decode_document(buffer))

    merged = merge_graphs(
        renumber_disjoint(graphs),
        inherit_page_attributes=inherit_page_attributes,
        metadata=metadata,
        document_info=document_info,
    )
    finalize_graph(merged, compress=compress)
    output = encode_document(merged)
    LOGGER.info("Merged %d PDF buffer(s) into %d bytes", len(buffers), len(output))
    return output


def merge_pdfs(
    inputs: Iterable[PathLike],
    output: PathLike,
    *,
    metadata: bool = True,
    document_info: Mapping[str, object] | None = None,
    compress: bool = True,
    inherit_page_attributes: bool = True,
) -> Path:
    """Merge the PDF files *inputs* into *output* and return the output path.

    Keyword arguments are passed on to :func:`merge_documents`.

    Raises:
        PdfMergeError: If reading or writing a file fails; merge failures
            raise the specific errors documented on :func:`merge_documents`.
    """

    pdf_paths = ensure_iterable(inputs)
    if not pdf_paths:
        raise EmptyInputError("No input PDFs provided")

    buffers = []
    for pdf_path in pdf_paths:
        LOGGER.debug("Reading input PDF %s", pdf_path)
        try:
            buffers.append(pdf_path.read_bytes())
        except OSError as exc:
            LOGGER.error("Failed to read PDF %s: %s", pdf_path, exc)
            raise PdfMergeError(f"Unable to read PDF: {pdf_path}") from exc

    try:
        merged = merge_documents(
            buffers,
            metadata=metadata,
            document_info=document_info,
            compress=compress,
            inherit_page_attributes=inherit_page_attributes,
        )
    except PdfGraphError as exc:
        LOGGER.error("Failed to merge %d PDF(s): %s", len(pdf_paths), exc)
        raise

    output_path = ensure_path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        output_path.write_bytes(merged)
    except OSError as exc:  # pragma: no cover - IO errors vary
        LOGGER.error("Failed to write merged PDF to %s: %s", output_path, exc)
        raise PdfMergeError(f"Failed to write merged PDF to {output_path}") from exc

    LOGGER.info("Merged %d PDFs into %s", len(pdf_paths), output_path)
    return output_path


__all__ = ["merge_documents", "merge_pdfs", "renumber_disjoint"]
