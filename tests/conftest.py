from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfgraphx.core import Dictionary, DocumentGraph, Name, ObjectId, Reference, Stream  # noqa: E402

GraphFactory = Callable[..., DocumentGraph]
PdfBytesFactory = Callable[..., bytes]


def build_graph(
    label: str,
    page_count: int,
    *,
    with_catalog: bool = True,
    with_pages: bool = True,
    outline: bool = False,
    pages_extra: dict | None = None,
) -> DocumentGraph:
    """Build a flat document: catalog 1, pages root 2, then page/content pairs.

    Each page carries a ``Label`` string (``b"A1"``, ``b"A2"``...) so tests
    can follow pages through renumbering.
    """

    catalog_id = ObjectId(1, 0)
    pages_id = ObjectId(2, 0)
    objects: dict = {}
    kids = []
    for index in range(page_count):
        page_id = ObjectId(3 + 2 * index, 0)
        content_id = ObjectId(4 + 2 * index, 0)
        objects[page_id] = Dictionary(
            Type=Name("Page"),
            Parent=Reference(pages_id),
            Contents=Reference(content_id),
            Label=f"{label}{index + 1}".encode("ascii"),
        )
        objects[content_id] = Stream(Dictionary(), f"BT ({label}{index + 1}) Tj ET".encode("ascii"))
        kids.append(Reference(page_id))

    pages = Dictionary(Kids=kids, Count=page_count, MediaBox=[0, 0, 612, 792])
    if with_pages:
        pages["Type"] = Name("Pages")
    pages.update(pages_extra or {})
    objects[pages_id] = pages

    catalog = Dictionary(Pages=Reference(pages_id))
    if with_catalog:
        catalog["Type"] = Name("Catalog")
    objects[catalog_id] = catalog

    if outline:
        # Outline items carry no /Type, only the outline root does.
        outline_id = ObjectId(100, 0)
        item_id = ObjectId(101, 0)
        item = Dictionary(Title=f"{label} contents".encode("ascii"), Parent=Reference(outline_id))
        if kids:
            item["Dest"] = [kids[0], Name("Fit")]
        objects[item_id] = item
        objects[outline_id] = Dictionary(
            Type=Name("Outlines"),
            First=Reference(item_id),
            Last=Reference(item_id),
            Count=1,
        )
        catalog["Outlines"] = Reference(outline_id)

    return DocumentGraph(
        objects=objects,
        trailer=Dictionary(Root=Reference(catalog_id)),
        max_id=max(object_id.number for object_id in objects),
    )


def page_labels(graph: DocumentGraph) -> list[bytes]:
    """Return the ``Label`` of every page, in page-tree order."""

    return [graph.objects[page_id].get("Label") for page_id in graph.iter_page_ids()]


def write_pdf(
    widths: Sequence[int],
    *,
    title: str | None = None,
    height: int = 200,
) -> bytes:
    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=height)
    if title is not None:
        writer.add_metadata({"/Title": title})
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def graph_factory() -> GraphFactory:
    return build_graph


@pytest.fixture()
def pdf_bytes_factory() -> PdfBytesFactory:
    return write_pdf


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, title: str | None = None, pages: int = 1) -> Path:
        path = tmp_path / filename
        path.write_bytes(write_pdf([72] * pages, title=title, height=72))
        return path

    return _create


@pytest.fixture()
def sample_pdfs(pdf_factory: Callable[..., Path]) -> list[Path]:
    pdf1 = pdf_factory("one.pdf", title="Document One", pages=2)
    pdf2 = pdf_factory("two.pdf", pages=3)
    return [pdf1, pdf2]


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    writer.encrypt("secret")
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()
