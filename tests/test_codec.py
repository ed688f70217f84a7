from __future__ import annotations

from io import BytesIO
import zlib

import pytest
from pypdf import PdfReader

from pdfgraphx.codec import decode_document, encode_document
from pdfgraphx.core import (
    DecodeError,
    Dictionary,
    DocumentGraph,
    EncodeError,
    Name,
    ObjectId,
    Reference,
    Stream,
)

from conftest import build_graph


def test_decode_document_reads_page_tree(pdf_bytes_factory) -> None:
    graph = decode_document(pdf_bytes_factory([100, 200, 300], title="Decoded"))

    assert graph.catalog["Type"] == "Catalog"
    assert graph.page_count == 3
    widths = [graph.inherited_attribute(pid, "MediaBox")[2] for pid in graph.iter_page_ids()]
    assert widths == [100, 200, 300]
    assert graph.resolve(graph.trailer["Info"])["Title"] == b"Decoded"
    assert graph.max_id == max(object_id.number for object_id in graph.objects)
    assert graph.dangling_references() == []


def test_decode_document_values_use_the_object_model(pdf_bytes_factory) -> None:
    graph = decode_document(pdf_bytes_factory([72]))
    page = graph.objects[next(graph.iter_page_ids())]

    assert isinstance(page["Type"], Name)
    assert isinstance(page["Parent"], Reference)
    assert all(isinstance(key, str) and not key.startswith("/") for key in page)


def test_decode_document_rejects_garbage() -> None:
    with pytest.raises(DecodeError):
        decode_document(b"definitely not a pdf")


def test_decode_document_rejects_empty_buffer() -> None:
    with pytest.raises(DecodeError):
        decode_document(b"")


def test_decode_document_rejects_encrypted_input(encrypted_pdf_bytes: bytes) -> None:
    with pytest.raises(DecodeError, match="Encrypted"):
        decode_document(encrypted_pdf_bytes)


def test_encode_document_is_readable_by_pypdf() -> None:
    data = encode_document(build_graph("A", 2))

    assert data.startswith(b"%PDF-1.5\n")
    assert data.rstrip().endswith(b"%%EOF")
    reader = PdfReader(BytesIO(data))
    assert len(reader.pages) == 2
    assert reader.pages[0]["/Label"] == "A1"
    assert float(reader.pages[1].mediabox.width) == 612
    assert reader.pages[1]["/Contents"].get_object().get_data() == b"BT (A2) Tj ET"


def test_encode_then_decode_preserves_objects() -> None:
    graph = build_graph("A", 2)
    compressed = zlib.compress(b"q 1 0 0 1 0 0 cm Q")
    graph.objects[ObjectId(4)] = Stream(Dictionary(Filter=Name("FlateDecode")), compressed)
    graph.objects[ObjectId(2)]["Extra"] = [True, False, None, 1.5, -3, Name("A B")]

    decoded = decode_document(encode_document(graph))

    assert decoded.objects == graph.objects
    assert decoded.trailer == graph.trailer
    assert decoded.version == "1.5"


def test_encode_document_writes_info_and_size() -> None:
    graph = build_graph("A", 1)
    graph.trailer["Info"] = graph.add_object(Dictionary(Title=b"Encoded"))

    reader = PdfReader(BytesIO(encode_document(graph)))

    assert reader.metadata.title == "Encoded"
    assert reader.trailer["/Size"] == 6


def test_encode_document_rejects_dangling_references() -> None:
    graph = build_graph("A", 1)
    graph.objects[ObjectId(3)]["Annots"] = [Reference.to(42)]
    with pytest.raises(EncodeError, match="dangling"):
        encode_document(graph)


def test_encode_document_requires_root() -> None:
    graph = build_graph("A", 1)
    graph.trailer = Dictionary()
    with pytest.raises(EncodeError):
        encode_document(graph)


def test_encode_document_rejects_unknown_values() -> None:
    graph = build_graph("A", 1)
    graph.objects[ObjectId(3)]["Bad"] = {1, 2}
    with pytest.raises(EncodeError):
        encode_document(graph)


def test_encode_document_rejects_duplicate_numbers() -> None:
    graph = build_graph("A", 1)
    graph.objects[ObjectId(4, 1)] = None
    with pytest.raises(EncodeError):
        encode_document(graph)


def test_encode_document_writes_free_entries_for_gaps() -> None:
    graph = DocumentGraph(
        objects={
            ObjectId(1): Dictionary(Type=Name("Catalog"), Pages=Reference.to(5)),
            ObjectId(5): Dictionary(Type=Name("Pages"), Kids=[], Count=0),
        },
        trailer=Dictionary(Root=Reference.to(1)),
        max_id=5,
    )

    reader = PdfReader(BytesIO(encode_document(graph)))

    assert len(reader.pages) == 0
    assert reader.trailer["/Size"] == 6
