from __future__ import annotations

from pdfgraphx.core.objects import (
    Dictionary,
    Name,
    ObjectId,
    Reference,
    Stream,
    as_dictionary,
    clone_object,
    iter_references,
    map_references,
    type_name,
)


def test_object_ids_sort_by_number_then_generation() -> None:
    ids = [ObjectId(10, 0), ObjectId(2, 1), ObjectId(2, 0), ObjectId(9)]
    assert sorted(ids) == [ObjectId(2, 0), ObjectId(2, 1), ObjectId(9, 0), ObjectId(10, 0)]
    assert str(ObjectId(7, 0)) == "7 0 R"


def test_type_name_reads_dictionaries_and_streams() -> None:
    assert type_name(Dictionary(Type=Name("Catalog"))) == "Catalog"
    assert type_name(Stream(Dictionary(Type=Name("XObject")), b"")) == "XObject"
    assert type_name(Dictionary()) is None
    assert type_name([Name("Page")]) is None
    assert type_name(Dictionary(Type=b"Page")) is None


def test_as_dictionary() -> None:
    stream = Stream(Dictionary(Length=3), b"abc")
    assert as_dictionary(stream) is stream.dictionary
    assert as_dictionary(Dictionary(A=1)) == {"A": 1}
    assert as_dictionary(42) is None


def test_iter_references_walks_nested_values_in_order() -> None:
    value = Dictionary(
        A=Reference.to(1),
        B=[Reference.to(2), Dictionary(C=Reference.to(3))],
        D=Stream(Dictionary(E=Reference.to(4)), b""),
        F=b"not a reference",
    )
    assert [ref.object_id.number for ref in iter_references(value)] == [1, 2, 3, 4]


def test_map_references_returns_an_independent_copy() -> None:
    original = Dictionary(Kids=[Reference.to(1), Reference.to(2)], Count=2)
    mapped = map_references(original, lambda ref: Reference.to(ref.object_id.number + 10))

    assert mapped["Kids"] == [Reference.to(11), Reference.to(12)]
    assert original["Kids"] == [Reference.to(1), Reference.to(2)]
    assert isinstance(mapped, Dictionary)


def test_clone_object_is_deep() -> None:
    stream = Stream(Dictionary(Filter=Name("FlateDecode"), Decode=[0, 1]), b"data")
    clone = clone_object(stream)
    clone.dictionary["Decode"].append(2)
    clone.data = b"other"

    assert stream.dictionary["Decode"] == [0, 1]
    assert stream.data == b"data"


def test_names_compare_as_strings_but_keep_their_type() -> None:
    name = Name("Pages")
    assert name == "Pages"
    assert isinstance(clone_object(name), Name)
    assert repr(name) == "Name('Pages')"
