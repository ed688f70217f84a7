"""Object model for decoded PDF documents.

PDF values are represented with plain Python values wherever one exists:

* Null -> ``None``
* Boolean -> ``bool``
* Integer -> ``int``
* Real -> ``float``
* String -> ``bytes``
* Array -> ``list``

Names, dictionaries, streams and indirect references get small dedicated
types so they can be told apart from strings and from each other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, NamedTuple

__all__ = [
    "ObjectId",
    "Name",
    "Reference",
    "Dictionary",
    "Stream",
    "PdfValue",
    "type_name",
    "as_dictionary",
    "iter_references",
    "map_references",
    "clone_object",
]


class ObjectId(NamedTuple):
    """Identity of an indirect object: ``(number, generation)``."""

    number: int
    generation: int = 0

    def __str__(self) -> str:
        return f"{self.number} {self.generation} R"


class Name(str):
    """PDF name object, stored without its leading slash."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Name({str.__repr__(self)})"


@dataclass(frozen=True, slots=True)
class Reference:
    """Reference to an indirect object."""

    object_id: ObjectId

    @classmethod
    def to(cls, number: int, generation: int = 0) -> "Reference":
        return cls(ObjectId(number, generation))

    def __str__(self) -> str:
        return str(self.object_id)


class Dictionary(dict):
    """PDF dictionary keyed by name strings without their leading slash."""

    @property
    def type_name(self) -> str | None:
        value = self.get("Type")
        return str(value) if isinstance(value, str) else None


@dataclass(slots=True)
class Stream:
    """Stream object: a dictionary plus its raw, possibly encoded, bytes."""

    dictionary: Dictionary = field(default_factory=Dictionary)
    data: bytes = b""

    @property
    def type_name(self) -> str | None:
        return self.dictionary.type_name


PdfValue = Any


def type_name(obj: PdfValue) -> str | None:
    """Return the ``/Type`` name of a dictionary or stream, if any."""

    if isinstance(obj, (Dictionary, Stream)):
        return obj.type_name
    return None


def as_dictionary(obj: PdfValue) -> Dictionary | None:
    """Return the dictionary part of *obj*, or ``None`` for other values."""

    if isinstance(obj, Dictionary):
        return obj
    if isinstance(obj, Stream):
        return obj.dictionary
    return None


def iter_references(obj: PdfValue) -> Iterator[Reference]:
    """Yield every :class:`Reference` nested inside *obj*, depth first."""

    stack = [obj]
    while stack:
        current = stack.pop()
        if isinstance(current, Reference):
            yield current
        elif isinstance(current, Dictionary):
            stack.extend(reversed(list(current.values())))
        elif isinstance(current, Stream):
            stack.extend(reversed(list(current.dictionary.values())))
        elif isinstance(current, list):
            stack.extend(reversed(current))


def map_references(obj: PdfValue, mapper: Callable[[Reference], PdfValue]) -> PdfValue:
    """Return a copy of *obj* with each reference replaced by ``mapper(ref)``."""

    if isinstance(obj, Reference):
        return mapper(obj)
    if isinstance(obj, Dictionary):
        return Dictionary((key, map_references(value, mapper)) for key, value in obj.items())
    if isinstance(obj, Stream):
        return Stream(map_references(obj.dictionary, mapper), obj.data)
    if isinstance(obj, list):
        return [map_references(item, mapper) for item in obj]
    return obj


def clone_object(obj: PdfValue) -> PdfValue:
    """Deep copy *obj*; references are immutable and shared."""

    return map_references(obj, lambda reference: reference)
