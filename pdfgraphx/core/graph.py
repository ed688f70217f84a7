"""In-memory representation of one decoded PDF document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .exceptions import DanglingReferenceError, MalformedDocumentError
from .objects import Dictionary, ObjectId, PdfValue, Reference, clone_object, iter_references

__all__ = ["DocumentGraph", "INHERITABLE_PAGE_ATTRIBUTES", "DEFAULT_VERSION"]

DEFAULT_VERSION = "1.5"

# Page attributes a Page may take from its ancestors in the page tree.
INHERITABLE_PAGE_ATTRIBUTES = ("Resources", "MediaBox", "CropBox", "Rotate")


@dataclass(slots=True)
class DocumentGraph:
    """Indirect object table plus the trailer that anchors it.

    ``max_id`` is the highest object number in use and is what fresh
    identifiers are allocated from.
    """

    objects: dict[ObjectId, PdfValue] = field(default_factory=dict)
    trailer: Dictionary = field(default_factory=Dictionary)
    max_id: int = 0
    version: str = DEFAULT_VERSION
    # (id, size) of the object table when max_id was last known to be exact.
    _synced_table: tuple[int, int] | None = field(default=None, init=False, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.objects)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self.objects

    def get(self, object_id: ObjectId) -> PdfValue:
        try:
            return self.objects[object_id]
        except KeyError as exc:
            raise DanglingReferenceError(object_id) from exc

    def resolve(self, value: PdfValue) -> PdfValue:
        """Follow *value* if it is a reference, otherwise return it unchanged."""

        if isinstance(value, Reference):
            return self.get(value.object_id)
        return value

    def add_object(self, value: PdfValue) -> Reference:
        """Store *value* under a fresh identifier and return a reference to it.

        ``max_id`` is trusted while the table is the one this method last
        wrote to; a replaced or externally resized table is rescanned once.
        """

        if self._synced_table != (id(self.objects), len(self.objects)):
            self.max_id = max(self.max_id, max((oid.number for oid in self.objects), default=0))
        self.max_id += 1
        object_id = ObjectId(self.max_id, 0)
        self.objects[object_id] = value
        self._synced_table = (id(self.objects), len(self.objects))
        return Reference(object_id)

    @property
    def root_id(self) -> ObjectId | None:
        root = self.trailer.get("Root")
        return root.object_id if isinstance(root, Reference) else None

    @property
    def catalog(self) -> Dictionary | None:
        root_id = self.root_id
        if root_id is None:
            return None
        catalog = self.objects.get(root_id)
        return catalog if isinstance(catalog, Dictionary) else None

    @property
    def pages_root_id(self) -> ObjectId | None:
        catalog = self.catalog
        pages = catalog.get("Pages") if catalog is not None else None
        return pages.object_id if isinstance(pages, Reference) else None

    def iter_page_ids(self) -> Iterator[ObjectId]:
        """Yield the ids of all leaf pages in document order.

        The walk follows ``Kids`` from the catalog's ``Pages`` entry rather
        than scanning the object table, so unreachable pages are ignored.
        """

        root_id = self.pages_root_id
        if root_id is None:
            return
        visited: set[ObjectId] = set()
        stack: list[ObjectId] = [root_id]
        while stack:
            node_id = stack.pop()
            if node_id in visited:
                raise MalformedDocumentError(f"Page tree loops back to object {node_id}")
            visited.add(node_id)
            node = self.objects.get(node_id)
            if not isinstance(node, Dictionary):
                raise MalformedDocumentError(f"Page tree node {node_id} is not a dictionary")
            kind = node.type_name
            if kind == "Page" or (kind is None and "Kids" not in node):
                yield node_id
                continue
            if kind not in (None, "Pages"):
                raise MalformedDocumentError(f"Page tree node {node_id} has unexpected type {kind}")
            kids = self.resolve(node.get("Kids", []))
            if not isinstance(kids, list):
                raise MalformedDocumentError(f"Pages node {node_id} has no usable Kids array")
            children = []
            for kid in kids:
                if not isinstance(kid, Reference):
                    raise MalformedDocumentError(f"Pages node {node_id} has a non-reference kid")
                children.append(kid.object_id)
            stack.extend(reversed(children))

    @property
    def page_count(self) -> int:
        return sum(1 for _ in self.iter_page_ids())

    def inherited_attribute(self, page_id: ObjectId, key: str) -> PdfValue:
        """Return *key* from the page or its nearest ancestor holding it."""

        visited: set[ObjectId] = set()
        current_id: ObjectId | None = page_id
        while current_id is not None and current_id not in visited:
            visited.add(current_id)
            current = self.objects.get(current_id)
            if not isinstance(current, Dictionary):
                return None
            if key in current:
                return current[key]
            parent = current.get("Parent")
            current_id = parent.object_id if isinstance(parent, Reference) else None
        return None

    def iter_references(self) -> Iterator[Reference]:
        for value in self.objects.values():
            yield from iter_references(value)
        yield from iter_references(self.trailer)

    def dangling_references(self) -> list[Reference]:
        return [reference for reference in self.iter_references() if reference.object_id not in self.objects]

    def copy(self) -> "DocumentGraph":
        """Return a deep copy sharing no mutable state with this graph."""

        return DocumentGraph(
            objects={object_id: clone_object(value) for object_id, value in self.objects.items()},
            trailer=clone_object(self.trailer),
            max_id=self.max_id,
            version=self.version,
        )
