"""Merge renumbered document graphs into one graph with a single page tree.

The merge keeps exactly one ``Catalog`` and one ``Pages`` root, rebuilds the
root's ``Kids``/``Count`` from the pages of every input (in input order, then
page order), points every page's ``Parent`` at that root and passes every
other object through untouched. Outline objects are dropped, and so is
whatever is left unreachable from the new trailer, so every reference in the
result resolves.

Inputs must already use pairwise disjoint object identifiers, which is what
:func:`~pdfgraphx.merge.renumber.renumber_objects` provides when each call is
seeded with the previous call's result.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, replace
from enum import Enum
from functools import reduce
from typing import Callable, Iterable, Mapping, Sequence

from ..core.graph import DEFAULT_VERSION, INHERITABLE_PAGE_ATTRIBUTES, DocumentGraph
from ..core.objects import Dictionary, ObjectId, PdfValue, Reference, clone_object
from ..core.utils import get_logger
from .exceptions import (
    EmptyInputError,
    MissingCatalogRootError,
    MissingPagesRootError,
    PdfMergeError,
)
from .optimizers import prune_objects

LOGGER = get_logger("pdfgraphx.merge")

# Entries of a Pages node that are rebuilt rather than merged. A root node
# never has a Parent.
REBUILT_PAGES_KEYS = frozenset({"Kids", "Count", "Parent"})

_DOCUMENT_INFO_KEYS = {
    "title": "Title",
    "author": "Author",
    "subject": "Subject",
    "keywords": "Keywords",
    "creator": "Creator",
    "producer": "Producer",
}


class ObjectRole(Enum):
    """Structural role of an indirect object during a merge."""

    CATALOG = "Catalog"
    PAGES = "Pages"
    PAGE = "Page"
    OUTLINES = "Outlines"
    OTHER = "Other"


_ROLE_BY_TYPE = {
    "Catalog": ObjectRole.CATALOG,
    "Pages": ObjectRole.PAGES,
    "Page": ObjectRole.PAGE,
    "Outlines": ObjectRole.OUTLINES,
    "Outline": ObjectRole.OUTLINES,
}


def classify(value: PdfValue) -> ObjectRole:
    """Return the merge role of *value*.

    Only dictionaries carry structural roles; streams and every other value
    are passed through as :attr:`ObjectRole.OTHER`.
    """

    if isinstance(value, Dictionary):
        return _ROLE_BY_TYPE.get(value.type_name or "", ObjectRole.OTHER)
    return ObjectRole.OTHER


def merge_pages_fields(accumulated: Dictionary | None, incoming: Dictionary) -> Dictionary:
    """Merge a ``Pages`` dictionary into the running root dictionary.

    Keys already present in *accumulated* win over the same keys in
    *incoming*, so the earliest document's page-tree attributes stay
    authoritative. ``Kids``, ``Count`` and ``Parent`` never survive.
    """

    merged = Dictionary(
        (key, value) for key, value in incoming.items() if key not in REBUILT_PAGES_KEYS
    )
    if accumulated is not None:
        merged.update(accumulated)
    return merged


@dataclass(frozen=True, slots=True)
class RootAccumulator:
    """Designated catalog and page-tree root collected while folding."""

    catalog_id: ObjectId | None = None
    catalog: Dictionary | None = None
    pages_id: ObjectId | None = None
    pages: Dictionary | None = None
    superseded_catalogs: int = 0
    merged_pages_nodes: int = 0


def _fold_catalog(acc: RootAccumulator, object_id: ObjectId, value: Dictionary) -> RootAccumulator:
    if acc.catalog_id is not None:
        return replace(acc, superseded_catalogs=acc.superseded_catalogs + 1)
    return replace(acc, catalog_id=object_id, catalog=value)


def _fold_pages(acc: RootAccumulator, object_id: ObjectId, value: Dictionary) -> RootAccumulator:
    return replace(
        acc,
        pages_id=acc.pages_id if acc.pages_id is not None else object_id,
        pages=merge_pages_fields(acc.pages, value),
        merged_pages_nodes=acc.merged_pages_nodes + 1,
    )


_ROOT_FOLDERS: Mapping[ObjectRole, Callable[[RootAccumulator, ObjectId, Dictionary], RootAccumulator]] = {
    ObjectRole.CATALOG: _fold_catalog,
    ObjectRole.PAGES: _fold_pages,
}


def fold_roots(classified: Iterable[tuple[ObjectId, PdfValue, ObjectRole]]) -> RootAccumulator:
    """Fold classified objects into the designated Catalog and Pages roots."""

    def _step(acc: RootAccumulator, item: tuple[ObjectId, PdfValue, ObjectRole]) -> RootAccumulator:
        object_id, value, role = item
        folder = _ROOT_FOLDERS.get(role)
        return folder(acc, object_id, value) if folder is not None else acc

    return reduce(_step, classified, RootAccumulator())


def harvest_pages(
    graphs: Sequence[DocumentGraph],
    *,
    inherit_attributes: bool = True,
) -> dict[ObjectId, Dictionary]:
    """Collect the pages of *graphs* in input order, then page-tree order.

    When *inherit_attributes* is true, inheritable attributes a page takes
    from its ancestors are copied onto the page dictionary itself.
    """

    pages: dict[ObjectId, Dictionary] = {}
    for index, graph in enumerate(graphs):
        count = 0
        for page_id in graph.iter_page_ids():
            if page_id in pages:
                LOGGER.warning("Page %s appears more than once; keeping the first occurrence", page_id)
                continue
            page = graph.get(page_id)
            if inherit_attributes:
                for key in INHERITABLE_PAGE_ATTRIBUTES:
                    if key in page:
                        continue
                    inherited = graph.inherited_attribute(page_id, key)
                    if inherited is not None:
                        page[key] = clone_object(inherited)
            pages[page_id] = page
            count += 1
        LOGGER.debug("Harvested %d page(s) from document %d", count, index)
    return pages


def _collect_objects(graphs: Sequence[DocumentGraph]) -> dict[ObjectId, PdfValue]:
    objects: dict[ObjectId, PdfValue] = {}
    for index, graph in enumerate(graphs):
        for object_id, value in graph.objects.items():
            if object_id in objects:
                raise PdfMergeError(
                    f"Object {object_id} of document {index} collides with an earlier document; "
                    "renumber inputs before merging"
                )
            objects[object_id] = value
    return objects


def _version_key(version: str) -> tuple[int, ...]:
    try:
        return tuple(int(part) for part in version.split("."))
    except ValueError:
        return (0,)


def _merged_version(graphs: Sequence[DocumentGraph]) -> str:
    return max([DEFAULT_VERSION, *(graph.version for graph in graphs)], key=_version_key)


def _text_string(value: object) -> bytes:
    text = str(value)
    try:
        return text.encode("ascii")
    except UnicodeEncodeError:
        return codecs.BOM_UTF16_BE + text.encode("utf-16-be")


def build_document_info(document_info: Mapping[str, object]) -> Dictionary:
    """Build an Info dictionary from user supplied metadata.

    Well-known keys (``title``, ``author``...) map to their PDF names; any
    other key is used as given, without a leading slash.
    """

    info = Dictionary()
    for key, value in document_info.items():
        if value is None:
            continue
        text = str(value).strip()
        if not text:
            continue
        name = _DOCUMENT_INFO_KEYS.get(str(key).lower(), str(key).lstrip("/"))
        info[name] = _text_string(text)
    return info


def merge_graphs(
    graphs: Sequence[DocumentGraph],
    *,
    inherit_page_attributes: bool = True,
    metadata: bool = True,
    document_info: Mapping[str, object] | None = None,
    version: str | None = None,
) -> DocumentGraph:
    """Merge renumbered *graphs* into one consolidated graph.

    Args:
        graphs: Input graphs with pairwise disjoint object ids. Their order
            defines the page order of the result. They are not modified.
        inherit_page_attributes: Copy inherited page attributes onto each
            page before the original page-tree nodes are discarded.
        metadata: Keep the first input's document information dictionary.
        document_info: Explicit document information, overriding *metadata*.
        version: PDF version of the result; defaults to the highest input
            version, and at least ``1.5``.

    Raises:
        EmptyInputError: If *graphs* is empty.
        MissingPagesRootError: If no input holds a ``Pages`` dictionary.
        MissingCatalogRootError: If no input holds a ``Catalog`` dictionary.
        MalformedDocumentError: If an input's page tree is unusable.
    """

    if not graphs:
        raise EmptyInputError("No input documents provided")

    sources = [graph.copy() for graph in graphs]
    pages = harvest_pages(sources, inherit_attributes=inherit_page_attributes)
    objects = _collect_objects(sources)

    classified = [(object_id, value, classify(value)) for object_id, value in sorted(objects.items())]
    roots = fold_roots(classified)

    if roots.pages_id is None or roots.pages is None:
        LOGGER.error("Pages root not found in %d input document(s)", len(sources))
        raise MissingPagesRootError("Pages root not found")
    if roots.catalog_id is None or roots.catalog is None:
        LOGGER.error("Catalog root not found in %d input document(s)", len(sources))
        raise MissingCatalogRootError("Catalog root not found")

    merged = DocumentGraph(version=version or _merged_version(sources))
    merged.objects = {
        object_id: value for object_id, value, role in classified if role is ObjectRole.OTHER
    }

    pages_reference = Reference(roots.pages_id)
    for page_id, page in pages.items():
        page["Parent"] = pages_reference
        merged.objects[page_id] = page

    pages_root = Dictionary(roots.pages)
    pages_root["Count"] = len(pages)
    pages_root["Kids"] = [Reference(page_id) for page_id in pages]
    merged.objects[roots.pages_id] = pages_root

    catalog = Dictionary(roots.catalog)
    catalog["Pages"] = pages_reference
    catalog.pop("Outlines", None)
    merged.objects[roots.catalog_id] = catalog

    merged.trailer["Root"] = Reference(roots.catalog_id)
    if document_info:
        info = build_document_info(document_info)
        if info:
            merged.trailer["Info"] = merged.add_object(info)
    elif metadata:
        for source in sources:
            info_reference = source.trailer.get("Info")
            if isinstance(info_reference, Reference) and info_reference.object_id in merged.objects:
                merged.trailer["Info"] = info_reference
                break

    # Untyped outline items, superseded catalogs and intermediate Pages nodes
    # only hang off objects dropped above.
    orphans = prune_objects(merged)
    merged.max_id = len(merged.objects)

    LOGGER.debug(
        "Dropped %d superseded catalog(s), folded %d Pages node(s) and pruned %d orphan(s)",
        roots.superseded_catalogs,
        roots.merged_pages_nodes,
        orphans,
    )
    LOGGER.info("Merged %d document(s) into %d page(s)", len(sources), len(pages))
    return merged


__all__ = [
    "ObjectRole",
    "RootAccumulator",
    "REBUILT_PAGES_KEYS",
    "build_document_info",
    "classify",
    "fold_roots",
    "harvest_pages",
    "merge_graphs",
    "merge_pages_fields",
]
