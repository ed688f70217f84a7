"""Exceptions shared by the :mod:`pdfgraphx` object graph layers."""

from __future__ import annotations


class PdfGraphError(Exception):
    """Base exception for all pdfgraphx errors."""


class DecodeError(PdfGraphError):
    """Raised when input bytes are not a usable PDF document."""


class MalformedDocumentError(DecodeError):
    """Raised when a decoded document breaks a structural rule.

    Typical causes are page tree nodes that do not resolve to ``Page`` or
    ``Pages`` dictionaries, or a page tree that loops back on itself.
    """


class DanglingReferenceError(PdfGraphError):
    """Raised when a reference points at an object missing from its graph."""

    def __init__(self, reference: object, message: str | None = None) -> None:
        super().__init__(message or f"Reference {reference} does not resolve to an object")
        self.reference = reference


class EncodeError(PdfGraphError):
    """Raised when a graph cannot be serialized."""
