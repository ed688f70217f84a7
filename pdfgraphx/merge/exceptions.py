"""Custom exceptions for the :mod:`pdfgraphx.merge` package."""

from __future__ import annotations

from ..core.exceptions import PdfGraphError


class PdfMergeError(PdfGraphError):
    """Raised when the merge operation fails."""


class EmptyInputError(PdfMergeError):
    """Raised when a merge is requested without any input document."""


class MissingPagesRootError(PdfMergeError):
    """Raised when no ``Pages`` object exists across all inputs."""


class MissingCatalogRootError(PdfMergeError):
    """Raised when no ``Catalog`` object exists across all inputs."""


class PdfValidationError(PdfGraphError):
    """Raised when a PDF file or graph fails validation."""
