"""PDF byte codec built on pypdf: bytes to object graph and back."""

from __future__ import annotations

from .decoder import decode_document
from .encoder import encode_document, to_pypdf

__all__ = ["decode_document", "encode_document", "to_pypdf"]
