"""Document model for selection."""

from __future__ import annotations

from .base import Complexity, Document, DocumentCategory, DocumentTags

__all__ = [
    "Complexity",
    "Document",
    "DocumentCategory",
    "DocumentTags",
]
