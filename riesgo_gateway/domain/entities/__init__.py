"""Domain Entities - Core business objects."""

from .document import Document, DocumentType

__all__ = [
    "Document",
    "DocumentType",
]
