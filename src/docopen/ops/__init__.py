"""Command implementations."""

from .doc import doc, doc_index_path

__all__ = ["doc", "doc_index_path"]
