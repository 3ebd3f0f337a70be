"""Collaborator implementations: in-memory and file-backed."""

from .files import FileLabelStore, FileMediaProvider, load_document
from .memory import InMemoryLabelStore, InMemoryMediaProvider

__all__ = [
    "FileLabelStore",
    "FileMediaProvider",
    "InMemoryLabelStore",
    "InMemoryMediaProvider",
    "load_document",
]
