"""Command implementations for the mediarank CLI."""

from .albums import handle_album, handle_albums
from .history import handle_history
from .search import (
    add_search_arguments,
    handle_labels,
    handle_rank,
    handle_search,
    handle_shortcuts,
)

__all__ = [
    "add_search_arguments",
    "handle_search",
    "handle_rank",
    "handle_labels",
    "handle_shortcuts",
    "handle_albums",
    "handle_album",
    "handle_history",
]
