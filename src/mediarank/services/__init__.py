"""Service layer for mediarank.

Services wrap the pure engine with collaborator access, graceful
degradation and the interactive debounce contract.

Example usage:

    from mediarank.services import ServiceContainer

    services = ServiceContainer(config)
    result = services.search.search("dog photos")
    albums = services.albums.list_albums()
    services.history.add("dog photos")
"""

from .albums import SmartAlbumService
from .container import ServiceContainer
from .history import RecentSearches
from .search import DebouncedSearch, SearchService

__all__ = [
    "ServiceContainer",
    "SearchService",
    "DebouncedSearch",
    "SmartAlbumService",
    "RecentSearches",
]
