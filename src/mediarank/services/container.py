"""Service container wiring collaborators to services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from loguru import logger

from ..core.config import Config
from ..search.ports import LabelStore, MediaProvider
from ..sources import FileLabelStore, FileMediaProvider, InMemoryLabelStore, InMemoryMediaProvider

if TYPE_CHECKING:
    from ..core.types import SearchResult
    from .albums import SmartAlbumService
    from .history import RecentSearches
    from .search import DebouncedSearch, SearchService


class ServiceContainer:
    """Holds the collaborators and provides access to all services.

    Collaborators default to file-backed sources when the config names a
    media/labels path, and to empty in-memory sources otherwise. Services
    are created lazily on first access.

    Usage:

        services = ServiceContainer(Config.from_env())
        result = services.search.search("dog")
        albums = services.albums.list_albums()

    Attributes:
        config: Application configuration.
        label_store: LabelStore collaborator.
        media_provider: MediaProvider collaborator.
    """

    def __init__(
        self,
        config: Config,
        label_store: LabelStore | None = None,
        media_provider: MediaProvider | None = None,
    ):
        """Initialize container.

        Args:
            config: Application configuration.
            label_store: Optional collaborator overriding the configured one.
            media_provider: Optional collaborator overriding the configured one.
        """
        self.config = config
        if label_store is None:
            label_store = self._default_label_store()
        if media_provider is None:
            media_provider = self._default_media_provider()
        self.label_store = label_store
        self.media_provider = media_provider

        self._search: SearchService | None = None
        self._albums: SmartAlbumService | None = None
        self._history: RecentSearches | None = None

    def _default_label_store(self) -> LabelStore:
        if self.config.labels_path is not None:
            return FileLabelStore(self.config.labels_path)
        logger.debug("No labels path configured, using empty label store")
        return InMemoryLabelStore()

    def _default_media_provider(self) -> MediaProvider:
        if self.config.media_path is not None:
            return FileMediaProvider(self.config.media_path)
        logger.debug("No media path configured, using empty media provider")
        return InMemoryMediaProvider()

    @property
    def search(self) -> "SearchService":
        if self._search is None:
            from .search import SearchService

            self._search = SearchService(self)
        return self._search

    @property
    def albums(self) -> "SmartAlbumService":
        if self._albums is None:
            from .albums import SmartAlbumService

            self._albums = SmartAlbumService(self)
        return self._albums

    @property
    def history(self) -> "RecentSearches":
        if self._history is None:
            from .history import RecentSearches

            self._history = RecentSearches(
                self.config.history_path,
                max_entries=self.config.search.max_recent_searches,
            )
        return self._history

    def debounced_search(
        self, on_result: "Callable[[SearchResult], None] | None" = None
    ) -> "DebouncedSearch":
        """Create a debouncer over the search service using the configured delay."""
        from .search import DebouncedSearch

        return DebouncedSearch(
            self.search, delay=self.config.search.debounce_seconds, on_result=on_result
        )
