"""Tests for ServiceContainer."""

from pathlib import Path

from mediarank.core.config import Config
from mediarank.services import RecentSearches, ServiceContainer, SmartAlbumService
from mediarank.services.search import SearchService
from mediarank.sources import (
    FileLabelStore,
    FileMediaProvider,
    InMemoryLabelStore,
    InMemoryMediaProvider,
)


class TestServiceContainerInit:
    """Tests for ServiceContainer initialization."""

    def test_defaults_to_empty_sources(self, config: Config):
        container = ServiceContainer(config)

        assert isinstance(container.label_store, InMemoryLabelStore)
        assert isinstance(container.media_provider, InMemoryMediaProvider)
        assert container.config is config

    def test_file_sources_from_config(self, tmp_path: Path):
        config = Config(media_path=tmp_path / "m.json", labels_path=tmp_path / "l.json")

        container = ServiceContainer(config)

        assert isinstance(container.label_store, FileLabelStore)
        assert isinstance(container.media_provider, FileMediaProvider)
        assert container.label_store.path == tmp_path / "l.json"

    def test_explicit_empty_collaborators_kept(self, tmp_path: Path):
        config = Config(media_path=tmp_path / "m.json", labels_path=tmp_path / "l.json")
        store = InMemoryLabelStore()
        provider = InMemoryMediaProvider()

        container = ServiceContainer(config, label_store=store, media_provider=provider)

        assert container.label_store is store
        assert container.media_provider is provider

    def test_services_none_before_access(self, config: Config):
        container = ServiceContainer(config)

        assert container._search is None
        assert container._albums is None
        assert container._history is None


class TestServiceContainerServices:
    """Tests for lazy service access."""

    def test_services_cached(self, container: ServiceContainer):
        assert isinstance(container.search, SearchService)
        assert container.search is container.search
        assert isinstance(container.albums, SmartAlbumService)
        assert container.albums is container.albums

    def test_history_from_config(self, config: Config):
        config.search.max_recent_searches = 3
        container = ServiceContainer(config)

        history = container.history

        assert isinstance(history, RecentSearches)
        assert history.path == config.history_path
        assert history.max_entries == 3

    def test_empty_sources_give_empty_results(self, config: Config):
        container = ServiceContainer(config)

        assert container.search.search("dog").matched_media == []
        assert container.albums.list_albums() == []

    def test_debounced_search_uses_config_delay(self, config: Config):
        config.search.debounce_seconds = 0.05
        container = ServiceContainer(config)

        debounced = container.debounced_search()

        assert debounced._delay == 0.05
        assert debounced._service is container.search
