"""Smart album service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ..core.types import LabelRecord, MediaItem, SmartAlbumSummary
from ..smartalbum import enumerate_smart_albums, is_smart_album, materialize_smart_album

if TYPE_CHECKING:
    from .container import ServiceContainer


class SmartAlbumService:
    """Lists smart albums and resolves their members.

    Results are recomputed on every call; nothing is cached here, so a
    changed label corpus shows up on the next call.
    """

    def __init__(self, container: "ServiceContainer"):
        self._container = container

    def list_albums(self) -> list[SmartAlbumSummary]:
        """Smart albums with at least the configured minimum item count."""
        records = self._load_records()
        config = self._container.config
        albums = enumerate_smart_albums(
            records,
            min_items=config.smart_albums.min_items_threshold,
            thresholds=config.thresholds,
        )
        logger.debug(f"{len(albums)} smart albums visible from {len(records)} records")
        return albums

    def album_media(self, album_id: str) -> list[MediaItem]:
        """Current members of one smart album (empty for unknown ids)."""
        if not is_smart_album(album_id):
            logger.debug(f"Not a smart album id: {album_id!r}")
            return []

        records = self._load_records()
        if not records:
            return []
        return materialize_smart_album(
            album_id, records, self._load_media(), self._container.config.thresholds
        )

    def _load_records(self) -> list[LabelRecord]:
        try:
            return self._container.label_store.all_records()
        except Exception as e:
            logger.warning(f"Label store unavailable, treating as empty: {e}")
            return []

    def _load_media(self) -> list[MediaItem]:
        try:
            return self._container.media_provider.all_media()
        except Exception as e:
            logger.warning(f"Media provider unavailable, treating as empty: {e}")
            return []
