"""Port definitions for the search engine's collaborators.

The engine never owns storage. It reads label data and media metadata
through these protocols, so it can run against in-memory fixtures, files,
or an application database alike.

Protocols defined:
    - LabelStore: ML label records, by media id or by label text
    - MediaProvider: the current image + video snapshot

Usage:
    from mediarank.search.ports import LabelStore

    class MyLabelStore:
        def all_records(self): ...
        def labels_for_media(self, media_id): ...
        def search_by_label(self, text): ...

    store: LabelStore = MyLabelStore()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mediarank.core.types import LabelRecord, MediaItem


@runtime_checkable
class LabelStore(Protocol):
    """Read access to per-item ML label records."""

    def all_records(self) -> list["LabelRecord"]:
        """Return every stored label record."""
        ...

    def labels_for_media(self, media_id: int) -> "LabelRecord | None":
        """Return the label record for one media item, if labeled."""
        ...

    def search_by_label(self, text: str) -> list["LabelRecord"]:
        """Return records with a decoded label containing text.

        Args:
            text: Case-insensitive substring to look for.

        Returns:
            Matching records, at most one per media id.
        """
        ...


@runtime_checkable
class MediaProvider(Protocol):
    """Read access to the platform media index."""

    def all_media(self) -> list["MediaItem"]:
        """Return every known image and video."""
        ...
