"""In-memory collaborator implementations.

Useful for embedding the engine in an application that already holds its
media and label data, and as the backing for the file-based sources.
"""

from __future__ import annotations

from typing import Iterable

from ..core.types import LabelRecord, MediaItem
from ..search.labels import parse_labels_with_confidence


class InMemoryLabelStore:
    """LabelStore over a list of records, keyed by media id.

    Adding a record for a media id that already has one replaces it.
    """

    def __init__(self, records: Iterable[LabelRecord] = ()):
        self._records: dict[int, LabelRecord] = {}
        for record in records:
            self.add(record)

    def add(self, record: LabelRecord) -> None:
        self._records[record.media_id] = record

    def all_records(self) -> list[LabelRecord]:
        return list(self._records.values())

    def labels_for_media(self, media_id: int) -> LabelRecord | None:
        return self._records.get(media_id)

    def search_by_label(self, text: str) -> list[LabelRecord]:
        needle = text.lower().strip()
        if not needle:
            return []
        return [
            record
            for record in self._records.values()
            if any(
                needle in item.label.lower()
                for item in parse_labels_with_confidence(record.labels_with_confidence)
            )
        ]

    def __len__(self) -> int:
        return len(self._records)


class InMemoryMediaProvider:
    """MediaProvider over a fixed list of media items."""

    def __init__(self, items: Iterable[MediaItem] = ()):
        self._items = list(items)

    def all_media(self) -> list[MediaItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)
