"""File-backed collaborators for media and label corpora.

Corpora are JSON, or YAML when the file ends in ``.yaml``/``.yml``.

Media file: a list of objects with `MediaItem` fields::

    [{"id": 1, "display_name": "IMG_0001.jpg", "bucket_id": "b1",
      "bucket_name": "Camera", "date_added": 1700000000,
      "size": 2048000, "mime_type": "image/jpeg"}]

Label file: either a list of records::

    [{"media_id": 1, "labels_with_confidence": "dog:0.95,animal:0.88"}]

or a mapping of media id to the serialized label string::

    {"1": "dog:0.95,animal:0.88"}

Files are read on first access. Read or parse failures raise
`LabelStoreError` / `MediaProviderError`; callers in `mediarank.services`
degrade those to an empty corpus.
"""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from ..core.exceptions import LabelStoreError, MediaProviderError
from ..core.types import LabelRecord, MediaItem
from ..search.labels import parse_labels_with_confidence, plain_labels
from .memory import InMemoryLabelStore, InMemoryMediaProvider

_MEDIA_FIELDS = {f.name for f in fields(MediaItem)}


def load_document(path: Path) -> Any:
    """Read a JSON or YAML document.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content cannot be parsed.
    """
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e


def media_item_from_dict(data: dict[str, Any]) -> MediaItem:
    """Build a MediaItem from a mapping, ignoring unknown keys."""
    values = {k: v for k, v in data.items() if k in _MEDIA_FIELDS}
    for key in ("id", "date_added", "size", "duration", "width", "height"):
        if key in values:
            values[key] = int(values[key])
    if "is_video" in values:
        values["is_video"] = bool(values["is_video"])
    return MediaItem(**values)


def label_records_from_document(data: Any) -> list[LabelRecord]:
    """Build label records from a list-of-records or id-to-string document."""
    if data is None:
        return []

    if isinstance(data, dict):
        entries = [
            {"media_id": media_id, "labels_with_confidence": labels}
            for media_id, labels in data.items()
        ]
    elif isinstance(data, list):
        entries = data
    else:
        raise ValueError(f"Expected a list or mapping, got {type(data).__name__}")

    records = []
    for entry in entries:
        serialized = str(entry["labels_with_confidence"] or "")
        labels = entry.get("labels") or plain_labels(parse_labels_with_confidence(serialized))
        records.append(
            LabelRecord(
                media_id=int(entry["media_id"]),
                labels_with_confidence=serialized,
                labels=labels,
                processed_timestamp=int(entry.get("processed_timestamp", 0)),
            )
        )
    return records


class FileLabelStore:
    """LabelStore reading its records from a JSON/YAML file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._store: InMemoryLabelStore | None = None

    def _loaded(self) -> InMemoryLabelStore:
        if self._store is None:
            try:
                records = label_records_from_document(load_document(self.path))
            except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
                raise LabelStoreError(f"Cannot read labels from {self.path}: {e}") from e
            logger.debug(f"Loaded {len(records)} label records from {self.path}")
            self._store = InMemoryLabelStore(records)
        return self._store

    def reload(self) -> None:
        """Forget the cached corpus; the next call re-reads the file."""
        self._store = None

    def all_records(self) -> list[LabelRecord]:
        return self._loaded().all_records()

    def labels_for_media(self, media_id: int) -> LabelRecord | None:
        return self._loaded().labels_for_media(media_id)

    def search_by_label(self, text: str) -> list[LabelRecord]:
        return self._loaded().search_by_label(text)


class FileMediaProvider:
    """MediaProvider reading its snapshot from a JSON/YAML file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._provider: InMemoryMediaProvider | None = None

    def _loaded(self) -> InMemoryMediaProvider:
        if self._provider is None:
            try:
                data = load_document(self.path) or []
                if not isinstance(data, list):
                    raise ValueError(f"Expected a list, got {type(data).__name__}")
                items = [media_item_from_dict(entry) for entry in data]
            except (OSError, ValueError, TypeError, AttributeError) as e:
                raise MediaProviderError(f"Cannot read media from {self.path}: {e}") from e
            logger.debug(f"Loaded {len(items)} media items from {self.path}")
            self._provider = InMemoryMediaProvider(items)
        return self._provider

    def reload(self) -> None:
        """Forget the cached snapshot; the next call re-reads the file."""
        self._provider = None

    def all_media(self) -> list[MediaItem]:
        return self._loaded().all_media()
