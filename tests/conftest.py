"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path

from mediarank.core.config import Config
from mediarank.core.types import LabelRecord, MediaItem
from mediarank.services import ServiceContainer
from mediarank.sources import InMemoryLabelStore, InMemoryMediaProvider

from tests.fakes import make_label_record, make_media_item


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep MEDIARANK_* variables from the host out of tests."""
    for name in (
        "MEDIARANK_CONFIG",
        "MEDIARANK_MEDIA",
        "MEDIARANK_LABELS",
        "MEDIARANK_HISTORY",
        "MEDIARANK_DEBOUNCE_MS",
        "MEDIARANK_HARD_FILTER",
        "MEDIARANK_MIN_ALBUM_ITEMS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Provide a Config with history under tmp_path."""
    return Config(history_path=tmp_path / "history.json")


@pytest.fixture
def media_items() -> list[MediaItem]:
    """A small media snapshot across a few folders."""
    return [
        make_media_item(1, "IMG_0001.jpg", bucket_name="Camera"),
        make_media_item(2, "IMG_0002.jpg", bucket_name="Camera"),
        make_media_item(3, "beach_day.jpg", bucket_name="Holiday"),
        make_media_item(4, "clip.mp4", bucket_name="Camera", mime_type="video/mp4", is_video=True),
        make_media_item(5, "Screenshot_2024.png", bucket_name="Screenshots", mime_type="image/png"),
    ]


@pytest.fixture
def label_records() -> list[LabelRecord]:
    """Label records matching the media_items fixture."""
    return [
        make_label_record(1, "dog:0.95,animal:0.88,pet:0.75"),
        make_label_record(2, "person:0.90,cat:0.70"),
        make_label_record(3, "beach:0.92,sky:0.81,water:0.77"),
        make_label_record(4, "dog:0.80,outdoor:0.60"),
        make_label_record(5, "text:0.93,document:0.71"),
    ]


@pytest.fixture
def container(
    config: Config,
    media_items: list[MediaItem],
    label_records: list[LabelRecord],
) -> ServiceContainer:
    """Provide a ServiceContainer over in-memory collaborators."""
    return ServiceContainer(
        config,
        label_store=InMemoryLabelStore(label_records),
        media_provider=InMemoryMediaProvider(media_items),
    )
