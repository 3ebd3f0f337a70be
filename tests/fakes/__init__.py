"""Test fakes for testing without real media or label corpora.

Example:
    from tests.fakes import FailingLabelStore, make_media_item

    container = ServiceContainer(
        config,
        label_store=FailingLabelStore(),
        media_provider=InMemoryMediaProvider([make_media_item(1)]),
    )
"""

from .media import (
    NOW,
    FailingLabelStore,
    FailingMediaProvider,
    RecordingLabelStore,
    make_label_record,
    make_media_item,
)

__all__ = [
    "NOW",
    "make_media_item",
    "make_label_record",
    "FailingLabelStore",
    "FailingMediaProvider",
    "RecordingLabelStore",
]
