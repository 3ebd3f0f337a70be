"""Smart album generation from ML label records.

Smart albums are virtual: their membership is computed on demand from the
label corpus, never stored. Membership uses the same label-set matching as
search (`search.classification`), with each definition's own label set and
threshold. Animals and Food additionally drop any record carrying a strong
conflicting label (a person, or a building), since those are the
categories most prone to false positives.
"""

from loguru import logger

from ..core.config import DEFAULT_THRESHOLDS, ClassificationThresholds
from ..core.types import LabelRecord, MediaItem, SmartAlbumSummary
from ..search.classification import has_strong_signal, match_label_set
from ..search.labels import parse_labels_with_confidence
from .definitions import MIN_ITEMS_THRESHOLD, SmartAlbumType


def find_matching_records(
    label_corpus: list[LabelRecord],
    album_type: SmartAlbumType,
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> list[tuple[LabelRecord, float]]:
    """Select the records that belong to a smart album.

    Args:
        label_corpus: Every label record.
        album_type: Album definition to match against.
        thresholds: Threshold table; negative labels count at or above its
            strong_signal_threshold.

    Returns:
        (record, best matching confidence) pairs in corpus order, one per
        media id.
    """
    matches = []
    seen: set[int] = set()
    for record in label_corpus:
        if record.media_id in seen:
            continue

        parsed = parse_labels_with_confidence(record.labels_with_confidence)
        best = match_label_set(parsed, album_type.labels, album_type.min_confidence)
        if best is None:
            continue

        if album_type.negative_labels and has_strong_signal(
            parsed, album_type.negative_labels, thresholds.strong_signal_threshold
        ):
            continue

        seen.add(record.media_id)
        matches.append((record, best.confidence))
    return matches


def enumerate_smart_albums(
    label_corpus: list[LabelRecord],
    min_items: int = MIN_ITEMS_THRESHOLD,
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> list[SmartAlbumSummary]:
    """List the smart albums that have enough members to be shown.

    Args:
        label_corpus: Every label record.
        min_items: Minimum member count for an album to be visible.
        thresholds: Threshold table passed to `find_matching_records`.

    Returns:
        Visible albums in definition order. Albums below min_items are
        omitted entirely.
    """
    if not label_corpus:
        return []

    albums = []
    for album_type in SmartAlbumType:
        matches = find_matching_records(label_corpus, album_type, thresholds)
        logger.debug(f"Smart album {album_type.id}: {len(matches)} matching records")

        if len(matches) < min_items:
            continue

        cover, _ = max(matches, key=lambda m: m[1])
        albums.append(
            SmartAlbumSummary(
                id=album_type.id,
                name=album_type.title,
                display_name=album_type.display_name,
                icon=album_type.icon,
                item_count=len(matches),
                cover_media_id=cover.media_id,
            )
        )
    return albums


def materialize_smart_album(
    album_id: str,
    label_corpus: list[LabelRecord],
    all_media: list[MediaItem],
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> list[MediaItem]:
    """Resolve the current members of one smart album.

    Args:
        album_id: Smart album id, e.g. "smart_animals".
        label_corpus: Every label record.
        all_media: Current media snapshot.
        thresholds: Threshold table passed to `find_matching_records`.

    Returns:
        Member media items in corpus order. Records pointing at media no
        longer in the snapshot are skipped. Unknown album ids yield an
        empty list.
    """
    album_type = SmartAlbumType.from_id(album_id)
    if album_type is None:
        logger.warning(f"Unknown smart album id: {album_id!r}")
        return []

    media_map = {item.id: item for item in all_media}
    members = []
    for record, _ in find_matching_records(label_corpus, album_type, thresholds):
        item = media_map.get(record.media_id)
        if item is None:
            logger.debug(f"Smart album {album_id}: media {record.media_id} no longer present")
            continue
        members.append(item)
    return members
