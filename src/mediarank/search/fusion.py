"""Merging of lexical and label-based media matches."""

from loguru import logger

from ..core.types import MediaItem, RankedResult


def merge_results(
    lexical: list[MediaItem],
    ranked: list[RankedResult],
) -> list[MediaItem]:
    """Union lexical and classification matches, deduplicated by media id.

    Lexical matches keep their order and come first; classification matches
    follow in rank order, skipping any item already matched lexically. The
    merged list is not re-sorted.

    Args:
        lexical: Media matched on file/folder metadata.
        ranked: Label matches from `filter_and_rank`.

    Returns:
        Merged media list with no repeated media id.
    """
    merged: list[MediaItem] = []
    seen: set[int] = set()

    for item in lexical:
        if item.id not in seen:
            seen.add(item.id)
            merged.append(item)

    lexical_count = len(merged)
    for result in ranked:
        if result.media_item.id not in seen:
            seen.add(result.media_item.id)
            merged.append(result.media_item)

    logger.debug(
        f"Merged {lexical_count} lexical + {len(merged) - lexical_count} label-only "
        f"matches ({len(ranked)} label candidates)"
    )
    return merged
