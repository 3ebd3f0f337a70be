"""Lexical matching over media metadata.

Matches come purely from file name, folder, date, type and size metadata;
no ML labels are involved. Two outputs are produced per query:

- Album matches: folders (buckets) whose name contains the residual text,
  restricted to items that pass the active filters.
- Media matches: every item passing the active filters and, when residual
  text remains, whose file or folder name contains it.
"""

from datetime import datetime, timedelta
from typing import Iterable

from loguru import logger

from ..core.types import (
    AlbumMatch,
    DateFilter,
    DateRange,
    MediaItem,
    MediaTypeFilter,
    MonthFilter,
    Query,
    SearchResult,
    SizeFilter,
    YearFilter,
)
from .query import parse_query

FIVE_MB = 5 * 1024 * 1024
HUNDRED_MB = 100 * 1024 * 1024


def search(
    query: str,
    all_media: list[MediaItem],
    now: datetime | None = None,
) -> SearchResult:
    """Run lexical search over a media snapshot.

    Args:
        query: Free-text query.
        all_media: Every known media item.
        now: Reference time for relative date filters (defaults to wall clock).

    Returns:
        SearchResult with album and media matches. Blank queries return an
        empty result without scanning the media list.
    """
    parsed = parse_query(query)
    if parsed.is_empty:
        return SearchResult.empty(query)

    albums = find_matching_albums(parsed, all_media, now)
    media = match_media(parsed, all_media, now)

    logger.debug(
        f"Lexical search {query!r}: {len(albums)} albums, {len(media)} media "
        f"of {len(all_media)}"
    )
    return SearchResult(matched_albums=albums, matched_media=media, query=query)


def find_matching_albums(
    query: Query,
    all_media: list[MediaItem],
    now: datetime | None = None,
) -> list[AlbumMatch]:
    """Find folders whose name contains the residual text.

    Album matching is skipped entirely when no residual text remains.
    """
    if not query.residual_text:
        return []

    groups: dict[str, list[MediaItem]] = {}
    for item in all_media:
        groups.setdefault(item.bucket_name, []).append(item)

    matches = []
    for album_name, items in groups.items():
        if query.residual_text not in album_name.lower():
            continue
        filtered = apply_filters(items, query, now)
        if filtered:
            matches.append(AlbumMatch(album_name=album_name, items=filtered, match_priority=1))

    return sorted(matches, key=lambda m: m.match_priority)


def match_media(
    query: Query,
    all_media: list[MediaItem],
    now: datetime | None = None,
) -> list[MediaItem]:
    """Apply filters, then residual-text matching, to the full media list."""
    matched = apply_filters(all_media, query, now)
    if query.residual_text:
        matched = apply_file_name_filter(matched, query.residual_text)
    return matched


def apply_filters(
    media: Iterable[MediaItem],
    query: Query,
    now: datetime | None = None,
) -> list[MediaItem]:
    """Apply the query's date, type and size filters in sequence."""
    matched = list(media)
    if query.date_filter is not None:
        matched = apply_date_filter(matched, query.date_filter, now)
    if query.type_filter is not None:
        matched = apply_media_type_filter(matched, query.type_filter)
    if query.size_filter is not None:
        matched = apply_size_filter(matched, query.size_filter)
    return matched


def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _date_predicate(date_filter: DateFilter, now: datetime):
    """Build a predicate over local item datetimes for one date filter."""
    if isinstance(date_filter, YearFilter):
        return lambda dt: dt.year == date_filter.year

    if isinstance(date_filter, MonthFilter):
        return lambda dt: dt.month == date_filter.month

    today = _start_of_day(now)
    week_start = today - timedelta(days=today.weekday())

    if date_filter is DateRange.TODAY:
        return lambda dt: dt >= today
    if date_filter is DateRange.YESTERDAY:
        yesterday = today - timedelta(days=1)
        return lambda dt: yesterday <= dt < today
    if date_filter is DateRange.THIS_WEEK:
        return lambda dt: dt >= week_start
    if date_filter is DateRange.LAST_WEEK:
        last_week_start = week_start - timedelta(days=7)
        return lambda dt: last_week_start <= dt < week_start
    if date_filter is DateRange.THIS_MONTH:
        return lambda dt: (dt.year, dt.month) == (now.year, now.month)
    if date_filter is DateRange.LAST_MONTH:
        if now.month == 1:
            year, month = now.year - 1, 12
        else:
            year, month = now.year, now.month - 1
        return lambda dt: (dt.year, dt.month) == (year, month)

    raise TypeError(f"Unknown date filter: {date_filter!r}")


def apply_date_filter(
    media: list[MediaItem],
    date_filter: DateFilter,
    now: datetime | None = None,
) -> list[MediaItem]:
    """Keep items whose date_added falls inside the filter's window.

    Windows are computed in local time relative to ``now``.
    """
    predicate = _date_predicate(date_filter, now or datetime.now())
    return [item for item in media if predicate(datetime.fromtimestamp(item.date_added))]


def apply_media_type_filter(
    media: list[MediaItem],
    type_filter: MediaTypeFilter,
) -> list[MediaItem]:
    """Keep items of the requested media type."""
    if type_filter is MediaTypeFilter.PHOTOS:
        return [item for item in media if not item.is_video]
    if type_filter is MediaTypeFilter.VIDEOS:
        return [item for item in media if item.is_video]
    if type_filter is MediaTypeFilter.GIFS:
        return [item for item in media if "gif" in item.mime_type.lower()]
    if type_filter is MediaTypeFilter.SCREENSHOTS:
        return [
            item
            for item in media
            if "screenshot" in item.bucket_name.lower()
            or "screenshot" in item.display_name.lower()
        ]
    if type_filter is MediaTypeFilter.CAMERA:
        return [
            item
            for item in media
            if "camera" in item.bucket_name.lower() or "dcim" in item.bucket_name.lower()
        ]

    raise TypeError(f"Unknown media type filter: {type_filter!r}")


def apply_size_filter(media: list[MediaItem], size_filter: SizeFilter) -> list[MediaItem]:
    """Keep items in the requested size bucket (5 MiB / 100 MiB boundaries)."""
    if size_filter is SizeFilter.SMALL:
        return [item for item in media if item.size < FIVE_MB]
    if size_filter is SizeFilter.MEDIUM:
        return [item for item in media if FIVE_MB <= item.size <= HUNDRED_MB]
    if size_filter is SizeFilter.LARGE:
        return [item for item in media if item.size > HUNDRED_MB]

    raise TypeError(f"Unknown size filter: {size_filter!r}")


def apply_file_name_filter(media: list[MediaItem], text: str) -> list[MediaItem]:
    """Keep items whose file or folder name contains text (case-insensitive)."""
    needle = text.lower()
    return [
        item
        for item in media
        if needle in item.display_name.lower() or needle in item.bucket_name.lower()
    ]
