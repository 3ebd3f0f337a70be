"""Free-text query parsing.

Turns input such as ``"beach photos from 2023"`` into a structured
`Query`: at most one date filter, one media type filter and one size filter,
plus the residual text that is left after every recognized keyword and a few
stopwords are removed.

Example:
    >>> q = parse_query("Photos last month")
    >>> q.type_filter, q.date_filter, q.residual_text
    (<MediaTypeFilter.PHOTOS: 'photos'>, <DateRange.LAST_MONTH: 'last month'>, '')
"""

import re

from loguru import logger

from ..core.types import (
    DateFilter,
    DateRange,
    MediaTypeFilter,
    MonthFilter,
    Query,
    SizeFilter,
    YearFilter,
)

# Checked in order, first hit wins
_DATE_PHRASES: list[tuple[str, DateRange]] = [
    ("today", DateRange.TODAY),
    ("yesterday", DateRange.YESTERDAY),
    ("this week", DateRange.THIS_WEEK),
    ("last week", DateRange.LAST_WEEK),
    ("this month", DateRange.THIS_MONTH),
    ("last month", DateRange.LAST_MONTH),
]

_YEAR_PATTERN = re.compile(r"\b(201[0-9]|202[0-9])\b")

# Calendar order; a month matches on its full name or abbreviation as a whole word
_MONTHS: list[tuple[int, tuple[str, ...]]] = [
    (1, ("january", "jan")),
    (2, ("february", "feb")),
    (3, ("march", "mar")),
    (4, ("april", "apr")),
    (5, ("may",)),
    (6, ("june", "jun")),
    (7, ("july", "jul")),
    (8, ("august", "aug")),
    (9, ("september", "sep")),
    (10, ("october", "oct")),
    (11, ("november", "nov")),
    (12, ("december", "dec")),
]

_MONTH_PATTERNS = [
    (month, re.compile(r"\b(?:" + "|".join(names) + r")\b")) for month, names in _MONTHS
]

# Priority order for type detection
_TYPE_KEYWORDS: list[tuple[tuple[str, ...], MediaTypeFilter]] = [
    (("video",), MediaTypeFilter.VIDEOS),
    (("photo", "image"), MediaTypeFilter.PHOTOS),
    (("gif",), MediaTypeFilter.GIFS),
    (("screenshot",), MediaTypeFilter.SCREENSHOTS),
    (("camera", "dcim"), MediaTypeFilter.CAMERA),
]

_SIZE_KEYWORDS: list[tuple[str, SizeFilter]] = [
    ("small", SizeFilter.SMALL),
    ("medium", SizeFilter.MEDIUM),
    ("large", SizeFilter.LARGE),
]

STOPWORDS = ("from", "in", "on", "the", "a", "an")


def _removable_words() -> list[str]:
    words = [phrase for phrase, _ in _DATE_PHRASES]
    for _, names in _MONTHS:
        words.extend(names)
    for keywords, _ in _TYPE_KEYWORDS:
        for keyword in keywords:
            words.extend([keyword, keyword + "s"])
    words.extend(keyword for keyword, _ in _SIZE_KEYWORDS)
    words.extend(STOPWORDS)
    # Longest first so multi-word phrases are removed whole
    return sorted(set(words), key=len, reverse=True)


_REMOVE_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(w) for w in _removable_words()) + r")\b"
)
_WHITESPACE = re.compile(r"\s+")


def parse_query(text: str) -> Query:
    """Parse free text into a structured Query.

    Args:
        text: Raw query as typed (may be empty or blank).

    Returns:
        Query with detected filters and residual text. A blank input yields
        a Query with every filter unset and empty residual text.
    """
    if not text or not text.strip():
        return Query(raw=text or "")

    normalized = text.lower().strip()
    query = Query(
        raw=text,
        normalized=normalized,
        date_filter=detect_date_filter(normalized),
        type_filter=detect_media_type_filter(normalized),
        size_filter=detect_size_filter(normalized),
        residual_text=remove_filter_keywords(normalized),
    )

    logger.debug(
        f"Parsed query {text!r}: date={query.date_filter}, type={query.type_filter}, "
        f"size={query.size_filter}, residual={query.residual_text!r}"
    )
    return query


def detect_date_filter(query: str) -> DateFilter | None:
    """Detect at most one date filter in a normalized query."""
    for phrase, date_range in _DATE_PHRASES:
        if phrase in query:
            return date_range

    if match := _YEAR_PATTERN.search(query):
        return YearFilter(int(match.group(1)))

    for month, pattern in _MONTH_PATTERNS:
        if pattern.search(query):
            return MonthFilter(month)

    return None


def detect_media_type_filter(query: str) -> MediaTypeFilter | None:
    """Detect at most one media type filter in a normalized query."""
    for keywords, type_filter in _TYPE_KEYWORDS:
        if any(keyword in query for keyword in keywords):
            return type_filter
    return None


def detect_size_filter(query: str) -> SizeFilter | None:
    """Detect at most one size filter in a normalized query."""
    for keyword, size_filter in _SIZE_KEYWORDS:
        if keyword in query:
            return size_filter
    return None


def remove_filter_keywords(query: str) -> str:
    """Strip filter keywords, years and stopwords; collapse whitespace."""
    cleaned = _YEAR_PATTERN.sub(" ", query)
    cleaned = _REMOVE_PATTERN.sub(" ", cleaned)
    return _WHITESPACE.sub(" ", cleaned).strip()


# Suggestion chips offered before the user types anything
QUICK_FILTERS: tuple[tuple[str, MediaTypeFilter | SizeFilter], ...] = (
    ("Photos", MediaTypeFilter.PHOTOS),
    ("Videos", MediaTypeFilter.VIDEOS),
    ("Screenshots", MediaTypeFilter.SCREENSHOTS),
    ("Camera", MediaTypeFilter.CAMERA),
    ("Large Files", SizeFilter.LARGE),
)

DATE_SHORTCUTS: tuple[tuple[str, DateRange], ...] = (
    ("Today", DateRange.TODAY),
    ("Yesterday", DateRange.YESTERDAY),
    ("This Week", DateRange.THIS_WEEK),
    ("This Month", DateRange.THIS_MONTH),
)
