"""Type definitions for mediarank."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class MediaItem:
    """A known image or video, as reported by the media provider."""

    id: int
    display_name: str
    bucket_id: str
    bucket_name: str
    date_added: int  # Epoch seconds
    size: int  # Bytes
    mime_type: str
    is_video: bool = False
    duration: int = 0  # Video duration in milliseconds
    width: int = 0
    height: int = 0
    path: str = ""


@dataclass(frozen=True)
class LabelWithConfidence:
    """A single decoded label and its inference confidence (0-1)."""

    label: str
    confidence: float


@dataclass(frozen=True)
class LabelRecord:
    """ML label data stored for one media item.

    Attributes:
        media_id: Id of the labeled media item.
        labels_with_confidence: Serialized pairs, e.g. "dog:0.95,animal:0.88".
        labels: Comma-separated lowercase labels without confidences.
        processed_timestamp: When labeling ran (epoch millis).
    """

    media_id: int
    labels_with_confidence: str
    labels: str = ""
    processed_timestamp: int = 0


class DateRange(Enum):
    """Relative date windows recognized in queries."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this week"
    LAST_WEEK = "last week"
    THIS_MONTH = "this month"
    LAST_MONTH = "last month"


@dataclass(frozen=True)
class YearFilter:
    """Items added in a given calendar year."""

    year: int


@dataclass(frozen=True)
class MonthFilter:
    """Items added in a given calendar month (1-12) of any year."""

    month: int


DateFilter = Union[DateRange, YearFilter, MonthFilter]


class MediaTypeFilter(Enum):
    """Media type restriction recognized in queries."""

    PHOTOS = "photos"
    VIDEOS = "videos"
    GIFS = "gifs"
    SCREENSHOTS = "screenshots"
    CAMERA = "camera"


class SizeFilter(Enum):
    """File size buckets recognized in queries."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


@dataclass(frozen=True)
class Query:
    """Structured form of a free-text search query.

    Attributes:
        raw: Input exactly as typed.
        normalized: Lower-cased, trimmed input.
        date_filter: Detected date restriction, if any.
        type_filter: Detected media type restriction, if any.
        size_filter: Detected size restriction, if any.
        residual_text: Input with filter keywords and stopwords removed.
    """

    raw: str
    normalized: str = ""
    date_filter: Optional[DateFilter] = None
    type_filter: Optional[MediaTypeFilter] = None
    size_filter: Optional[SizeFilter] = None
    residual_text: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.normalized

    @property
    def has_filters(self) -> bool:
        return (
            self.date_filter is not None
            or self.type_filter is not None
            or self.size_filter is not None
        )


@dataclass
class RankedResult:
    """Label match for one media item after thresholding and scoring.

    Attributes:
        media_item: The matched item.
        matched_label: Label text that matched the query.
        confidence: Confidence of the matched label.
        rank_score: Combined score used for ordering (0-1).
        suppress_reason: Why the result was down-ranked, for diagnostics.
    """

    media_item: MediaItem
    matched_label: str
    confidence: float
    rank_score: float
    suppress_reason: Optional[str] = None


@dataclass
class AlbumMatch:
    """Folder whose name matched the query."""

    album_name: str
    items: list[MediaItem]
    match_priority: int = 1  # Lower is higher priority


@dataclass
class SearchResult:
    """Search output: matching folders plus matching media."""

    matched_albums: list[AlbumMatch]
    matched_media: list[MediaItem]
    query: str
    label_matches: list[RankedResult] = field(default_factory=list)

    @classmethod
    def empty(cls, query: str = "") -> "SearchResult":
        return cls(matched_albums=[], matched_media=[], query=query)


@dataclass
class SmartAlbumSummary:
    """A visible smart album and its current size."""

    id: str
    name: str  # Icon-decorated display name
    display_name: str
    icon: str
    item_count: int
    cover_media_id: Optional[int] = None


@dataclass
class SearchHistoryEntry:
    """A previously submitted query."""

    query: str
    timestamp: int  # Epoch millis
