"""Core types, configuration and errors for mediarank."""

from .config import (
    DEFAULT_THRESHOLDS,
    ClassificationThresholds,
    Config,
    SearchConfig,
    SmartAlbumConfig,
)
from .exceptions import (
    CollaboratorError,
    ConfigError,
    LabelStoreError,
    MediaProviderError,
    MediaRankError,
    SmartAlbumNotFoundError,
)
from .types import (
    AlbumMatch,
    DateFilter,
    DateRange,
    LabelRecord,
    LabelWithConfidence,
    MediaItem,
    MediaTypeFilter,
    MonthFilter,
    Query,
    RankedResult,
    SearchHistoryEntry,
    SearchResult,
    SizeFilter,
    SmartAlbumSummary,
    YearFilter,
)

__all__ = [
    "Config",
    "ClassificationThresholds",
    "DEFAULT_THRESHOLDS",
    "SearchConfig",
    "SmartAlbumConfig",
    "MediaRankError",
    "ConfigError",
    "CollaboratorError",
    "LabelStoreError",
    "MediaProviderError",
    "SmartAlbumNotFoundError",
    "MediaItem",
    "LabelRecord",
    "LabelWithConfidence",
    "DateFilter",
    "DateRange",
    "YearFilter",
    "MonthFilter",
    "MediaTypeFilter",
    "SizeFilter",
    "Query",
    "RankedResult",
    "AlbumMatch",
    "SearchResult",
    "SmartAlbumSummary",
    "SearchHistoryEntry",
]
