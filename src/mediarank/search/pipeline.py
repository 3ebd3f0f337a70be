"""Search pipeline combining lexical and label-based matching.

Steps for one query:

1. Parse the free text into filters plus residual text (`search.query`).
2. Lexical matching of folders and media metadata (`search.lexical`).
3. Label matching of the residual text against ML labels, restricted by the
   same date/type/size filters (`search.classification`).
4. Merge, deduplicating by media id with lexical matches first
   (`search.fusion`).

`hybrid_search` is the pure form over in-memory collections.
`MediaSearchPipeline` runs it over collaborator ports and degrades to an
empty corpus when a collaborator fails.

Typical usage:

    pipeline = MediaSearchPipeline(label_store, media_provider)
    result = pipeline.search("dog photos 2023")
    for item in result.matched_media:
        print(item.display_name)
"""

from dataclasses import dataclass
from datetime import datetime

from loguru import logger

from ..core.config import DEFAULT_THRESHOLDS, ClassificationThresholds
from ..core.types import LabelRecord, MediaItem, SearchResult
from .classification import filter_and_rank
from .fusion import merge_results
from .lexical import apply_filters, find_matching_albums, match_media
from .ports import LabelStore, MediaProvider
from .query import parse_query


@dataclass
class SearchPipelineConfig:
    """Configuration for the search pipeline.

    Attributes:
        hard_filter: Drop weak label matches instead of ranking them lower.
        enable_label_search: Include ML label matches in results.
        thresholds: Classification threshold table.
    """

    hard_filter: bool = True
    enable_label_search: bool = True
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS


def hybrid_search(
    query: str,
    all_media: list[MediaItem],
    label_records: list[LabelRecord],
    hard_filter: bool = True,
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
    now: datetime | None = None,
) -> SearchResult:
    """Search media by metadata and ML labels.

    Args:
        query: Free-text query.
        all_media: Current media snapshot.
        label_records: Candidate label records for the residual text.
        hard_filter: Passed to `filter_and_rank`.
        thresholds: Classification threshold table.
        now: Reference time for relative date filters.

    Returns:
        SearchResult whose matched_media holds lexical matches followed by
        label-only matches, never repeating a media id.
    """
    parsed = parse_query(query)
    if parsed.is_empty:
        return SearchResult.empty(query)

    albums = find_matching_albums(parsed, all_media, now)
    lexical = match_media(parsed, all_media, now)

    ranked = []
    if parsed.residual_text and label_records:
        ranked = filter_and_rank(
            parsed.residual_text, label_records, all_media, hard_filter, thresholds
        )
        if parsed.has_filters:
            kept = apply_filters([r.media_item for r in ranked], parsed, now)
            allowed = {item.id for item in kept}
            ranked = [r for r in ranked if r.media_item.id in allowed]

    return SearchResult(
        matched_albums=albums,
        matched_media=merge_results(lexical, ranked),
        query=query,
        label_matches=ranked,
    )


class MediaSearchPipeline:
    """Runs hybrid search over label store and media provider ports.

    Collaborator failures never propagate: a failing store or provider is
    logged and treated as empty for that call.

    Example:
        >>> pipeline = MediaSearchPipeline(label_store, media_provider)
        >>> result = pipeline.search("cat")
        >>> [r.matched_label for r in result.label_matches]
        ['cat', 'cat']
    """

    def __init__(
        self,
        label_store: LabelStore,
        media_provider: MediaProvider,
        config: SearchPipelineConfig | None = None,
    ):
        """Initialize the pipeline.

        Args:
            label_store: Source of ML label records.
            media_provider: Source of the media snapshot.
            config: Optional SearchPipelineConfig (uses defaults if None).
        """
        self.label_store = label_store
        self.media_provider = media_provider
        self.config = config or SearchPipelineConfig()

    def search(self, query: str, now: datetime | None = None) -> SearchResult:
        """Execute the pipeline for one query."""
        parsed = parse_query(query)
        if parsed.is_empty:
            return SearchResult.empty(query)

        all_media = self.load_media()
        if not all_media:
            return SearchResult.empty(query)

        records: list[LabelRecord] = []
        if self.config.enable_label_search and parsed.residual_text:
            records = self.load_labels()

        return hybrid_search(
            query,
            all_media,
            records,
            hard_filter=self.config.hard_filter,
            thresholds=self.config.thresholds,
            now=now,
        )

    def load_media(self) -> list[MediaItem]:
        """Fetch the media snapshot, or an empty list if the provider fails."""
        try:
            return self.media_provider.all_media()
        except Exception as e:
            logger.warning(f"Media provider unavailable, treating as empty: {e}")
            return []

    def load_labels(self) -> list[LabelRecord]:
        """Fetch every label record, or an empty list if the store fails.

        Candidates are not prefiltered by substring: classification matches
        plural and synonym query words against stored labels, which a
        literal substring lookup would miss.
        """
        try:
            return self.label_store.all_records()
        except Exception as e:
            logger.warning(f"Label store unavailable, treating as empty: {e}")
            return []
