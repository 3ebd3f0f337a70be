"""Query parsing, matching and ranking for mediarank."""

from .classification import (
    filter_and_rank,
    filter_and_rank_media,
    min_confidence_for_query,
)
from .fusion import merge_results
from .labels import encode_labels, parse_labels_with_confidence
from .lexical import search
from .pipeline import MediaSearchPipeline, SearchPipelineConfig, hybrid_search
from .ports import LabelStore, MediaProvider
from .query import DATE_SHORTCUTS, QUICK_FILTERS, parse_query

__all__ = [
    # Parsing
    "parse_query",
    "QUICK_FILTERS",
    "DATE_SHORTCUTS",
    # Matching
    "search",
    "filter_and_rank",
    "filter_and_rank_media",
    "min_confidence_for_query",
    "merge_results",
    "hybrid_search",
    # Label codec
    "parse_labels_with_confidence",
    "encode_labels",
    # Pipeline
    "MediaSearchPipeline",
    "SearchPipelineConfig",
    "LabelStore",
    "MediaProvider",
]
