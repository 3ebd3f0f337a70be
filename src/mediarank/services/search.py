"""Search service and interactive debounce."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import TYPE_CHECKING, Callable

from loguru import logger

from ..core.types import LabelWithConfidence, RankedResult, SearchResult
from ..search.classification import filter_and_rank
from ..search.labels import parse_labels_with_confidence
from ..search.pipeline import MediaSearchPipeline, SearchPipelineConfig

if TYPE_CHECKING:
    from .container import ServiceContainer


class SearchService:
    """Service for media search operations.

    Provides:
    - Hybrid search (metadata + ML labels) over the configured collaborators
    - Label-only ranking for a single term
    - Label inspection for one media item

    Every operation degrades to an empty result when a collaborator fails.

    Example:

        services = ServiceContainer(config)
        result = services.search.search("beach photos 2023")
        ranked = services.search.rank_labels("dog")
    """

    def __init__(self, container: "ServiceContainer"):
        """Initialize SearchService.

        Args:
            container: Service container with shared collaborators.
        """
        self._container = container
        self._pipeline = MediaSearchPipeline(
            container.label_store,
            container.media_provider,
            SearchPipelineConfig(
                hard_filter=container.config.search.hard_filter,
                thresholds=container.config.thresholds,
            ),
        )

    def search(self, query: str, now: datetime | None = None) -> SearchResult:
        """Execute hybrid search.

        Args:
            query: Free-text query.
            now: Reference time for relative date filters.

        Returns:
            SearchResult with album, media and label matches.
        """
        logger.debug(f"Search: query={query!r}")
        result = self._pipeline.search(query, now=now)
        logger.debug(
            f"Search returned {len(result.matched_albums)} albums, "
            f"{len(result.matched_media)} media"
        )
        return result

    def rank_labels(self, term: str, hard_filter: bool | None = None) -> list[RankedResult]:
        """Rank media by ML labels matching a single term.

        Args:
            term: Label term, e.g. "dog".
            hard_filter: Override the configured hard filter setting.

        Returns:
            Ranked label matches, best first.
        """
        if hard_filter is None:
            hard_filter = self._container.config.search.hard_filter

        records = self._pipeline.load_labels()
        if not records:
            return []
        return filter_and_rank(
            term,
            records,
            self._pipeline.load_media(),
            hard_filter=hard_filter,
            thresholds=self._container.config.thresholds,
        )

    def describe_media(self, media_id: int) -> list[LabelWithConfidence]:
        """Decoded labels stored for one media item, strongest first."""
        try:
            record = self._container.label_store.labels_for_media(media_id)
        except Exception as e:
            logger.warning(f"Label store unavailable, treating as empty: {e}")
            return []

        if record is None:
            return []
        labels = parse_labels_with_confidence(record.labels_with_confidence)
        return sorted(labels, key=lambda item: item.confidence, reverse=True)


class DebouncedSearch:
    """Debounced, latest-query-wins search for interactive input.

    Each `submit` cancels any pending search and schedules a new one after
    the debounce delay. A result is only published if no later query has
    been submitted in the meantime, so a slow search for an old query can
    never overwrite a newer result. Blank queries publish an empty result
    immediately.

    Example:

        debounced = DebouncedSearch(services.search, on_result=render)
        for text in ("d", "do", "dog"):
            debounced.submit(text)
        await debounced.wait()  # only "dog" is searched and rendered
    """

    def __init__(
        self,
        service: SearchService,
        delay: float = 0.3,
        on_result: Callable[[SearchResult], None] | None = None,
    ):
        """Initialize the debouncer.

        Args:
            service: SearchService to run queries through.
            delay: Debounce delay in seconds.
            on_result: Called with each published result.
        """
        self._service = service
        self._delay = delay
        self._on_result = on_result
        self._generation = 0
        self._task: asyncio.Task | None = None
        self.latest: SearchResult = SearchResult.empty()

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, query: str) -> asyncio.Task | None:
        """Schedule a search for query, superseding any pending one.

        Must be called from a running event loop.

        Returns:
            The scheduled task, or None for blank queries.
        """
        self.cancel()
        self._generation += 1

        if not query.strip():
            self._publish(SearchResult.empty())
            return None

        self._task = asyncio.get_running_loop().create_task(
            self._run(self._generation, query)
        )
        return self._task

    def cancel(self) -> None:
        """Cancel the pending search, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> SearchResult:
        """Wait for the pending search (if any) and return the latest result.

        A superseded or cancelled search ends the wait quietly. Cancelling the
        caller still raises CancelledError in the caller.
        """
        if self._task is not None:
            await asyncio.wait({self._task})
        return self.latest

    async def _run(self, generation: int, query: str) -> None:
        await asyncio.sleep(self._delay)
        result = await asyncio.to_thread(self._service.search, query)

        if generation != self._generation:
            logger.debug(f"Discarding stale result for {query!r}")
            return
        self._publish(result)

    def _publish(self, result: SearchResult) -> None:
        self.latest = result
        if self._on_result is not None:
            self._on_result(result)
