"""Recent search history.

Keeps the last few submitted queries, newest first. A query that is
submitted again (compared case-insensitively) moves back to the top instead
of appearing twice. History is persisted as JSON when a path is given;
an unreadable or corrupt file is treated as empty history.
"""

from __future__ import annotations

import json
import time
from dataclasses import asdict
from pathlib import Path
from typing import Callable

from loguru import logger

from ..core.types import SearchHistoryEntry

MAX_RECENT_SEARCHES = 10


class RecentSearches:
    """Bounded, deduplicated list of recent queries."""

    def __init__(
        self,
        path: Path | None = None,
        max_entries: int = MAX_RECENT_SEARCHES,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize history.

        Args:
            path: JSON file to persist to; None keeps history in memory only.
            max_entries: Maximum number of queries kept.
            clock: Returns current time in epoch seconds.
        """
        self.path = path
        self.max_entries = max_entries
        self._clock = clock
        self._entries: list[SearchHistoryEntry] | None = None

    def queries(self) -> list[str]:
        """Recent queries, newest first."""
        return [entry.query for entry in self._load()]

    def entries(self) -> list[SearchHistoryEntry]:
        return list(self._load())

    def add(self, query: str) -> None:
        """Record a submitted query; blank queries are ignored."""
        query = query.strip()
        if not query:
            return

        entries = [e for e in self._load() if e.query.lower() != query.lower()]
        entries.insert(0, SearchHistoryEntry(query, int(self._clock() * 1000)))
        self._save(entries[: self.max_entries])

    def remove(self, query: str) -> None:
        """Forget one query (case-insensitive)."""
        self._save([e for e in self._load() if e.query.lower() != query.strip().lower()])

    def clear(self) -> None:
        self._save([])

    def _load(self) -> list[SearchHistoryEntry]:
        if self._entries is not None:
            return self._entries

        self._entries = []
        if self.path is None or not self.path.exists():
            return self._entries

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            entries = [SearchHistoryEntry(str(d["query"]), int(d["timestamp"])) for d in data]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable search history {self.path}: {e}")
            return self._entries

        entries.sort(key=lambda e: e.timestamp, reverse=True)
        self._entries = entries[: self.max_entries]
        return self._entries

    def _save(self, entries: list[SearchHistoryEntry]) -> None:
        self._entries = entries
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([asdict(e) for e in entries], indent=2), encoding="utf-8"
        )
