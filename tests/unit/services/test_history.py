"""Tests for RecentSearches."""

import json
from itertools import count
from pathlib import Path

import pytest

from mediarank.services import RecentSearches


@pytest.fixture
def clock():
    """Clock advancing one second per call."""
    ticks = count(1_700_000_000)
    return lambda: float(next(ticks))


class TestRecentSearches:
    """Tests for RecentSearches in memory."""

    def test_newest_first(self, clock):
        history = RecentSearches(clock=clock)
        history.add("dog")
        history.add("beach")

        assert history.queries() == ["beach", "dog"]

    def test_duplicate_moves_to_top(self, clock):
        history = RecentSearches(clock=clock)
        for query in ("dog", "beach", "DOG"):
            history.add(query)

        assert history.queries() == ["DOG", "beach"]

    def test_blank_ignored(self, clock):
        history = RecentSearches(clock=clock)
        history.add("   ")

        assert history.queries() == []

    def test_trimmed(self, clock):
        history = RecentSearches(clock=clock)
        history.add("  dog  ")

        assert history.queries() == ["dog"]

    def test_bounded(self, clock):
        history = RecentSearches(max_entries=3, clock=clock)
        for i in range(5):
            history.add(f"q{i}")

        assert history.queries() == ["q4", "q3", "q2"]

    def test_timestamp_millis(self, clock):
        history = RecentSearches(clock=clock)
        history.add("dog")

        assert history.entries()[0].timestamp == 1_700_000_000_000

    def test_remove(self, clock):
        history = RecentSearches(clock=clock)
        history.add("dog")
        history.add("beach")
        history.remove("Dog")

        assert history.queries() == ["beach"]

    def test_clear(self, clock):
        history = RecentSearches(clock=clock)
        history.add("dog")
        history.clear()

        assert history.queries() == []


class TestRecentSearchesPersistence:
    """Tests for RecentSearches backed by a JSON file."""

    def test_survives_reload(self, tmp_path: Path, clock):
        path = tmp_path / "nested" / "history.json"
        RecentSearches(path, clock=clock).add("dog")
        RecentSearches(path, clock=clock).add("beach")

        assert RecentSearches(path).queries() == ["beach", "dog"]

    def test_file_format(self, tmp_path: Path, clock):
        path = tmp_path / "history.json"
        RecentSearches(path, clock=clock).add("dog")

        assert json.loads(path.read_text()) == [
            {"query": "dog", "timestamp": 1_700_000_000_000}
        ]

    def test_sorted_on_load(self, tmp_path: Path):
        path = tmp_path / "history.json"
        path.write_text(
            json.dumps([{"query": "old", "timestamp": 1}, {"query": "new", "timestamp": 2}])
        )

        assert RecentSearches(path).queries() == ["new", "old"]

    def test_corrupt_file_is_empty(self, tmp_path: Path, clock):
        path = tmp_path / "history.json"
        path.write_text("{broken")

        history = RecentSearches(path, clock=clock)
        assert history.queries() == []

        history.add("dog")
        assert RecentSearches(path).queries() == ["dog"]
