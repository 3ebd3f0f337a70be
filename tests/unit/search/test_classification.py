"""Tests for label thresholding, suppression and ranking."""

import pytest

from mediarank.core.config import DEFAULT_THRESHOLDS, ClassificationThresholds
from mediarank.core.types import LabelWithConfidence
from mediarank.search.classification import (
    STRONG_BUILDING_SIGNAL,
    STRONG_PERSON_SIGNAL,
    calculate_rank_score,
    check_negative_signals,
    filter_and_rank,
    filter_and_rank_media,
    find_matching_label,
    match_label_set,
    min_confidence_for_query,
)
from mediarank.search.labels import parse_labels_with_confidence

from tests.fakes import make_label_record, make_media_item


def rank_one(query: str, serialized: str, hard_filter: bool = True):
    """Rank a single record against a single media item."""
    return filter_and_rank(
        query,
        [make_label_record(1, serialized)],
        [make_media_item(1)],
        hard_filter=hard_filter,
    )


class TestMinConfidenceForQuery:
    """Tests for category thresholds."""

    @pytest.mark.parametrize(
        "query,expected",
        [("dog", 0.75), ("Cat", 0.75), ("food", 0.70), ("dessert", 0.70), ("beach", 0.65)],
    )
    def test_thresholds(self, query, expected):
        assert min_confidence_for_query(query) == expected


class TestFindMatchingLabel:
    """Tests for bidirectional substring label matching."""

    def test_label_contains_token(self):
        labels = parse_labels_with_confidence("hotdog:0.9")

        assert find_matching_label(labels, "dog").label == "hotdog"

    def test_token_contains_label(self):
        labels = parse_labels_with_confidence("dog:0.9")

        assert find_matching_label(labels, "dogs").label == "dog"

    def test_first_match_in_stored_order(self):
        labels = parse_labels_with_confidence("dog:0.6,dog breed:0.9")

        assert find_matching_label(labels, "dog").confidence == 0.6

    def test_empty_token(self):
        assert find_matching_label(parse_labels_with_confidence("dog:0.9"), "") is None


class TestMatchLabelSet:
    """Tests for match_label_set."""

    def test_returns_strongest_member(self):
        labels = parse_labels_with_confidence("cat:0.8,dog:0.9,sky:0.99")

        best = match_label_set(labels, frozenset({"cat", "dog"}), 0.75)

        assert best == LabelWithConfidence("dog", 0.9)

    def test_threshold_inclusive(self):
        labels = parse_labels_with_confidence("dog:0.75")

        assert match_label_set(labels, frozenset({"dog"}), 0.75) is not None
        assert match_label_set(labels, frozenset({"dog"}), 0.76) is None


class TestCheckNegativeSignals:
    """Tests for check_negative_signals."""

    def test_weak_animal_next_to_person(self):
        labels = parse_labels_with_confidence("person:0.90,cat:0.70")

        assert check_negative_signals("cat", 0.70, labels) == STRONG_PERSON_SIGNAL

    def test_weak_food_next_to_building(self):
        labels = parse_labels_with_confidence("building:0.88,food:0.72")

        assert check_negative_signals("food", 0.72, labels) == STRONG_BUILDING_SIGNAL

    def test_strong_match_never_suppressed(self):
        labels = parse_labels_with_confidence("person:0.99,cat:0.86")

        assert check_negative_signals("cat", 0.86, labels) is None

    def test_match_at_weak_threshold_not_suppressed(self):
        labels = parse_labels_with_confidence("person:0.99,cat:0.75")

        assert check_negative_signals("cat", 0.75, labels) is None

    def test_negative_must_be_strong(self):
        labels = parse_labels_with_confidence("person:0.84,cat:0.70")

        assert check_negative_signals("cat", 0.70, labels) is None

    def test_other_categories_unaffected(self):
        labels = parse_labels_with_confidence("person:0.99,beach:0.70")

        assert check_negative_signals("beach", 0.70, labels) is None


class TestCalculateRankScore:
    """Tests for calculate_rank_score."""

    def test_plain_confidence(self):
        assert calculate_rank_score(0.8, None, [], "beach") == pytest.approx(0.8)

    def test_suppression_halves(self):
        assert calculate_rank_score(0.7, STRONG_PERSON_SIGNAL, [], "beach") == pytest.approx(0.35)

    def test_supporting_animal_labels_bonus(self):
        siblings = parse_labels_with_confidence("cat:0.71,pet:0.71")

        assert calculate_rank_score(0.8, None, siblings, "dog") == pytest.approx(0.88)

    def test_support_requires_strictly_above(self):
        siblings = parse_labels_with_confidence("cat:0.70,pet:0.9")

        assert calculate_rank_score(0.8, None, siblings, "dog") == pytest.approx(0.8)

    def test_bonus_only_for_animal_queries(self):
        siblings = parse_labels_with_confidence("cat:0.9,pet:0.9")

        assert calculate_rank_score(0.8, None, siblings, "beach") == pytest.approx(0.8)

    @pytest.mark.parametrize("confidence", [0.0, 0.5, 0.95, 1.0])
    def test_bounded(self, confidence):
        siblings = parse_labels_with_confidence("cat:0.99,pet:0.99,animal:0.99")

        score = calculate_rank_score(confidence, None, siblings, "dog")

        assert 0.0 <= score <= 1.0


class TestFilterAndRank:
    """Tests for filter_and_rank."""

    def test_strong_dog_with_support_clamped(self):
        """Bonus on a 0.95 match is clamped to 1.0."""
        results = rank_one("dog", "dog:0.95,animal:0.88,pet:0.75")

        assert len(results) == 1
        assert results[0].matched_label == "dog"
        assert results[0].confidence == 0.95
        assert results[0].suppress_reason is None
        assert results[0].rank_score == 1.0

    def test_below_threshold_dropped(self):
        assert rank_one("cat", "person:0.90,cat:0.60") == []

    def test_suppressed_weak_match_dropped(self):
        assert rank_one("cat", "person:0.90,cat:0.70") == []

    def test_suppressed_weak_food_dropped(self):
        """Food passes its 0.70 threshold but is suppressed by a building."""
        assert rank_one("food", "building:0.88,food:0.72") == []

    def test_soft_filter_keeps_and_penalizes(self):
        results = rank_one("cat", "person:0.90,cat:0.70", hard_filter=False)

        assert len(results) == 1
        assert results[0].suppress_reason == STRONG_PERSON_SIGNAL
        assert results[0].rank_score == pytest.approx(0.35)

    def test_soft_filter_keeps_below_threshold(self):
        results = rank_one("cat", "cat:0.40", hard_filter=False)

        assert [r.rank_score for r in results] == [pytest.approx(0.40)]

    def test_general_threshold(self):
        assert len(rank_one("beach", "beach:0.66")) == 1
        assert rank_one("beach", "beach:0.64") == []

    def test_no_matching_label(self):
        assert rank_one("dog", "beach:0.99") == []

    def test_empty_query(self):
        assert rank_one("  ", "dog:0.99") == []

    def test_unknown_media_skipped(self):
        results = filter_and_rank(
            "dog",
            [make_label_record(1, "dog:0.9"), make_label_record(99, "dog:0.99")],
            [make_media_item(1)],
        )

        assert [r.media_item.id for r in results] == [1]

    def test_one_result_per_media_item(self):
        results = filter_and_rank(
            "dog",
            [make_label_record(1, "dog:0.9"), make_label_record(1, "dog:0.8")],
            [make_media_item(1)],
        )

        assert len(results) == 1
        assert results[0].confidence == 0.9

    def test_sorted_by_score(self):
        records = [
            make_label_record(1, "dog:0.80"),
            make_label_record(2, "dog:0.95"),
            make_label_record(3, "dog:0.85"),
        ]
        media = [make_media_item(i) for i in (1, 2, 3)]

        results = filter_and_rank("dog", records, media)

        assert [r.media_item.id for r in results] == [2, 3, 1]

    def test_query_case_insensitive(self):
        assert len(rank_one("DOG", "Dog:0.9")) == 1

    def test_custom_thresholds(self):
        thresholds = ClassificationThresholds(general_min_confidence=0.9)

        results = filter_and_rank(
            "beach",
            [make_label_record(1, "beach:0.8")],
            [make_media_item(1)],
            thresholds=thresholds,
        )

        assert results == []
        assert DEFAULT_THRESHOLDS.general_min_confidence == 0.65

    def test_media_only_variant(self):
        items = filter_and_rank_media(
            "dog", [make_label_record(1, "dog:0.9")], [make_media_item(1)]
        )

        assert [item.id for item in items] == [1]
