"""Tests for smart album generation."""

import pytest

from mediarank.core.config import ClassificationThresholds
from mediarank.smartalbum import (
    SmartAlbumType,
    enumerate_smart_albums,
    find_matching_records,
    is_smart_album,
    materialize_smart_album,
)

from tests.fakes import make_label_record, make_media_item


def dogs(count: int, start: int = 1, confidence: float = 0.80):
    return [make_label_record(i, f"dog:{confidence:.2f}") for i in range(start, start + count)]


class TestSmartAlbumType:
    """Tests for smart album definitions."""

    def test_ids(self):
        assert [t.id for t in SmartAlbumType] == [
            "smart_animals",
            "smart_food",
            "smart_nature",
            "smart_documents",
        ]

    def test_from_id(self):
        assert SmartAlbumType.from_id("smart_food") is SmartAlbumType.FOOD
        assert SmartAlbumType.from_id("smart_pets") is None

    def test_title(self):
        assert SmartAlbumType.ANIMALS.title == "🐾 Animals"

    def test_is_smart_album(self):
        assert is_smart_album("smart_animals")
        assert not is_smart_album("bucket_123")


class TestFindMatchingRecords:
    """Tests for find_matching_records."""

    def test_exact_label_membership(self):
        """Substrings of album labels do not count."""
        records = [make_label_record(1, "hotdog:0.95"), make_label_record(2, "dog:0.95")]

        matches = find_matching_records(records, SmartAlbumType.ANIMALS)

        assert [r.media_id for r, _ in matches] == [2]

    def test_threshold(self):
        records = [make_label_record(1, "dog:0.74"), make_label_record(2, "dog:0.75")]

        matches = find_matching_records(records, SmartAlbumType.ANIMALS)

        assert [r.media_id for r, _ in matches] == [2]

    def test_best_confidence_reported(self):
        matches = find_matching_records(
            [make_label_record(1, "pet:0.80,cat:0.91")], SmartAlbumType.ANIMALS
        )

        assert matches[0][1] == 0.91

    @pytest.mark.parametrize(
        "serialized,included",
        [
            ("dog:0.9,person:0.86", False),
            ("dog:0.9,person:0.85", False),
            ("dog:0.9,person:0.84", True),
            ("dog:0.9,face:0.99", True),
        ],
    )
    def test_strong_person_excludes_animals(self, serialized, included):
        matches = find_matching_records([make_label_record(1, serialized)], SmartAlbumType.ANIMALS)

        assert bool(matches) is included

    def test_configured_strong_signal_threshold(self):
        records = [make_label_record(1, "dog:0.9,person:0.9")]
        thresholds = ClassificationThresholds(strong_signal_threshold=0.95)

        assert find_matching_records(records, SmartAlbumType.ANIMALS) == []
        assert len(find_matching_records(records, SmartAlbumType.ANIMALS, thresholds)) == 1

    def test_strong_building_excludes_food(self):
        records = [
            make_label_record(1, "food:0.9,building:0.9"),
            make_label_record(2, "food:0.9,building:0.5"),
        ]

        matches = find_matching_records(records, SmartAlbumType.FOOD)

        assert [r.media_id for r, _ in matches] == [2]

    def test_nature_has_no_negatives(self):
        matches = find_matching_records(
            [make_label_record(1, "beach:0.9,person:0.99,building:0.99")],
            SmartAlbumType.NATURE,
        )

        assert len(matches) == 1

    def test_duplicate_media_ids_counted_once(self):
        records = [make_label_record(1, "dog:0.9"), make_label_record(1, "cat:0.9")]

        assert len(find_matching_records(records, SmartAlbumType.ANIMALS)) == 1


class TestEnumerateSmartAlbums:
    """Tests for enumerate_smart_albums."""

    def test_five_items_visible(self):
        albums = enumerate_smart_albums(dogs(5))

        assert len(albums) == 1
        assert albums[0].id == "smart_animals"
        assert albums[0].item_count == 5
        assert albums[0].name == "🐾 Animals"
        assert albums[0].display_name == "Animals"

    def test_four_items_hidden(self):
        assert enumerate_smart_albums(dogs(4)) == []

    def test_empty_corpus(self):
        assert enumerate_smart_albums([]) == []

    def test_custom_min_items(self):
        assert len(enumerate_smart_albums(dogs(2), min_items=2)) == 1

    def test_cover_is_most_confident(self):
        records = dogs(5) + [make_label_record(9, "cat:0.97")]

        albums = enumerate_smart_albums(records)

        assert albums[0].cover_media_id == 9

    def test_definition_order_and_independent_membership(self):
        """An item can belong to more than one album."""
        records = [make_label_record(i, "dog:0.9,food:0.9,document:0.9") for i in range(1, 6)]

        albums = enumerate_smart_albums(records)

        assert [a.id for a in albums] == ["smart_animals", "smart_food", "smart_documents"]
        assert all(a.item_count == 5 for a in albums)


class TestMaterializeSmartAlbum:
    """Tests for materialize_smart_album."""

    def test_returns_member_media(self):
        records = [
            make_label_record(1, "dog:0.9"),
            make_label_record(2, "beach:0.9"),
            make_label_record(3, "cat:0.8"),
        ]
        media = [make_media_item(i) for i in (1, 2, 3)]

        members = materialize_smart_album("smart_animals", records, media)

        assert [item.id for item in members] == [1, 3]

    def test_skips_missing_media(self):
        records = [make_label_record(1, "dog:0.9"), make_label_record(2, "dog:0.9")]

        members = materialize_smart_album("smart_animals", records, [make_media_item(2)])

        assert [item.id for item in members] == [2]

    def test_unknown_album(self):
        records = [make_label_record(1, "dog:0.9")]

        assert materialize_smart_album("smart_pets", records, [make_media_item(1)]) == []
