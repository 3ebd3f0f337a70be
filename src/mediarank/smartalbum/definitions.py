"""Built-in smart album definitions."""

from enum import Enum

# Distinguishes smart album ids from folder-backed album ids
SMART_PREFIX = "smart_"

MIN_ITEMS_THRESHOLD = 5


class SmartAlbumType(Enum):
    """Smart album definitions with their label rules.

    Declaration order is the order albums are listed in.
    """

    ANIMALS = (
        f"{SMART_PREFIX}animals",
        "Animals",
        "🐾",
        frozenset(
            {"cat", "dog", "animal", "bird", "pet", "mammal", "wildlife", "feline", "canine"}
        ),
        0.75,
        frozenset({"person", "people", "human", "portrait"}),
    )
    FOOD = (
        f"{SMART_PREFIX}food",
        "Food",
        "🍽️",
        frozenset(
            {"food", "dish", "meal", "cuisine", "dessert", "drink", "fruit", "vegetable"}
        ),
        0.70,
        frozenset({"building", "architecture", "house"}),
    )
    NATURE = (
        f"{SMART_PREFIX}nature",
        "Nature",
        "🌿",
        frozenset(
            {
                "mountain",
                "beach",
                "forest",
                "sky",
                "sunset",
                "landscape",
                "nature",
                "outdoor",
                "tree",
                "water",
                "ocean",
            }
        ),
        0.70,
        frozenset(),
    )
    DOCUMENTS = (
        f"{SMART_PREFIX}documents",
        "Documents",
        "📄",
        frozenset({"document", "text", "paper"}),
        0.65,
        frozenset(),
    )

    def __init__(
        self,
        album_id: str,
        display_name: str,
        icon: str,
        labels: frozenset[str],
        min_confidence: float,
        negative_labels: frozenset[str],
    ):
        self.id = album_id
        self.display_name = display_name
        self.icon = icon
        self.labels = labels
        self.min_confidence = min_confidence
        self.negative_labels = negative_labels

    @property
    def title(self) -> str:
        """Display name decorated with the album icon."""
        return f"{self.icon} {self.display_name}"

    @classmethod
    def from_id(cls, album_id: str) -> "SmartAlbumType | None":
        for album_type in cls:
            if album_type.id == album_id:
                return album_type
        return None


def is_smart_album(album_id: str) -> bool:
    """Check if an album id names a smart album rather than a folder."""
    return album_id.startswith(SMART_PREFIX)
