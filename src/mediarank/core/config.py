"""Configuration management for mediarank."""

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError


@dataclass(frozen=True)
class ClassificationThresholds:
    """Confidence thresholds and label sets used by label ranking.

    Frozen so a single shared instance can act as the constant table.
    """

    # Minimum confidence for animal-related searches (pets, wildlife)
    animal_min_confidence: float = 0.75
    # Minimum confidence for object searches (food, drinks)
    object_min_confidence: float = 0.70
    # Minimum confidence for everything else
    general_min_confidence: float = 0.65
    # Matches at or above this are never suppressed; negatives at or above it count
    strong_signal_threshold: float = 0.85
    # Matches below this can be suppressed by strong negatives
    weak_match_threshold: float = 0.75
    suppression_penalty: float = 0.5
    support_bonus: float = 1.1
    support_min_confidence: float = 0.7
    support_min_count: int = 2

    animal_labels: frozenset[str] = frozenset(
        {
            "cat",
            "dog",
            "bird",
            "animal",
            "pet",
            "mammal",
            "wildlife",
            "feline",
            "canine",
            "fish",
            "insect",
        }
    )
    food_labels: frozenset[str] = frozenset(
        {
            "food",
            "dish",
            "meal",
            "cuisine",
            "dessert",
            "drink",
            "fruit",
            "vegetable",
            "snack",
        }
    )
    person_labels: frozenset[str] = frozenset(
        {"person", "people", "human", "face", "portrait"}
    )
    building_labels: frozenset[str] = frozenset(
        {"building", "architecture", "house", "structure"}
    )


DEFAULT_THRESHOLDS = ClassificationThresholds()


@dataclass
class SearchConfig:
    """Interactive search configuration."""

    debounce_seconds: float = 0.3
    hard_filter: bool = True
    max_recent_searches: int = 10


@dataclass
class SmartAlbumConfig:
    """Smart album configuration."""

    min_items_threshold: int = 5


def _default_history_path() -> Path:
    """Get default recent-search history path."""
    cache_dir = Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))
    return cache_dir / "mediarank" / "recent_searches.json"


@dataclass
class Config:
    """Main application configuration."""

    media_path: Path | None = None
    labels_path: Path | None = None
    history_path: Path = field(default_factory=_default_history_path)
    search: SearchConfig = field(default_factory=SearchConfig)
    smart_albums: SmartAlbumConfig = field(default_factory=SmartAlbumConfig)
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls()._apply_env()

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        """Load configuration from a YAML file, then apply environment overrides.

        Args:
            path: Path to a YAML file.

        Returns:
            Config with file values and environment overrides applied.

        Raises:
            ConfigError: If the file cannot be read or parsed, or a value has
                the wrong type.
        """
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot load config {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

        config = cls()
        for key in ("media_path", "labels_path", "history_path"):
            if key in data:
                setattr(config, key, Path(data[key]).expanduser())

        if "search" in data:
            config.search = SearchConfig(**_section(SearchConfig, data["search"], "search"))
        if "smart_albums" in data:
            config.smart_albums = SmartAlbumConfig(
                **_section(SmartAlbumConfig, data["smart_albums"], "smart_albums")
            )
        if "thresholds" in data:
            config.thresholds = replace(
                DEFAULT_THRESHOLDS,
                **_section(ClassificationThresholds, data["thresholds"], "thresholds"),
            )

        return config._apply_env()

    @classmethod
    def from_env_or_file(cls, path: Path | str | None = None) -> "Config":
        """Load from an explicit path, MEDIARANK_CONFIG, or the environment alone."""
        path = path or os.environ.get("MEDIARANK_CONFIG")
        if path:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_env(self) -> "Config":
        if path := os.environ.get("MEDIARANK_MEDIA"):
            self.media_path = Path(path)
        if path := os.environ.get("MEDIARANK_LABELS"):
            self.labels_path = Path(path)
        if path := os.environ.get("MEDIARANK_HISTORY"):
            self.history_path = Path(path)

        if debounce := os.environ.get("MEDIARANK_DEBOUNCE_MS"):
            try:
                self.search.debounce_seconds = int(debounce) / 1000
            except ValueError as e:
                raise ConfigError(f"Invalid MEDIARANK_DEBOUNCE_MS: {debounce!r}") from e

        if hard := os.environ.get("MEDIARANK_HARD_FILTER"):
            self.search.hard_filter = _parse_bool(hard)

        if min_items := os.environ.get("MEDIARANK_MIN_ALBUM_ITEMS"):
            try:
                self.smart_albums.min_items_threshold = int(min_items)
            except ValueError as e:
                raise ConfigError(
                    f"Invalid MEDIARANK_MIN_ALBUM_ITEMS: {min_items!r}"
                ) from e

        return self


def _parse_bool(value: str) -> bool:
    return value.strip().lower() not in ("0", "false", "no", "off")


def _section(cls: type, data: Any, section: str) -> dict[str, Any]:
    """Keep keys that are fields of the given dataclass, coerced to the field type.

    Raises:
        ConfigError: If the section is not a mapping or a value cannot be coerced.
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Config section {section!r} must be a mapping")

    types = {f.name: f.type for f in fields(cls)}
    values = {}
    for name, value in data.items():
        if name not in types:
            continue
        try:
            values[name] = _coerce(types[name], value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid {section}.{name}: {value!r}") from e
    return values


def _coerce(field_type: Any, value: Any) -> Any:
    if field_type is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return _parse_bool(value)
        raise TypeError(f"expected a boolean, got {type(value).__name__}")

    if field_type in (int, float):
        if isinstance(value, bool):
            raise TypeError("expected a number, got a boolean")
        return field_type(value)

    # Label sets
    if isinstance(value, str) or not isinstance(value, (list, tuple, set)):
        raise TypeError(f"expected a list of labels, got {type(value).__name__}")
    return frozenset(str(v).lower() for v in value)
