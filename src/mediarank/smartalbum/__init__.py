"""Virtual albums computed from ML labels."""

from .definitions import MIN_ITEMS_THRESHOLD, SMART_PREFIX, SmartAlbumType, is_smart_album
from .generator import enumerate_smart_albums, find_matching_records, materialize_smart_album

__all__ = [
    "MIN_ITEMS_THRESHOLD",
    "SMART_PREFIX",
    "SmartAlbumType",
    "is_smart_album",
    "enumerate_smart_albums",
    "find_matching_records",
    "materialize_smart_album",
]
