"""Custom exceptions for mediarank."""


class MediaRankError(Exception):
    """Base exception for all mediarank errors."""

    pass


class ConfigError(MediaRankError):
    """Configuration could not be loaded."""

    pass


class CollaboratorError(MediaRankError):
    """An external collaborator (label store, media provider) failed."""

    pass


class LabelStoreError(CollaboratorError):
    """Label store could not be read."""

    pass


class MediaProviderError(CollaboratorError):
    """Media provider could not be read."""

    pass


class SmartAlbumNotFoundError(MediaRankError):
    """Smart album id does not name a known definition."""

    def __init__(self, album_id: str):
        """Initialize exception with the unknown album id.

        Args:
            album_id: The id that failed to resolve.
        """
        self.album_id = album_id
        super().__init__(f"Smart album not found: {album_id}")
