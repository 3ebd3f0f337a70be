"""Smart album commands for the mediarank CLI."""

from ...core.config import Config
from ...core.exceptions import SmartAlbumNotFoundError
from ...services import ServiceContainer
from ...smartalbum import SmartAlbumType


def handle_albums(args, config: Config) -> None:
    """Handle albums command."""
    services = ServiceContainer(config)
    albums = services.albums.list_albums()

    print(f"\nSmart Albums ({len(albums)})")
    print("=" * 70)
    if not albums:
        print(
            "No smart albums yet (each needs at least "
            f"{config.smart_albums.min_items_threshold} matching items)."
        )
    for album in albums:
        print(f"{album.name:<20} {album.item_count:>6} items   id={album.id}")


def handle_album(args, config: Config) -> None:
    """Handle album command.

    Raises:
        SmartAlbumNotFoundError: If the id is not a known smart album.
    """
    album_type = SmartAlbumType.from_id(args.album_id)
    if album_type is None:
        raise SmartAlbumNotFoundError(args.album_id)

    services = ServiceContainer(config)
    items = services.albums.album_media(args.album_id)

    print(f"\n{album_type.title} ({len(items)})")
    print("=" * 70)
    if not items:
        print("No items.")
    for item in items:
        print(f"- {item.display_name} ({item.bucket_name})")
