"""Search commands for the mediarank CLI.

- `mediarank search`: metadata + label search with album matches
- `mediarank rank`: label-only ranking for one term
- `mediarank labels`: decoded labels of one media item
- `mediarank shortcuts`: the fixed quick filters and date shortcuts
"""

from datetime import datetime

from ...core.config import Config
from ...core.types import MediaItem, RankedResult
from ...search.query import DATE_SHORTCUTS, QUICK_FILTERS, parse_query
from ...services import ServiceContainer


def add_search_arguments(parser) -> None:
    """Add arguments for search commands.

    Args:
        parser: Argument parser for the command.
    """
    parser.add_argument("query", help="Search query")
    parser.add_argument(
        "-l",
        "--limit",
        type=int,
        default=20,
        help="Maximum media results to print (default: 20)",
    )
    parser.add_argument(
        "--soft",
        action="store_true",
        help="Rank weak label matches lower instead of dropping them",
    )


def handle_search(args, config: Config) -> None:
    """Handle search command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    if args.soft:
        config.search.hard_filter = False
    services = ServiceContainer(config)

    parsed = parse_query(args.query)
    print(f"\nQuery: {args.query!r}")
    print(
        f"   Filters: date={_describe(parsed.date_filter)}, "
        f"type={_describe(parsed.type_filter)}, size={_describe(parsed.size_filter)}"
    )
    print(f"   Residual: {parsed.residual_text!r}")

    result = services.search.search(args.query)
    if not args.no_history:
        services.history.add(args.query)

    print(f"\nAlbum Matches ({len(result.matched_albums)})")
    print("=" * 70)
    if not result.matched_albums:
        print("No albums found.")
    for album in result.matched_albums:
        print(f"- {album.album_name} ({len(album.items)} items)")

    ranked = {r.media_item.id: r for r in result.label_matches}
    _print_media(result.matched_media[: args.limit], "Media", ranked)


def handle_rank(args, config: Config) -> None:
    """Handle rank command (labels only)."""
    services = ServiceContainer(config)
    results = services.search.rank_labels(
        args.query, hard_filter=False if args.soft else None
    )
    _print_ranked(results[: args.limit])


def handle_labels(args, config: Config) -> None:
    """Handle labels command."""
    services = ServiceContainer(config)
    labels = services.search.describe_media(args.media_id)

    print(f"\nLabels for media {args.media_id} ({len(labels)})")
    print("=" * 70)
    if not labels:
        print("No labels found.")
    for item in labels:
        print(f"{item.label:<30} {item.confidence:.2f}")


def handle_shortcuts(args, config: Config) -> None:
    """Handle shortcuts command."""
    print("\nQuick Filters")
    print("=" * 70)
    for label, _ in QUICK_FILTERS:
        print(f"- {label}")

    print("\nDate Shortcuts")
    print("=" * 70)
    for label, _ in DATE_SHORTCUTS:
        print(f"- {label}")


def _describe(value) -> str:
    if value is None:
        return "-"
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def _print_media(
    items: list[MediaItem],
    title: str,
    ranked: dict[int, RankedResult] | None = None,
) -> None:
    """Print media items in a formatted way.

    Args:
        items: Media items to print.
        title: Title for the results section.
        ranked: Label matches by media id, to show why an item matched.
    """
    print(f"\n{title} Results ({len(items)})")
    print("=" * 70)

    if not items:
        print("No results found.")
        return

    ranked = ranked or {}
    for rank, item in enumerate(items, 1):
        added = datetime.fromtimestamp(item.date_added).strftime("%Y-%m-%d")
        kind = "video" if item.is_video else "photo"
        print(f"{rank}. {item.display_name} [{kind}, {added}, {item.size} bytes]")
        print(f"   Album: {item.bucket_name}")
        if item.id in ranked:
            match = ranked[item.id]
            print(f"   Label: {match.matched_label} ({match.confidence:.2f})")


def _print_ranked(results: list[RankedResult]) -> None:
    """Print label ranking results."""
    print(f"\nLabel Ranking Results ({len(results)})")
    print("=" * 70)

    if not results:
        print("No results found.")
        return

    for rank, result in enumerate(results, 1):
        print(f"{rank}. {result.media_item.display_name} [{result.rank_score:.3f}]")
        print(f"   Label: {result.matched_label} ({result.confidence:.2f})")
        if result.suppress_reason:
            print(f"   Suppressed: {result.suppress_reason}")
