"""CLI entry point for mediarank."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from loguru import logger

from .. import __version__
from ..core.config import Config
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mediarank",
        description="Media search and smart albums over ML image labels",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("--config", help="YAML config file (default: $MEDIARANK_CONFIG)")
    parser.add_argument("--media", help="Media corpus file (JSON/YAML)")
    parser.add_argument("--labels", help="Label corpus file (JSON/YAML)")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    # Search commands
    search_parser = subparsers.add_parser("search", help="Search media by metadata and labels")
    commands.add_search_arguments(search_parser)
    search_parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not record the query in recent searches",
    )

    rank_parser = subparsers.add_parser("rank", help="Rank media by ML labels only")
    commands.add_search_arguments(rank_parser)

    labels_parser = subparsers.add_parser("labels", help="Show labels for one media item")
    labels_parser.add_argument("media_id", type=int, help="Media id")

    subparsers.add_parser("shortcuts", help="Show quick filters and date shortcuts")

    # Smart album commands
    subparsers.add_parser("albums", help="List smart albums")

    album_parser = subparsers.add_parser("album", help="List members of a smart album")
    album_parser.add_argument("album_id", help="Smart album id, e.g. smart_animals")

    # History
    history_parser = subparsers.add_parser("history", help="Show or edit recent searches")
    history_group = history_parser.add_mutually_exclusive_group()
    history_group.add_argument("--remove", metavar="QUERY", help="Forget one query")
    history_group.add_argument("--clear", action="store_true", help="Forget all queries")

    return parser


def configure_logging(verbose: bool) -> None:
    """Route loguru output to stderr at the requested level."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def load_config(args: argparse.Namespace) -> Config:
    """Build config from file/env, then apply command-line paths."""
    config = Config.from_env_or_file(args.config)
    if args.media:
        config.media_path = Path(args.media)
    if args.labels:
        config.labels_path = Path(args.labels)
    return config


def main() -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)

    try:
        config = load_config(args)

        if args.command == "search":
            commands.handle_search(args, config)
        elif args.command == "rank":
            commands.handle_rank(args, config)
        elif args.command == "labels":
            commands.handle_labels(args, config)
        elif args.command == "shortcuts":
            commands.handle_shortcuts(args, config)
        elif args.command == "albums":
            commands.handle_albums(args, config)
        elif args.command == "album":
            commands.handle_album(args, config)
        elif args.command == "history":
            commands.handle_history(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
