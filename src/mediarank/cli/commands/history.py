"""Recent search history command for the mediarank CLI."""

from ...core.config import Config
from ...services import ServiceContainer


def handle_history(args, config: Config) -> None:
    """Handle history command."""
    history = ServiceContainer(config).history

    if args.clear:
        history.clear()
        print("Cleared recent searches.")
        return

    if args.remove:
        history.remove(args.remove)
        print(f"Removed {args.remove!r} from recent searches.")
        return

    queries = history.queries()
    print(f"\nRecent Searches ({len(queries)})")
    print("=" * 70)
    if not queries:
        print("No recent searches.")
    for query in queries:
        print(f"- {query}")
