"""
Application entry point for VerseKeeper.

Console front end over the verse cache: today's verse, reference search,
category browsing, favorites and cache maintenance.

Author: Kasim Lyee <lyee@codewithlyee.com>
Organization: Softlite Inc.
License: MIT

Usage:
    python -m verse_keeper daily
    python -m verse_keeper search "John 3:16"
    verse-keeper category hope --index 3
"""

import argparse
import asyncio
import sys
import traceback
from typing import List, Optional

from .api.api_exceptions import BibleAPIError
from .api.bible_api_client import BibleAPIClient
from .config.settings import AVAILABLE_TRANSLATIONS, Settings
from .core.category_browser import CategoryBrowser
from .core.favorites import FavoritesStore
from .core.recent_searches import RecentSearches
from .core.search import SearchService
from .core.verse_cache_service import VerseCacheService
from .models.category import ALL_CATEGORIES, get_category
from .models.verse import VerseResponse
from .utils.logger import configure_logging, get_logger
from .version import __version__

logger = get_logger(__name__)


def setup_exception_handler() -> None:
    """
    Configure global exception handler for unhandled exceptions.

    Anything escaping ``main`` is logged with its traceback and reported on
    stderr instead of crashing silently.
    """
    def exception_handler(exc_type, exc_value, exc_traceback):
        """Handle uncaught exceptions."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical(
            "Unhandled exception occurred",
            exc_info=(exc_type, exc_value, exc_traceback)
        )
        error_msg = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
        print(f"CRITICAL ERROR: {error_msg}", file=sys.stderr)

    sys.excepthook = exception_handler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="verse-keeper",
        description="Daily scripture with a local verse cache.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-t", "--translation",
        choices=sorted(AVAILABLE_TRANSLATIONS),
        help="Translation for this run (default: saved preference)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("daily", help="Show today's verse")
    commands.add_parser("random", help="Show a random verse (not cached)")

    search = commands.add_parser("search", help="Look up a reference")
    search.add_argument("reference", nargs="+", help='e.g. "John 3:16"')

    commands.add_parser("recent", help="List recent searches")
    commands.add_parser("categories", help="List verse categories")

    category = commands.add_parser("category", help="Show a verse from a category")
    category.add_argument("category_id")
    category.add_argument("--index", type=int, default=1, help="1-based position")
    category.add_argument("--shuffle", action="store_true", help="Pick a random verse")

    favorite = commands.add_parser("favorite", help="Toggle a reference as favorite")
    favorite.add_argument("reference", nargs="+")
    commands.add_parser("favorites", help="List favorites")

    translation = commands.add_parser("set-translation", help="Save the preferred translation")
    translation.add_argument("translation_id", choices=sorted(AVAILABLE_TRANSLATIONS))

    commands.add_parser("purge", help="Remove expired cache entries")
    commands.add_parser("clear-cache", help="Remove all cached verses")
    commands.add_parser("stats", help="Show cache statistics")
    return parser


def format_passage(response: VerseResponse, show_verse_numbers: bool = True) -> str:
    """Render a passage for the console."""
    lines = [response.reference, ""]
    if show_verse_numbers and response.verses:
        lines.extend(f"{line.verse} {line.text.strip()}" for line in response.verses)
    else:
        lines.append(response.trimmed_text)
    lines.extend(["", f"({response.translation_name})"])
    return "\n".join(lines)


async def run_command(args: argparse.Namespace, settings: Settings) -> int:
    """Execute one parsed command. Returns the exit code."""
    translation = args.translation or settings.selected_translation

    if args.command == "set-translation":
        settings.update_translation(args.translation_id)
        print(f"Translation set to {settings.translation_name}")
        return 0

    if args.command == "categories":
        for category in ALL_CATEGORIES:
            print(f"{category.id:<12} {category.name:<16} {category.description}")
        return 0

    async with BibleAPIClient(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
        max_attempts=settings.max_retries,
    ) as client:
        service = VerseCacheService.from_settings(settings, client)
        backend = service.store.backend
        try:
            if args.command == "daily":
                try:
                    response = await service.get_todays_verse(translation)
                except BibleAPIError as e:
                    stale = service.daily.get_stale_daily_verse()
                    if stale is None:
                        raise
                    logger.warning(f"Showing previous daily verse: {e.user_message}")
                    response = stale
                print(format_passage(response, settings.show_verse_numbers))

            elif args.command == "random":
                response = await client.fetch_random_verse(translation)
                print(format_passage(response, settings.show_verse_numbers))

            elif args.command == "search":
                searcher = SearchService(
                    service.references, RecentSearches(backend), lambda: translation
                )
                result = await searcher.search(" ".join(args.reference))
                if result is None:
                    print("Enter a reference such as John 3:16", file=sys.stderr)
                    return 1
                if not result.success:
                    print(result.error_message, file=sys.stderr)
                    return 1
                print(format_passage(result.response, settings.show_verse_numbers))

            elif args.command == "recent":
                for query in RecentSearches(backend).items():
                    print(query)

            elif args.command == "category":
                browser = CategoryBrowser(get_category(args.category_id), service.references, translation)
                if args.shuffle:
                    response = await browser.shuffle()
                else:
                    total = len(browser.category.verse_references)
                    if not 1 <= args.index <= total:
                        print(f"--index must be between 1 and {total}", file=sys.stderr)
                        return 1
                    browser.current_index = args.index - 1
                    response = await browser.current_verse()
                print(f"{browser.category.name} - {browser.progress}\n")
                print(format_passage(response, settings.show_verse_numbers))

            elif args.command == "favorite":
                response = await service.get_verse(" ".join(args.reference), translation)
                added = FavoritesStore(backend).toggle(response)
                print(f"{response.reference} {'added to' if added else 'removed from'} favorites")

            elif args.command == "favorites":
                for favorite in FavoritesStore(backend).items():
                    print(f"{favorite.reference}: {favorite.text} ({favorite.translation_name})")

            elif args.command == "purge":
                before = service.cache_count()
                service.purge_expired()
                print(f"Removed {before - service.cache_count()} expired entries")

            elif args.command == "clear-cache":
                service.clear_cache()
                print("Cache cleared")

            elif args.command == "stats":
                for key, value in service.stats().items():
                    print(f"{key}: {value}")

        finally:
            service.close()

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main application entry point.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    setup_exception_handler()
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
        settings.ensure_directories()
        configure_logging(settings.log_level, settings.log_directory)

        return asyncio.run(run_command(args, settings))

    except BibleAPIError as e:
        logger.error(f"Request failed: {e}")
        print(e.user_message, file=sys.stderr)
        return 1

    except KeyError as e:
        print(e.args[0] if e.args else str(e), file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        print(f"\nFATAL ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
