"""Entry point: ``python -m runner NOTE.md [NOTE.md ...]``."""

import argparse
import asyncio
import logging
import sys

import structlog

from runner.config import settings
from runner.sync_file import sync_file

logger = structlog.get_logger()


def configure_logging(level: str) -> None:
    """Filter structlog output at ``level``."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="notes2anki",
        description="Sync flashcards written in markdown notes with Anki.",
    )
    parser.add_argument("files", nargs="+", help="Markdown files to sync")
    parser.add_argument("--deck", help="Deck for notes without a deck in front matter")
    parser.add_argument("--url", help="AnkiConnect URL")
    return parser.parse_args(argv)


async def run(argv: list[str] | None = None) -> int:
    """Sync every file named on the command line. Returns an exit status."""
    args = parse_args(argv)
    config = settings
    overrides = {}
    if args.deck:
        overrides["default_deck"] = args.deck
    if args.url:
        overrides["anki_connect_url"] = args.url
    if overrides:
        config = settings.model_copy(update=overrides)

    status = 0
    for name in args.files:
        try:
            result = await sync_file(name, config=config)
        except OSError as exc:
            logger.error("file_unreadable", path=name, error=str(exc))
            status = 1
            continue
        if result.aborted:
            return 2
        print(
            f"{name}: {result.cards_added} added, {result.cards_updated} updated, "
            f"{result.cards_deleted} deleted"
        )
    return status


def main() -> None:
    """Main entry point for the runner."""
    configure_logging(settings.log_level)
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
