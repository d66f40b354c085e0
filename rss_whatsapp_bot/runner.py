"""Run coordinator and command line entry point for RSS WhatsApp Bot."""

import argparse
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime

from .config import Config
from .exceptions import ConfigurationError, DeliveryError, StorageError
from .logging_config import create_execution_logger, setup_logging
from .models import FeedItem
from .rss import FeedFetcher, ItemExtractor
from .selection import select_item
from .storage import FeedStore
from .whatsapp import WhatsAppNotifier


@dataclass
class RunResult:
    """Outcome of one run."""

    feeds_processed: int = 0
    items_found: int = 0
    delivered: FeedItem | None = None
    failed_feeds: list[str] = field(default_factory=list)


def run(config: Config, execution_id: str | None = None) -> RunResult:
    """
    Deliver the oldest unseen item across all feeds.

    Loads the feed store, fetches and extracts every feed in order, selects
    one item, sends it and records its identifier as seen. When nothing is
    new the store is left untouched.

    Args:
        config: Validated configuration
        execution_id: Execution ID for logging context

    Returns:
        RunResult describing what happened

    Raises:
        StorageError: If the feeds file cannot be read or written
        DeliveryError: If the message could not be delivered; the store is
            not updated so the item is retried on the next run
    """
    if not execution_id:
        execution_id = f"run_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    main_logger = create_execution_logger("main", execution_id)
    main_logger.log_execution_start()

    store = FeedStore(config.feeds_file, execution_id=execution_id)
    extractor = ItemExtractor(execution_id=execution_id)

    feeds = store.load()
    result = RunResult()

    all_items = []
    fetcher = FeedFetcher(timeout=config.feed_timeout, execution_id=execution_id)
    try:
        for feed in feeds:
            document = fetcher.fetch(feed.url)
            if document is None:
                result.failed_feeds.append(feed.name)
            items = extractor.extract(document, feed.name, feed.seen_ids)
            all_items.extend(items)
            result.feeds_processed += 1
            main_logger.log_feed_processing(feed.name, len(items))
    finally:
        fetcher.close()

    result.items_found = len(all_items)
    oldest_item = select_item(all_items)

    if oldest_item is None:
        main_logger.info("No new items found.")
        main_logger.log_execution_end(success=True)
        return result

    notifier = WhatsAppNotifier(config.get_whatsapp_config(), execution_id=execution_id)
    try:
        notifier.notify(oldest_item)
    finally:
        notifier.close()

    for feed in feeds:
        if feed.name == oldest_item.feed_name:
            feed.mark_seen(oldest_item.guid)
    store.save(feeds)

    result.delivered = oldest_item
    main_logger.log_metrics(
        {
            "feeds_processed": result.feeds_processed,
            "failed_feeds": len(result.failed_feeds),
            "items_found": result.items_found,
            "delivered": oldest_item.guid,
        }
    )
    main_logger.log_execution_end(success=True)
    return result


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rss-whatsapp-bot",
        description="Send the oldest unseen feed entry to a WhatsApp channel.",
    )
    parser.add_argument(
        "--feeds-file",
        help="Path to the feeds JSON file (default: $FEEDS_FILE or feeds.json)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Command line entry point. Returns the process exit code."""
    args = parse_args(argv)

    try:
        config = Config(feeds_file=args.feeds_file, log_level=args.log_level)
        config.validate()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.log_format)

    try:
        result = run(config)
    except (StorageError, DeliveryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.delivered is None:
        print("No new items found.")
    else:
        print("Success!")
    return 0
