"""RSS/Atom fetching and item extraction for RSS WhatsApp Bot."""

import feedparser
import requests
from bs4 import BeautifulSoup

from .entries import entries_for
from .exceptions import ExtractionError, FetchError
from .logging_config import create_execution_logger
from .models import FeedItem

# Parsed feed document as returned by feedparser
Document = feedparser.FeedParserDict


class FeedFetcher:
    """Downloads and parses feeds, one URL at a time."""

    def __init__(self, timeout: float | None = None, execution_id: str | None = None):
        """Initialize FeedFetcher.

        Args:
            timeout: HTTP request timeout in seconds, None for no timeout
            execution_id: Execution ID for logging context
        """
        self.timeout = timeout
        self.logger = create_execution_logger("feed_fetcher", execution_id)
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": "RSS-WhatsApp-Bot/1.0"})

    def close(self) -> None:
        self.session.close()

    def fetch(self, url: str) -> Document | None:
        """Fetch and parse a single feed.

        Failures are logged and reported as None so one bad feed never
        stops the others.

        Args:
            url: URL of the RSS/Atom feed

        Returns:
            The parsed document, or None on HTTP, network or parse failure
        """
        try:
            return self._fetch(url)
        except FetchError as e:
            self.logger.warning(str(e), feed_url=url)
            return None

    def _fetch(self, url: str) -> Document:
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f"Error fetching {url}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise FetchError(
                f"Failed to fetch {url}: {response.status_code} {response.reason}"
            )

        self.logger.debug(
            f"Feed downloaded: {url} ({len(response.content)} bytes)", feed_url=url
        )
        document = feedparser.parse(response.content)

        if document.get("bozo") and not document.get("version"):
            raise FetchError(
                f"Error parsing {url}: {document.get('bozo_exception', 'not a feed')}"
            )
        if document.get("bozo"):
            self.logger.warning(
                f"Feed parsing warning for {url}: {document.get('bozo_exception')}",
                feed_url=url,
            )
        return document


class ItemExtractor:
    """Turns a parsed document into the feed's unseen items."""

    def __init__(self, execution_id: str | None = None):
        self.logger = create_execution_logger("item_extractor", execution_id)

    def extract(
        self, document: Document | None, feed_name: str, seen_ids: set[str]
    ) -> list[FeedItem]:
        """Extract unseen items in document order.

        Entries with an empty identifier, an already seen identifier, or no
        parseable publish time are skipped.

        Args:
            document: Parsed feed, or None when fetching failed
            feed_name: Name of the feed the document came from
            seen_ids: Identifiers already delivered from this feed

        Returns:
            List of FeedItem objects, empty on structural errors
        """
        if document is None:
            return []

        try:
            return self._extract_items(document, feed_name, seen_ids)
        except (ExtractionError, AttributeError, KeyError, TypeError) as e:
            self.logger.warning(
                f"Error extracting items from {feed_name}: {e}", feed_name=feed_name
            )
            return []

    def _extract_items(
        self, document: Document, feed_name: str, seen_ids: set[str]
    ) -> list[FeedItem]:
        items = []
        for entry in entries_for(document):
            guid = entry.identifier()
            if not guid or guid in seen_ids:
                continue

            published = entry.published_at()
            if published is None:
                self.logger.debug(
                    f"Skipping entry without a usable date in {feed_name}",
                    feed_name=feed_name,
                    item_guid=guid,
                )
                continue

            title = entry.title()
            if entry.title_is_html():
                title = self.clean_html_content(title)

            items.append(
                FeedItem(
                    guid=guid,
                    title=title,
                    link=entry.link(),
                    published=published,
                    feed_name=feed_name,
                )
            )

        return items

    def clean_html_content(self, content: str) -> str:
        """Remove HTML tags from content and normalize whitespace."""
        if not content:
            return ""

        if "<" not in content and ">" not in content:
            return " ".join(content.split())

        soup = BeautifulSoup(content, "html.parser")

        for script in soup(["script", "style"]):
            script.decompose()

        text = soup.get_text(separator=" ")
        return " ".join(text.split())
