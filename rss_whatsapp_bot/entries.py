"""Dialect adapters exposing RSS items and Atom entries through one interface."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from dateutil import parser as date_parser
from dateutil import tz

from .exceptions import ExtractionError

# RFC 822 zone names that dateutil does not resolve on its own
RFC822_TZINFOS = {
    "UT": tz.UTC,
    "Z": tz.UTC,
    "EST": tz.tzoffset("EST", -5 * 3600),
    "EDT": tz.tzoffset("EDT", -4 * 3600),
    "CST": tz.tzoffset("CST", -6 * 3600),
    "CDT": tz.tzoffset("CDT", -5 * 3600),
    "MST": tz.tzoffset("MST", -7 * 3600),
    "MDT": tz.tzoffset("MDT", -6 * 3600),
    "PST": tz.tzoffset("PST", -8 * 3600),
    "PDT": tz.tzoffset("PDT", -7 * 3600),
}


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a feed date into an aware datetime.

    Returns None when the value is absent or unparseable. A timestamp without
    an offset is taken as UTC.
    """
    if not value or not value.strip():
        return None
    try:
        published = date_parser.parse(value.strip(), tzinfos=RFC822_TZINFOS)
    except (ValueError, OverflowError, TypeError):
        return None
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    return published


def _text(raw_entry: Any, key: str) -> str:
    value = raw_entry.get(key)
    return value.strip() if isinstance(value, str) else ""


class FeedEntry(ABC):
    """Uniform view of one syndication entry."""

    def __init__(self, raw_entry: Any):
        self.raw_entry = raw_entry

    def identifier(self) -> str:
        return _text(self.raw_entry, "id")

    def title(self) -> str:
        return _text(self.raw_entry, "title")

    def title_is_html(self) -> bool:
        """True when the parser reports the title as markup rather than text."""
        detail = self.raw_entry.get("title_detail") or {}
        return detail.get("type") in ("text/html", "application/xhtml+xml")

    @abstractmethod
    def link(self) -> str:
        """Link to the entry's page, "" when absent."""

    @abstractmethod
    def published_at(self) -> datetime | None:
        """Publish time, None when absent or unparseable."""


class RssEntry(FeedEntry):
    """An RSS <item>: <guid>, <link> text and <pubDate>."""

    def link(self) -> str:
        return _text(self.raw_entry, "link")

    def published_at(self) -> datetime | None:
        return parse_timestamp(self.raw_entry.get("published"))


class AtomEntry(FeedEntry):
    """An Atom <entry>: <id>, <link href="..."/> and <published>."""

    def link(self) -> str:
        links = self.raw_entry.get("links") or []
        hrefs = [link for link in links if link.get("href")]
        for link in hrefs:
            if link.get("rel", "alternate") == "alternate":
                return link["href"].strip()
        if hrefs:
            return hrefs[0]["href"].strip()
        return _text(self.raw_entry, "link")

    def published_at(self) -> datetime | None:
        return parse_timestamp(self.raw_entry.get("published"))


def entries_for(document: Any) -> list[FeedEntry]:
    """Wrap every entry of a parsed document in the adapter for its dialect.

    The dialect comes from the document's root element as detected by the
    parser (``rss20``, ``rss10``, ``atom10``, ...).

    Raises:
        ExtractionError: If the root element is neither RSS nor Atom
    """
    version = document.get("version") or ""
    if version.startswith("rss"):
        entry_class = RssEntry
    elif version.startswith("atom"):
        entry_class = AtomEntry
    else:
        raise ExtractionError(f"Unsupported feed dialect: '{version or 'unknown'}'")

    entries = document.get("entries")
    if not isinstance(entries, list):
        raise ExtractionError("Parsed document has no entry list")
    return [entry_class(entry) for entry in entries]
