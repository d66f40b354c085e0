"""Data models for RSS WhatsApp Bot."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

FEED_KEYS = ("name", "url", "seen")


@dataclass
class Feed:
    """A configured feed and the identifiers already delivered from it."""

    name: str
    url: str
    seen: list[str] | None = None  # None when the record has no "seen" key
    extra: dict[str, Any] = field(default_factory=dict)  # other record keys

    @property
    def seen_ids(self) -> set[str]:
        return set(self.seen or [])

    def mark_seen(self, guid: str) -> None:
        """Record a delivered identifier; the list only ever grows."""
        if self.seen is None:
            self.seen = []
        if guid not in self.seen:
            self.seen.append(guid)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Feed":
        seen = data.get("seen")
        return cls(
            name=data["name"],
            url=data["url"],
            seen=list(seen) if seen is not None else None,
            extra={key: value for key, value in data.items() if key not in FEED_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {"name": self.name, "url": self.url, **self.extra}
        if self.seen is not None:
            record["seen"] = list(self.seen)
        return record


@dataclass
class FeedItem:
    """Represents a single unseen RSS/Atom entry."""

    guid: str
    title: str
    link: str
    published: datetime
    feed_name: str
