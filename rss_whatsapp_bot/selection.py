"""Selection policy: deliver the oldest unseen item first."""

from .models import FeedItem


def select_item(items: list[FeedItem]) -> FeedItem | None:
    """Return the item with the earliest publish time, or None if empty.

    On equal timestamps the first item in input order wins, so the result
    depends only on feed order and document order.
    """
    oldest = None
    for item in items:
        if oldest is None or item.published < oldest.published:
            oldest = item
    return oldest
