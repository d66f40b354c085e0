"""Property-based tests for the JSON feed store."""

import json
import tempfile
from pathlib import Path

from hypothesis import given
from hypothesis import strategies as st

from rss_whatsapp_bot.storage import FeedStore

identifier_text = st.text(min_size=1, max_size=30)


@st.composite
def feed_record_strategy(draw):
    record = {
        "name": draw(identifier_text),
        "url": "https://" + draw(
            st.text(
                alphabet=st.characters(whitelist_categories=("Ll", "Nd")),
                min_size=3,
                max_size=15,
            )
        ) + ".example.com/feed",
    }
    if draw(st.booleans()):
        record["seen"] = draw(st.lists(identifier_text, max_size=10, unique=True))
    extra = draw(
        st.dictionaries(
            st.sampled_from(["enabled", "note", "tags"]),
            st.one_of(st.booleans(), identifier_text, st.lists(identifier_text, max_size=3)),
            max_size=3,
        )
    )
    record.update(extra)
    return record


class TestFeedStoreProperties:
    """Property-based tests for FeedStore."""

    @given(st.lists(feed_record_strategy(), max_size=8))
    def test_save_load_round_trip(self, records):
        """For any well-formed feed list x, save(load(x)) == x."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "feeds.json"
            path.write_text(json.dumps(records), encoding="utf-8")
            store = FeedStore(path)

            store.save(store.load())

            assert json.loads(path.read_text(encoding="utf-8")) == records

    def test_unknown_keys_survive_a_save(self):
        """Keys the bot does not use are written back untouched."""
        records = [
            {
                "name": "n",
                "url": "https://n.example.com/feed",
                "enabled": True,
                "seen": ["a"],
            }
        ]
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "feeds.json"
            path.write_text(json.dumps(records), encoding="utf-8")
            store = FeedStore(path)

            feeds = store.load()
            feeds[0].mark_seen("b")
            store.save(feeds)

            assert json.loads(path.read_text(encoding="utf-8")) == [
                {
                    "name": "n",
                    "url": "https://n.example.com/feed",
                    "enabled": True,
                    "seen": ["a", "b"],
                }
            ]
