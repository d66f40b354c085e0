"""Feed store backed by a JSON file."""

import json
import os
from pathlib import Path

from .exceptions import StorageError
from .logging_config import create_execution_logger
from .models import Feed


def _atomic_write_json(path: Path, data: list) -> None:
    tmp = path.with_name(f"{path.name}.tmp")
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.write("\n")
    os.replace(tmp, path)


class FeedStore:
    """Loads and saves the list of configured feeds.

    Schema:
    [
      {"name": "...", "url": "...", "seen": ["guid", ...]},
      ...
    ]

    "seen" is optional. The whole file is rewritten on save; there is no
    locking, so only one run may use a store at a time.
    """

    def __init__(self, path: str | Path, execution_id: str | None = None):
        self.path = Path(path)
        self.logger = create_execution_logger("feed_store", execution_id)

    def load(self) -> list[Feed]:
        """Read every feed record.

        Raises:
            StorageError: If the file is missing, unreadable or malformed
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise StorageError(f"Feeds file not found: {self.path}") from e
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in feeds file {self.path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read feeds file {self.path}: {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"Feeds file {self.path} must contain a JSON array")

        feeds = [self._parse_record(index, record) for index, record in enumerate(data)]
        self.logger.info(f"Loaded {len(feeds)} feeds from {self.path}")
        return feeds

    def save(self, feeds: list[Feed]) -> None:
        """Overwrite the file with the given feeds.

        Raises:
            StorageError: If the file cannot be written
        """
        try:
            _atomic_write_json(self.path, [feed.to_dict() for feed in feeds])
        except OSError as e:
            raise StorageError(f"Cannot write feeds file {self.path}: {e}") from e
        self.logger.info(f"Saved {len(feeds)} feeds to {self.path}")

    def _parse_record(self, index: int, record: object) -> Feed:
        if not isinstance(record, dict):
            raise StorageError(f"Feed record #{index} is not an object")
        for key in ("name", "url"):
            if not isinstance(record.get(key), str):
                raise StorageError(f"Feed record #{index} has no string '{key}'")
        seen = record.get("seen")
        if seen is not None and not (
            isinstance(seen, list) and all(isinstance(guid, str) for guid in seen)
        ):
            raise StorageError(
                f"Feed record '{record['name']}' has a 'seen' value that is not "
                "a list of strings"
            )
        return Feed.from_dict(record)
