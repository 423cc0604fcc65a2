"""
Persisted snapshot cache.

Stores an already normalized collection snapshot next to its source so that
repeated loads skip JSON decoding and prefix normalization. The cache file is
a JSON document:

    {"key": "...", "sourceTimestamp": 1700000000.0, "schemaVersion": 1, "items": {...}}

A cache entry is used only if its key, schema version and source timestamp
all match. Anything else, including an unreadable file, is a miss.
Writes replace the whole file without locking; concurrent writers race and
the last one wins.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from iconset.logging_config import timed

logger = logging.getLogger(__name__)

# Bump when the snapshot layout changes to invalidate old cache files
CACHE_SCHEMA_VERSION = 1


class SnapshotCache:
    """Single-file cache for one collection snapshot.

    Args:
        path: Cache file location
        version: Schema version written on save and required on load
    """

    def __init__(self, path: Union[str, Path], version: int = CACHE_SCHEMA_VERSION):
        self.path = Path(path)
        self.version = version

    def __repr__(self) -> str:
        return f"SnapshotCache({str(self.path)!r}, version={self.version})"

    @timed(operation="Saving snapshot cache")
    def save(self, key: str, source_timestamp: Optional[float], items: Dict[str, Any]) -> None:
        """Write `items` to the cache file, replacing its content."""
        document = {
            "key": key,
            "sourceTimestamp": source_timestamp,
            "schemaVersion": self.version,
            "items": items,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(document, f, ensure_ascii=False)
        logger.debug("Cache written: %s", self.path, extra={"key": key})

    def load(self, key: str, expected_timestamp: Optional[float] = None) -> Optional[Dict[str, Any]]:
        """Return cached items, or None on any mismatch or read failure.

        Args:
            key: Key the entry must have been saved under
            expected_timestamp: Current source timestamp; an entry saved with
                a timestamp must match it exactly
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except (OSError, ValueError) as exc:
            logger.debug("Cache miss (unreadable): %s: %s", self.path, exc)
            return None

        if not isinstance(document, dict):
            return None

        stored_timestamp = document.get("sourceTimestamp")
        if document.get("key") != key:
            reason = "key"
        elif document.get("schemaVersion") != self.version:
            reason = "schema version"
        elif stored_timestamp is not None and stored_timestamp != expected_timestamp:
            reason = "source timestamp"
        elif not isinstance(document.get("items"), dict):
            reason = "items"
        else:
            logger.debug("Cache hit: %s", self.path, extra={"key": key})
            return document["items"]

        logger.debug("Cache miss (%s mismatch): %s", reason, self.path)
        return None
