#!/usr/bin/env python3
"""
Feed Store for registered feeds.

Keeps the user's feeds in memory, keyed by the SHA-256 digest of their
endpoint, and persists them as a JSON file. The store is loaded at start-up,
mutated while serving requests and saved on shutdown.
"""

import hashlib
import json
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from .exceptions import StoreError
from .models.news import Feed

logger = logging.getLogger(__name__)


def feed_id(endpoint: str) -> str:
    """Stable identifier of a feed endpoint."""
    return hashlib.sha256(endpoint.encode('utf-8')).hexdigest()


class FeedStore:
    """File-backed registry of feeds."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._data: Dict[str, Feed] = {}
        self._lock = threading.Lock()

    @classmethod
    def open(cls, path: Union[str, Path]) -> 'FeedStore':
        """Load a store from ``path`` and make sure its directory exists."""
        store = cls(path)
        store.load()
        try:
            store.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError('mkdir', str(store.path.parent), e) from e
        return store

    def add(self, feed: Feed) -> Feed:
        """
        Register a feed, replacing any feed with the same endpoint.

        Returns:
            The stored feed with its identifier set
        """
        stored = Feed(endpoint=feed.endpoint, type=feed.type, id=feed_id(feed.endpoint))
        with self._lock:
            self._data[stored.id] = stored
        logger.info(f"Registered {stored.type.value} feed {stored.endpoint}")
        return stored

    def get(self, id: str) -> Optional[Feed]:
        with self._lock:
            return self._data.get(id)

    def get_all(self) -> List[Feed]:
        """Snapshot of all registered feeds."""
        with self._lock:
            return list(self._data.values())

    def delete(self, id: str) -> bool:
        """
        Remove a feed.

        Returns:
            True if a feed was removed
        """
        with self._lock:
            removed = self._data.pop(id, None)
        if removed:
            logger.info(f"Deleted feed {removed.endpoint}")
        return removed is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def load(self) -> None:
        """Load feeds from disk; a missing file leaves the store empty."""
        if not self.path.exists():
            logger.debug(f"No feed store found at {self.path}")
            return

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            feeds = {key: Feed.from_dict(value) for key, value in raw.items()}
        except (OSError, ValueError, AttributeError) as e:
            raise StoreError('load', str(self.path), e) from e

        with self._lock:
            self._data = feeds
        logger.info(f"Loaded {len(feeds)} feeds from {self.path}")

    def save(self) -> None:
        """Write all feeds to disk."""
        with self._lock:
            raw = {key: feed.to_dict() for key, feed in self._data.items()}

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(raw, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StoreError('save', str(self.path), e) from e
        logger.info(f"Saved {len(raw)} feeds to {self.path}")
