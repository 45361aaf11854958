"""Process-local LRU cache for parsed recipes."""

import logging
import threading
from collections import OrderedDict
from typing import Generic, Hashable, Optional, TypeVar
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger(__name__)

V = TypeVar("V")

DEFAULT_MAX_ENTRIES = 100


def normalize_cache_key(url: str) -> str:
    """Canonical form of a URL for cache lookups (case, fragment, trailing slash)."""
    parts = urlsplit(url.strip())
    path = parts.path.rstrip("/") or "/"
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, ""))


class LRUCache(Generic[V]):
    """Bounded mapping that evicts the least recently used entry.

    Reads and writes are guarded by one lock, so a single instance can be
    shared between concurrent requests.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._data: "OrderedDict[Hashable, V]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[V]:
        with self._lock:
            if key not in self._data:
                return None
            self._data.move_to_end(key)
            return self._data[key]

    def set(self, key: Hashable, value: V) -> None:
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while len(self._data) > self.max_entries:
                evicted, _ = self._data.popitem(last=False)
                logger.debug("Evicted %s from cache", evicted)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
