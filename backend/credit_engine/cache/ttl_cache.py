"""Time-To-Live (TTL) cache for resolved weights and multipliers."""
import threading
import time
from typing import Any, Dict, Optional, Tuple


class TTLCache:
    """
    In-memory cache with configurable time-to-live (TTL) expiry.

    Thread-safe. Every score computation reads the team's weights and the
    user's multiplier, while those change only when a manager saves them,
    so the resolvers keep them here and the write paths invalidate.

    Attributes:
        ttl_seconds: Time-to-live duration in seconds (default: 300 = 5 minutes)

    Example:
        >>> cache = TTLCache(ttl_seconds=300)
        >>> cache.set("team:t-1:weights", {"EC": 40, "OC": 50, "CC": 10})
        >>> cache.get("team:t-1:weights")
        {'EC': 40, 'OC': 50, 'CC': 10}
    """

    def __init__(self, ttl_seconds: int = 300):
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[str, Tuple[Any, float]] = {}  # {key: (value, expires_at)}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def set(self, key: str, value: Any) -> None:
        """Store a value; an existing entry gets a fresh TTL."""
        with self._lock:
            self._entries[key] = (value, time.monotonic() + self.ttl_seconds)

    def get(self, key: str) -> Optional[Any]:
        """
        Look up a live entry.

        Returns:
            The stored value, or None when the key is unknown or expired
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[1] < time.monotonic():
                del self._entries[key]
                entry = None

            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return entry[0]

    def clear(self, key: str) -> None:
        """
        Invalidate a single entry.

        Used when a manager saves new weights or a new rating.
        """
        with self._lock:
            self._entries.pop(key, None)

    def clear_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> Dict[str, Any]:
        """Entry count, TTL and hit/miss counters since creation."""
        with self._lock:
            return {
                "size": len(self._entries),
                "ttl_seconds": self.ttl_seconds,
                "hits": self._hits,
                "misses": self._misses,
            }

    def prune_expired(self) -> int:
        """
        Drop every expired entry.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = time.monotonic()
            stale = [key for key, (_, expires_at) in self._entries.items() if expires_at < now]
            for key in stale:
                self._entries.pop(key)
            return len(stale)
