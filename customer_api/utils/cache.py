"""In-memory TTL cache shared by the whole process.

Usage:
    from customer_api.utils.cache import static_cache

    emails = static_cache.get_or_set(
        f"newsletter:subscribers:{store_id}",
        lambda: load_emails(db, store_id),
        ttl=300,
    )
"""
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple


class TTLCache:
    """Thread-safe in-memory cache with TTL expiry and max-entry limit."""

    def __init__(self, max_entries: int = 256):
        self._store: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self._max_entries = max_entries

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if time.time() > expires_at:
                del self._store[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl: int = 300) -> None:
        with self._lock:
            # Evict expired entries first to stay under limit
            if len(self._store) >= self._max_entries:
                now = time.time()
                expired = [k for k, (exp, _) in self._store.items() if now > exp]
                for k in expired:
                    del self._store[k]
            # If still at limit, evict the entry closest to expiry
            if len(self._store) >= self._max_entries:
                oldest_key = min(self._store, key=lambda k: self._store[k][0])
                del self._store[oldest_key]
            self._store[key] = (time.time() + ttl, value)

    def get_or_set(self, key: str, factory: Callable[[], Any], ttl: int = 300) -> Any:
        """Return the cached value for key, populating it from factory on a miss.

        The factory runs outside the lock; two concurrent misses may both load,
        the later write wins.
        """
        value = self.get(key)
        if value is not None:
            return value
        value = factory()
        self.set(key, value, ttl=ttl)
        return value

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def invalidate(self, prefix: str) -> int:
        """Remove all keys starting with prefix. Returns count removed."""
        with self._lock:
            keys = [k for k in self._store if k.startswith(prefix)]
            for k in keys:
                del self._store[k]
            return len(keys)


static_cache = TTLCache()
