"""
In-process TTL cache for storefront query results.

Only the layout queries (header and footer menus) go through it; they are
requested on every page and change rarely.
"""
from typing import Any, Dict, Optional
import threading
import time


class QueryCache:
    """Small TTL cache, oldest entry evicted when full"""

    def __init__(self, max_size: int = 64, ttl_seconds: int = 300):
        self.entries: Dict[str, Dict[str, Any]] = {}
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def get(self, key: str) -> Optional[Any]:
        """Get cached value if not expired"""
        with self._lock:
            entry = self.entries.get(key)
            if entry is None:
                return None
            if time.monotonic() - entry["timestamp"] > self.ttl_seconds:
                del self.entries[key]
                return None
            return entry["value"]

    def set(self, key: str, value: Any) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._clean_expired()
            while len(self.entries) >= self.max_size:
                oldest_key = min(self.entries, key=lambda k: self.entries[k]["timestamp"])
                del self.entries[oldest_key]
            self.entries[key] = {"value": value, "timestamp": time.monotonic()}

    def _clean_expired(self) -> None:
        now = time.monotonic()
        expired = [k for k, e in self.entries.items() if now - e["timestamp"] > self.ttl_seconds]
        for key in expired:
            del self.entries[key]
