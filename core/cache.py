# core/cache.py
"""
Caching utilities
"""
import threading
from typing import Any, Optional, Dict
from cachetools import TTLCache

class CacheManager:
    """
    In-memory TTL cache shared by the event loop and executor threads

    TTLCache is not thread-safe, so every access holds the lock.
    """

    def __init__(self, max_size: int = 1000, ttl: int = 600):
        self.ttl = ttl
        self._cache: Dict[str, Any] = TTLCache(maxsize=max_size, ttl=ttl)
        self._lock = threading.Lock()

    def get_sync(self, key: str) -> Optional[Any]:
        """Get value from cache outside the event loop"""
        with self._lock:
            return self._cache.get(key)

    def set_sync(self, key: str, value: Any) -> None:
        """Set value in cache outside the event loop"""
        with self._lock:
            self._cache[key] = value

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        return self.get_sync(key)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Set value in cache"""
        # TTLCache applies one ttl to every entry; per-key ttl is ignored
        self.set_sync(key, value)
