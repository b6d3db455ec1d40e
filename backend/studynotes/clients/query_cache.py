"""
Client-side query cache

Read results are cached by request path until a mutation invalidates them,
so repeated reads of the same view do not hit the server.
"""
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional, Tuple
import threading
from ..utils import get_current_timestamp
import logging

logger = logging.getLogger(__name__)


class QueryCache:
    """Path-keyed cache of decoded API responses"""
    
    def __init__(self, stale_after: Optional[timedelta] = None, clock: Callable[[], datetime] = get_current_timestamp):
        self.stale_after = stale_after
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, datetime]] = {}
        self._lock = threading.Lock()
    
    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, fetched_at = entry
            if self.stale_after is not None and self._clock() - fetched_at >= self.stale_after:
                del self._entries[key]
                return None
            return value
    
    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock())
    
    def get_or_fetch(self, key: str, fetch: Callable[[], Any]) -> Any:
        """Cached value for key, calling fetch on a miss"""
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Query cache hit: {key}")
            return cached
        value = fetch()
        self.set(key, value)
        return value
    
    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)
    
    def invalidate_prefix(self, prefix: str) -> None:
        """Drop every entry whose key starts with prefix"""
        with self._lock:
            for key in [k for k in self._entries if k.startswith(prefix)]:
                del self._entries[key]
    
    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
    
    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
