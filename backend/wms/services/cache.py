"""
In-process response cache (TTL, thread-safe, best effort)

Never the system of record: every failure is logged and treated as a miss.
"""
import copy
import logging
import threading
import time as _time
from typing import Any, Optional

logger = logging.getLogger(__name__)


class ResponseCache:
    """Key -> (value, expiry) map guarded by a lock; expired entries are dropped on read"""

    def __init__(self, ttl_seconds: int = 3600, enabled: bool = True):
        self.ttl_seconds = ttl_seconds
        self.enabled = enabled
        self._lock = threading.Lock()
        self._entries: dict = {}

    def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        now = _time.monotonic()
        try:
            with self._lock:
                entry = self._entries.get(key)
                if entry is None:
                    return None
                value, expiry = entry
                if expiry <= now:
                    self._entries.pop(key, None)
                    return None
                return copy.deepcopy(value)
        except Exception as e:
            logger.warning("Cache read failed for %s: %s", key, e)
            return None

    def set(self, key: str, value: Any) -> None:
        if not self.enabled:
            return
        try:
            with self._lock:
                self._entries[key] = (copy.deepcopy(value), _time.monotonic() + self.ttl_seconds)
        except Exception as e:
            logger.warning("Cache write failed for %s: %s", key, e)

    def delete(self, key: str) -> None:
        try:
            with self._lock:
                self._entries.pop(key, None)
        except Exception as e:
            logger.warning("Cache delete failed for %s: %s", key, e)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def cache_key(resource: str, entity_id: int) -> str:
    return "%s:%s" % (resource, entity_id)
