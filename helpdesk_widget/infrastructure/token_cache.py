from __future__ import annotations
import logging
import threading
import time
from typing import Callable, Dict, Tuple


logger = logging.getLogger(__name__)

class InMemoryTokenCache:
    """Process-local TTL cache for Helpdesk access tokens.
        Entries expire ttl_minutes after they were written; expired entries are
        dropped lazily on read. Safe to share between threads.
        """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                logger.debug("Token cache entry %s expired", key)
                return None

            return value

    def put(self, key: str, value: str, ttl_minutes: int) -> None:
        if ttl_minutes <= 0:
            # nothing to keep; also drop a previous value so it is not served
            self.forget(key)
            return

        expires_at = self._clock() + ttl_minutes * 60
        with self._lock:
            self._entries[key] = (value, expires_at)

    def forget(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)
