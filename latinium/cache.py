"""
In-process cache of analysis results keyed by the exact input text.
Entries live for the lifetime of the process unless a size or TTL bound is configured.
"""

import logging
import math
import threading
import time
from typing import Any, Callable, Dict, Optional

from cachetools import Cache, LRUCache, TTLCache

logger = logging.getLogger(__name__)


class AnalysisCache:
    """Thread-safe text -> AnalysisResult store."""

    def __init__(
        self,
        maxsize: Optional[int] = None,
        ttl: Optional[float] = None,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._maxsize = maxsize
        self._ttl = ttl
        bound = maxsize if maxsize else math.inf
        if ttl:
            self._store: Cache = TTLCache(maxsize=bound, ttl=ttl, timer=timer)
        elif maxsize:
            self._store = LRUCache(maxsize=maxsize)
        else:
            self._store = Cache(maxsize=math.inf)
        self._lock = threading.Lock()

    def has(self, text: str) -> bool:
        with self._lock:
            return text in self._store

    def get(self, text: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._store.get(text)

    def set(self, text: str, result: Dict[str, Any]) -> None:
        with self._lock:
            self._store[text] = result
        logger.debug("Cached analysis for text of length %d", len(text))

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def stats(self) -> Dict[str, Any]:
        """Size and bounds, for diagnostics."""
        with self._lock:
            size = len(self._store)
        return {
            "size": size,
            "max_size": self._maxsize,
            "ttl_seconds": self._ttl,
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
