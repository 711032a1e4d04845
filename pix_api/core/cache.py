"""In-process key/value cache shared by the content repositories.

Airtable is slow and rate limited, so every record read from it is kept here
until it expires or the cache is flushed (``DELETE /api/cache``).
"""

from __future__ import annotations

import logging
import threading
from time import monotonic
from typing import Any, Optional

from pix_api.core.config import settings

logger = logging.getLogger(__name__)


class Cache:
    """Thread-safe dictionary with optional per-entry expiry.

    A ``ttl`` of ``None`` falls back to ``default_ttl``; ``0`` means the entry
    never expires.
    """

    def __init__(self, default_ttl: float = 0) -> None:
        self.default_ttl = default_ttl
        self._entries: dict[str, tuple[Any, Optional[float]]] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default

            value, expires_at = entry
            if expires_at is not None and expires_at <= monotonic():
                del self._entries[key]
                return default
            return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        expires_at = monotonic() + ttl if ttl and ttl > 0 else None
        with self._lock:
            self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def flush_all(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Cache vidé (%s entrées supprimées).", count)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING


_MISSING = object()

cache = Cache(default_ttl=settings.CACHE_DEFAULT_TTL_SECONDS)
