import time
from typing import Any

from config import settings


class TTLCache:
    def __init__(self, ttl: int | None = None, max_entries: int | None = None):
        self._store: dict[str, tuple[Any, float]] = {}
        self._ttl = ttl or settings.cache_ttl_seconds
        self._max_entries = max_entries or settings.cache_max_entries

    def get(self, key: str) -> Any | None:
        if key in self._store:
            value, ts = self._store[key]
            if time.time() - ts < self._ttl:
                return value
            del self._store[key]
        return None

    def set(self, key: str, value: Any) -> None:
        if key not in self._store and len(self._store) >= self._max_entries:
            self._purge_expired()
            if len(self._store) >= self._max_entries:
                # dicts keep insertion order, so the first key is the oldest
                oldest = next(iter(self._store))
                del self._store[oldest]
        self._store.pop(key, None)
        self._store[key] = (value, time.time())

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def _purge_expired(self) -> None:
        now = time.time()
        expired = [k for k, (_, ts) in self._store.items() if now - ts >= self._ttl]
        for key in expired:
            del self._store[key]

    def __len__(self) -> int:
        return len(self._store)


cache = TTLCache()
