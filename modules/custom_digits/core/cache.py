from __future__ import annotations

from typing import Any, Dict, Hashable, Iterator

import structlog

logger = structlog.get_logger(__name__)

MISSING = object()


class InsertionOrderedCache:
    """Memo table trimmed by insertion age.

    When a store pushes the size past ``max_entries`` the ``trim_chunk`` oldest
    entries are dropped. Reads never refresh an entry's age, so this is not an
    LRU.
    """

    def __init__(self, max_entries: int = 100, trim_chunk: int = 10) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1.")
        if trim_chunk < 1:
            raise ValueError("trim_chunk must be at least 1.")
        self.max_entries = max_entries
        self.trim_chunk = trim_chunk
        self._entries: Dict[Hashable, Any] = {}

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def lookup(self, key: Hashable) -> Any:
        """Return the cached value or the module sentinel ``MISSING``."""
        return self._entries.get(key, MISSING)

    def store(self, key: Hashable, value: Any) -> Any:
        self._entries[key] = value
        if len(self._entries) > self.max_entries:
            self._trim()
        return value

    def clear(self) -> None:
        self._entries.clear()

    def _trim(self) -> None:
        stale = list(self._entries)[: self.trim_chunk]
        for key in stale:
            del self._entries[key]
        logger.debug("cache_trimmed", dropped=len(stale), remaining=len(self._entries))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._entries)
