"""Explicitly controlled memoization for batches of scroll queries.

Entries never expire on their own. Callers enable the cache around a batch
of queries against unchanging buffer/fold state and reset it once that state
may have changed.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable

logger = logging.getLogger(__name__)

MemoKey = tuple[Hashable, ...]


class MemoCache:
    """Mapping of ``(operation, surface, *args)`` keys to computed lines/counts."""

    def __init__(self) -> None:
        self._entries: dict[MemoKey, int] = {}
        self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        """Stop consulting and filling the cache; existing entries are kept."""
        self._enabled = False

    def reset(self) -> None:
        """Drop every entry regardless of the enabled flag."""
        if self._entries:
            logger.debug("dropping %d memoized entries", len(self._entries))
        self._entries = {}

    def lookup(self, key: MemoKey) -> int | None:
        """Return the cached value for ``key`` while enabled, else ``None``."""
        if not self._enabled:
            return None
        value = self._entries.get(key)
        if value is not None:
            logger.debug("memo hit for %r", key)
        return value

    def store(self, key: MemoKey, value: int) -> None:
        """Record ``value`` for ``key`` when the cache is enabled."""
        if self._enabled:
            self._entries[key] = value

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
