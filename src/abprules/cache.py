"""
Memoization table for parsed filters.

Filter lists repeat a lot of rules across subscriptions. Callers that parse
many lists can share one FilterCache to reuse descriptors for identical text.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .filters import Filter


class FilterCache:
    """Parsed filters keyed by their raw text.

    Not thread-safe; use one cache per thread or guard it externally.
    """

    def __init__(self, max_size: int | None = None) -> None:
        """Initialize the cache.

        Args:
            max_size: Maximum number of filters kept. Least recently used
                entries are evicted first. None keeps everything.
        """
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be positive")
        self._max_size = max_size
        self._filters: OrderedDict[str, Filter] = OrderedDict()

    def get(self, text: str) -> Filter | None:
        """Get the cached filter for text, if any."""
        parsed = self._filters.get(text)
        if parsed is not None and self._max_size is not None:
            self._filters.move_to_end(text)
        return parsed

    def put(self, text: str, parsed: Filter) -> None:
        """Store a parsed filter."""
        self._filters[text] = parsed
        self._filters.move_to_end(text)
        if self._max_size is not None:
            while len(self._filters) > self._max_size:
                self._filters.popitem(last=False)

    def clear(self) -> None:
        self._filters.clear()

    def __len__(self) -> int:
        return len(self._filters)

    def __contains__(self, text: object) -> bool:
        return text in self._filters
