"""Most-recently-used query history."""

from __future__ import annotations

from typing import Iterator

DEFAULT_HISTORY_LIMIT = 10


class QueryHistory:
    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("history limit must be >= 1")
        self.limit = limit
        self._items: list[str] = []

    def record(self, query: str) -> None:
        """Move ``query`` to the front, dropping entries past the limit."""

        if query in self._items:
            self._items.remove(query)
        self._items.insert(0, query)
        del self._items[self.limit :]

    def clear(self) -> None:
        self._items.clear()

    @property
    def items(self) -> tuple[str, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._items))


__all__ = ["DEFAULT_HISTORY_LIMIT", "QueryHistory"]
