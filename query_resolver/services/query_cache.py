"""In-memory result cache keyed by normalized query text."""

from __future__ import annotations

from typing import Generic, Iterable, Sequence, TypeVar

ResultT = TypeVar("ResultT")


def normalize_query(query: str, *, case_sensitive: bool = False) -> str:
    """Trim surrounding whitespace and fold case unless ``case_sensitive``."""

    key = query.strip()
    if not case_sensitive:
        key = key.casefold()
    return key


class QueryCache(Generic[ResultT]):
    """Exact-match cache without eviction; only ``clear()`` removes entries."""

    def __init__(self, *, case_sensitive: bool = False) -> None:
        self.case_sensitive = case_sensitive
        self._entries: dict[str, tuple[ResultT, ...]] = {}

    def key_for(self, query: str) -> str:
        return normalize_query(query, case_sensitive=self.case_sensitive)

    def get(self, query: str) -> Sequence[ResultT] | None:
        return self._entries.get(self.key_for(query))

    def set(self, query: str, results: Iterable[ResultT]) -> None:
        self._entries[self.key_for(query)] = tuple(results)

    def clear(self) -> None:
        self._entries.clear()

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, query: object) -> bool:
        return isinstance(query, str) and self.key_for(query) in self._entries


__all__ = ["QueryCache", "normalize_query"]
