"""In-memory article catalog used as a demo lookup source."""

from __future__ import annotations

import asyncio
import random
from typing import Iterable, Sequence

from query_resolver.config import CatalogSettings
from query_resolver.domain.models import CatalogItem, ResultStats

_SAMPLE_ARTICLES: tuple[tuple[str, str, str, str], ...] = (
    ("React Hooks Guide", "Tutorial", "John Doe", "2024-01-15"),
    ("JavaScript ES6 Features", "Article", "Jane Smith", "2024-01-14"),
    ("CSS Grid Layout", "Tutorial", "Mike Johnson", "2024-01-13"),
    ("Node.js Best Practices", "Guide", "Sarah Wilson", "2024-01-12"),
    ("TypeScript Advanced", "Tutorial", "David Brown", "2024-01-11"),
    ("Vue.js vs React", "Comparison", "Lisa Davis", "2024-01-10"),
    ("Webpack Configuration", "Guide", "Tom Miller", "2024-01-09"),
    ("Docker for Developers", "Tutorial", "Anna Garcia", "2024-01-08"),
    ("GraphQL Introduction", "Article", "Chris Lee", "2024-01-07"),
    ("MongoDB Queries", "Guide", "Emma Taylor", "2024-01-06"),
)


def default_catalog_items() -> list[CatalogItem]:
    return [
        CatalogItem(id=index, title=title, category=category, author=author, date=published)
        for index, (title, category, author, published) in enumerate(_SAMPLE_ARTICLES, start=1)
    ]


class InMemoryCatalog:
    """Substring search over title, category and author with simulated latency."""

    def __init__(
        self,
        items: Iterable[CatalogItem] | None = None,
        settings: CatalogSettings | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._items = list(items) if items is not None else default_catalog_items()
        self._settings = settings or CatalogSettings()
        self._rng = rng or random.Random()

    @property
    def items(self) -> tuple[CatalogItem, ...]:
        return tuple(self._items)

    def _latency_seconds(self) -> float:
        low = self._settings.latency_min_ms
        high = self._settings.latency_max_ms
        if high <= 0:
            return 0.0
        return self._rng.uniform(low, high) / 1000

    async def search(self, query: str) -> list[CatalogItem]:
        await asyncio.sleep(self._latency_seconds())
        needle = query.strip().casefold()
        return [
            item
            for item in self._items
            if needle in item.title.casefold()
            or needle in item.category.casefold()
            or needle in item.author.casefold()
        ]

    __call__ = search


def summarize_results(results: Sequence[CatalogItem]) -> ResultStats:
    """Distinct categories and authors, in first-seen order."""

    categories = list(dict.fromkeys(item.category for item in results))
    authors = list(dict.fromkeys(item.author for item in results))
    return ResultStats(total_results=len(results), categories=categories, authors=authors)


def default_catalog(settings: CatalogSettings | None = None) -> InMemoryCatalog:
    return InMemoryCatalog(settings=settings)


__all__ = [
    "InMemoryCatalog",
    "default_catalog",
    "default_catalog_items",
    "summarize_results",
]
