"""Demo entrypoint: type queries against the sample catalog."""

from __future__ import annotations

import asyncio
import sys
from typing import Sequence

from query_resolver.config import get_settings
from query_resolver.domain.models import CatalogItem
from query_resolver.logging import configure_logging, logger
from query_resolver.services.catalog import default_catalog, summarize_results
from query_resolver.services.resolver import QueryResolver

DEMO_QUERIES = ("react", "guide", " React ", "docker")
KEYSTROKE_INTERVAL_MS = 50
SETTLE_MARGIN_MS = 20


async def type_query(
    resolver: QueryResolver[CatalogItem],
    text: str,
    *,
    keystroke_interval_ms: int = KEYSTROKE_INTERVAL_MS,
) -> None:
    """Feed ``text`` one keystroke at a time, the way an input field would."""

    for end in range(1, len(text) + 1):
        resolver.set_query(text[:end])
        await asyncio.sleep(keystroke_interval_ms / 1000)


async def run_demo(
    resolver: QueryResolver[CatalogItem],
    queries: Sequence[str],
    *,
    keystroke_interval_ms: int = KEYSTROKE_INTERVAL_MS,
) -> None:
    for text in queries:
        await type_query(resolver, text, keystroke_interval_ms=keystroke_interval_ms)
        await asyncio.sleep((resolver.settings.debounce_ms + SETTLE_MARGIN_MS) / 1000)
        await resolver.wait_idle()

        state = resolver.state
        stats = summarize_results(state.results)
        logger.info(
            "demo_query_resolved",
            query=state.query,
            results=[item.title for item in state.results],
            categories=stats.categories,
            authors=len(stats.authors),
            error=state.error.message if state.error else None,
            cache_size=resolver.cache_size,
            history=list(resolver.history),
        )


async def main(argv: Sequence[str] | None = None) -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    catalog = default_catalog(settings.catalog)
    queries = tuple(argv) if argv else DEMO_QUERIES

    logger.info("demo_starting", debounce_ms=settings.debounce_ms, queries=list(queries))
    async with QueryResolver(catalog.search, settings) as resolver:
        await run_demo(resolver, queries)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))
