"""Debounced, cache-backed query resolution."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Any, Awaitable, Callable, Generic, Sequence, TypeVar

from query_resolver.config import ResolverSettings, get_settings
from query_resolver.domain.models import ErrorInfo, ResolverState
from query_resolver.logging import logger
from query_resolver.services.exceptions import ResolverClosedError
from query_resolver.services.history import QueryHistory
from query_resolver.services.query_cache import QueryCache
from query_resolver.utils.debounce import Debouncer, Scheduler

ResultT = TypeVar("ResultT")
Lookup = Callable[[str], Awaitable[Sequence[ResultT]]]
StateListener = Callable[[ResolverState[ResultT]], None]


class QueryResolver(Generic[ResultT]):
    """Turns a fast-changing query string into settled search results.

    Raw input goes through a debounce gate. Each settled value starts a
    resolution cycle: empty queries clear the results, cached queries are
    answered synchronously from the settle callback, and anything else
    calls ``lookup`` in a background task. Successful lookups are cached
    and recorded in the history; failures only surface as ``error``.

    Every cycle carries a generation number. When ``discard_stale_results``
    is enabled a completion from an older cycle leaves the visible state
    alone, so a slow earlier lookup can never overwrite a newer answer.
    """

    def __init__(
        self,
        lookup: Lookup[ResultT],
        settings: ResolverSettings | None = None,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._lookup = lookup
        self._cache: QueryCache[ResultT] = QueryCache(case_sensitive=self.settings.case_sensitive)
        self._history = QueryHistory(self.settings.history_limit)
        self._debouncer: Debouncer[str] = Debouncer(
            self.settings.debounce_ms,
            self._on_settled,
            initial="",
            scheduler=scheduler,
        )
        self._state: ResolverState[ResultT] = ResolverState()
        self._listeners: list[StateListener[ResultT]] = []
        self._tasks: set[asyncio.Task[None]] = set()
        self._generation = 0
        self._closed = False

    async def __aenter__(self) -> "QueryResolver[ResultT]":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def state(self) -> ResolverState[ResultT]:
        return self._state

    @property
    def query(self) -> str:
        return self._state.query

    @property
    def results(self) -> tuple[ResultT, ...]:
        return self._state.results

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def error(self) -> ErrorInfo | None:
        return self._state.error

    @property
    def history(self) -> tuple[str, ...]:
        return self._history.items

    @property
    def cache_size(self) -> int:
        return self._cache.size()

    @property
    def settled_query(self) -> str:
        return self._debouncer.settled_value

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener[ResultT]) -> Callable[[], None]:
        """Call ``listener`` with every new state snapshot; returns an unsubscribe hook."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_query(self, new_query: str) -> None:
        self._ensure_open()
        self._update(query=new_query)
        self._debouncer.push(new_query)

    def select_history(self, query: str) -> None:
        self.set_query(query)

    def refresh(self) -> asyncio.Task[None] | None:
        """Look the settled query up again, bypassing the cache."""

        self._ensure_open()
        query = self._debouncer.settled_value
        if not query.strip():
            return None
        return self._resolve(query, use_cache=False)

    def clear_cache(self) -> None:
        cleared = self._cache.size()
        self._cache.clear()
        self._history.clear()
        logger.info("query_cache_cleared", entries=cleared)

    def clear_results(self) -> None:
        self._debouncer.cancel()
        self._debouncer.settled_value = ""
        self._generation += 1
        self._update(query="", results=(), error=None, is_loading=False)

    async def wait_idle(self) -> None:
        """Wait until every lookup started so far has settled."""

        while self._tasks:
            await asyncio.gather(*tuple(self._tasks), return_exceptions=True)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._debouncer.close()
        self._generation += 1
        logger.info("resolver_closed", pending_lookups=len(self._tasks))

    def _ensure_open(self) -> None:
        if self._closed:
            raise ResolverClosedError("Resolver has been closed.")

    def _on_settled(self, value: str) -> None:
        logger.debug("query_settled", query=value)
        self._resolve(value, use_cache=True)

    def _resolve(self, raw_query: str, *, use_cache: bool) -> asyncio.Task[None] | None:
        self._generation += 1
        generation = self._generation
        query = raw_query.strip()
        if not query:
            self._update(results=(), error=None, is_loading=False)
            return None

        key = self._cache.key_for(query)
        if use_cache:
            cached = self._cache.get(key)
            if cached is not None:
                logger.info("query_cache_hit", query=key, results=len(cached))
                self._update(results=tuple(cached), error=None, is_loading=False)
                return None

        self._update(results=(), is_loading=True, error=None)
        task = asyncio.get_running_loop().create_task(self._run_lookup(query, key, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_lookup(self, query: str, key: str, generation: int) -> None:
        logger.info("lookup_started", query=query, generation=generation)
        try:
            results = tuple(await self._lookup(query))
        except Exception as exc:
            logger.warning(
                "lookup_failed",
                query=query,
                generation=generation,
                error_type=exc.__class__.__name__,
                error=str(exc),
            )
            if self._is_stale(generation):
                return
            self._update(
                results=(),
                error=ErrorInfo.from_exception(exc, self.settings.error_message),
                is_loading=False,
            )
            return

        if self._closed:
            logger.info("stale_resolution_discarded", query=query, generation=generation, reason="closed")
            return

        self._cache.set(key, results)
        self._history.record(key)
        logger.info("lookup_succeeded", query=query, generation=generation, results=len(results))
        if self._is_stale(generation):
            return
        self._update(results=results, error=None, is_loading=False)

    def _is_stale(self, generation: int) -> bool:
        if self._closed or (
            self.settings.discard_stale_results and generation != self._generation
        ):
            logger.info(
                "stale_resolution_discarded",
                generation=generation,
                current_generation=self._generation,
            )
            return True
        return False

    def _update(self, **changes: Any) -> None:
        state = replace(self._state, **changes)
        if state == self._state:
            return
        self._state = state
        for listener in tuple(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("resolver_listener_failed")


__all__ = ["Lookup", "QueryResolver", "StateListener"]
