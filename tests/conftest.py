"""Shared pytest fixtures: a manually driven scheduler and scripted lookups."""

from __future__ import annotations

import asyncio
from typing import Callable

import pytest


class _ManualHandle:
    def __init__(self, when_ms: int, callback: Callable[[], None]) -> None:
        self.when_ms = when_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """``call_later`` clock that only moves when a test calls ``advance``."""

    def __init__(self) -> None:
        self.now_ms = 0
        self.handles: list[_ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle(self.now_ms + round(delay * 1000), callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for h in self.handles if not h.cancelled and not h.fired)

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = [
                h for h in self.handles if not h.cancelled and not h.fired and h.when_ms <= target
            ]
            if not due:
                break
            handle = min(due, key=lambda h: h.when_ms)
            self.now_ms = handle.when_ms
            handle.fired = True
            handle.callback()
        self.now_ms = target


class ScriptedLookup:
    """Records calls; answers from a table, or from futures the test resolves."""

    def __init__(self, answers: dict[str, list] | None = None, *, manual: bool = False) -> None:
        self.answers = answers or {}
        self.failures: dict[str, Exception] = {}
        self.manual = manual
        self.calls: list[str] = []
        self.pending: dict[str, asyncio.Future] = {}

    async def __call__(self, query: str) -> list:
        self.calls.append(query)
        if self.manual:
            future = asyncio.get_running_loop().create_future()
            self.pending[query] = future
            return await future
        if query in self.failures:
            raise self.failures[query]
        return list(self.answers.get(query, [{"id": len(self.calls), "title": query}]))

    def finish(self, query: str, results: list) -> None:
        self.pending.pop(query).set_result(results)

    def fail(self, query: str, exc: Exception) -> None:
        self.pending.pop(query).set_exception(exc)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def lookup() -> ScriptedLookup:
    return ScriptedLookup()


@pytest.fixture
def manual_lookup() -> ScriptedLookup:
    return ScriptedLookup(manual=True)
