"""Debounce gate driven by a loop-style scheduler."""

from __future__ import annotations

import asyncio
from typing import Callable, Generic, Protocol, TypeVar

from query_resolver.logging import logger

T = TypeVar("T")


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with ``call_later`` semantics, e.g. an asyncio event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class Debouncer(Generic[T]):
    """Propagate the latest pushed value once it stayed unchanged for ``delay_ms``.

    Each push restarts the window; there is no maximum wait. A value equal to
    the current ``settled_value`` is not propagated again. After ``close()``
    no further value is propagated, including a timer that was already due.
    """

    def __init__(
        self,
        delay_ms: int,
        callback: Callable[[T], None],
        *,
        initial: T,
        scheduler: Scheduler | None = None,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.delay_ms = delay_ms
        self._callback = callback
        self._scheduler = scheduler
        self._handle: TimerHandle | None = None
        self._token = 0
        self._closed = False
        self.settled_value: T = initial

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, value: T) -> None:
        if self._closed:
            raise RuntimeError("debouncer is closed")
        self.cancel()
        self._token += 1
        token = self._token
        scheduler = self._scheduler or asyncio.get_running_loop()
        self._handle = scheduler.call_later(
            self.delay_ms / 1000, lambda: self._fire(token, value)
        )

    def cancel(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()

    def close(self) -> None:
        self.cancel()
        self._closed = True

    def _fire(self, token: int, value: T) -> None:
        if self._closed or token != self._token:
            logger.debug("stale_timer_suppressed", token=token)
            return
        self._handle = None
        if value == self.settled_value:
            logger.debug("settled_value_unchanged")
            return
        self.settled_value = value
        self._callback(value)


__all__ = ["Debouncer", "Scheduler", "TimerHandle"]
