"""
Debounced commit of raw input values.

Each raw change cancels the pending commit and schedules a new one. The
callback only sees a value after the input has been quiet for `delay`
seconds, so intermediate keystrokes never reach the catalog or the local
query processor.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from pokebinder.config import SEARCH_DEBOUNCE_MS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """
    Timer + pending-value debouncer on the running asyncio loop.

    The callback may be a plain function or a coroutine function.

    Usage:
        debouncer = Debouncer(view.set_search)
        debouncer.push("p")
        debouncer.push("pika")   # "p" is never committed
    """

    def __init__(
        self,
        callback: Callable[[T], Awaitable[None] | None],
        delay: float = SEARCH_DEBOUNCE_MS / 1000,
    ) -> None:
        self._callback = callback
        self.delay = delay
        self._task: asyncio.Task[None] | None = None
        self._pending: T | None = None
        self._has_pending = False

    @property
    def pending(self) -> T | None:
        """Uncommitted value, if any."""
        return self._pending if self._has_pending else None

    @property
    def has_pending(self) -> bool:
        return self._has_pending

    def push(self, value: T) -> None:
        """Record a raw input change and restart the quiescence timer."""
        self._cancel_task()
        self._pending = value
        self._has_pending = True
        self._task = asyncio.get_running_loop().create_task(self._commit_later())

    def cancel(self) -> None:
        """Drop the pending value without committing it."""
        self._cancel_task()
        self._pending = None
        self._has_pending = False

    async def flush(self) -> None:
        """Commit the pending value now, if there is one."""
        self._cancel_task()
        await self._commit()

    def _cancel_task(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _commit_later(self) -> None:
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            return
        self._task = None
        try:
            await self._commit()
        except Exception:
            # Nobody awaits this task; later pushes still commit
            logger.exception("Debounced callback failed")

    async def _commit(self) -> None:
        if not self._has_pending:
            return
        value = self._pending
        self._pending = None
        self._has_pending = False

        logger.debug("Committing debounced value %r", value)
        result = self._callback(value)  # type: ignore[arg-type]
        if inspect.isawaitable(result):
            await result
