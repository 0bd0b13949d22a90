"""Async context manager base and cancellation helpers."""

import asyncio
from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")


class OperationCancelled(Exception):
    """Raised when a cancel event fires before an awaited operation finishes."""


class AsyncContextManager:
    """Base class for async context managers with close() method."""

    async def close(self) -> None:
        """Close resources. Override in subclass."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


async def run_cancellable(
    awaitable: Awaitable[T],
    cancel: Optional[asyncio.Event] = None,
) -> T:
    """Await an operation, aborting it as soon as `cancel` is set.

    Args:
        awaitable: Coroutine or future to run
        cancel: Event that aborts the operation when set (None = never)

    Returns:
        The operation's result

    Raises:
        OperationCancelled: If the event was set before the operation finished
    """
    if cancel is None:
        return await awaitable

    task = asyncio.ensure_future(awaitable)
    if cancel.is_set():
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise OperationCancelled()

    waiter = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for pending in (task, waiter):
            if not pending.done():
                pending.cancel()
        await asyncio.gather(task, waiter, return_exceptions=True)

    if task in done:
        return task.result()
    raise OperationCancelled()
