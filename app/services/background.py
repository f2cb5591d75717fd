import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)

# Strong references so pending tasks are not garbage collected mid-flight.
_pending: set[asyncio.Task] = set()


def fire_and_forget(coro: Coroutine[Any, Any, Any], label: str) -> asyncio.Task:
    """
    Run a best-effort side effect without awaiting it.

    The task's failure is logged and swallowed here; it can never fail the
    request that scheduled it.
    """
    task = asyncio.create_task(coro, name=label)
    _pending.add(task)
    task.add_done_callback(_finish(label))
    return task


def _finish(label: str):
    def callback(task: asyncio.Task) -> None:
        _pending.discard(task)
        if task.cancelled():
            logger.warning("Background task %s was cancelled", label)
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background task %s failed: %s", label, exc, exc_info=exc)
    return callback


async def drain(timeout: float | None = None) -> None:
    """Wait for outstanding background tasks (used on shutdown and in tests)."""
    if _pending:
        await asyncio.wait(list(_pending), timeout=timeout)
