"""
Module: timeout.py
Description: Deadline race for store operations.

Runs a pending operation against a timer and returns whichever finishes
first. The timer is always disposed, and an operation that loses the race
is left to finish on its own with its outcome discarded, so nothing is
left unobserved on the event loop.
"""

import asyncio
from typing import Awaitable, Optional, TypeVar

from raincheck.errors import StoreTimeoutError
from raincheck.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _discard_outcome(task: asyncio.Future) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug(
            "Abandoned store operation failed after timeout",
            error=str(error),
            error_type=type(error).__name__
        )


async def run_with_timeout(
    operation: Awaitable[T],
    timeout_ms: Optional[int],
    operation_name: Optional[str] = None
) -> T:
    """
    Await an operation with a deadline.

    Args:
        operation: Coroutine or future to run
        timeout_ms: Deadline in milliseconds; None or 0 disables it
        operation_name: Optional label used in the timeout error

    Returns:
        The operation's result, unchanged

    Raises:
        StoreTimeoutError: If the deadline passes first
        Exception: Whatever the operation itself raises
    """
    if not timeout_ms:
        return await operation

    task = asyncio.ensure_future(operation)
    timer = asyncio.ensure_future(asyncio.sleep(timeout_ms / 1000))

    try:
        done, _ = await asyncio.wait({task, timer}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        timer.cancel()

    if task in done:
        return task.result()

    task.add_done_callback(_discard_outcome)
    logger.warning(
        "Store operation timed out",
        operation=operation_name,
        timeout_ms=timeout_ms
    )
    raise StoreTimeoutError(timeout_ms, operation_name)
