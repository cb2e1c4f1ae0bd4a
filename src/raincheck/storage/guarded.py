"""
Module: guarded.py
Description: Timeout-guarded access to a list store.

Every store interaction made by the dispatcher and the drain worker goes
through GuardedStore so that an unresponsive store surfaces as a
StoreTimeoutError instead of hanging the caller.
"""

from typing import Optional

from raincheck.storage.base import ListStore
from raincheck.utils.timeout import run_with_timeout


class GuardedStore:
    """
    Wraps a ListStore and applies a deadline to each operation.

    Results and errors of the wrapped store pass through unchanged; only
    a missed deadline changes the failure mode.

    Attributes:
        store: Wrapped list store
        timeout_ms: Deadline per operation, None for no deadline
    """

    def __init__(self, store: ListStore, timeout_ms: Optional[int] = None):
        if store is None:
            raise ValueError("store is required")
        if timeout_ms is not None and timeout_ms < 0:
            raise ValueError("timeout_ms must not be negative")

        self.store = store
        self.timeout_ms = timeout_ms

    async def push_tail(self, list_key: str, value: str) -> None:
        await run_with_timeout(
            self.store.push_tail(list_key, value),
            self.timeout_ms,
            operation_name="push_tail"
        )

    async def pop_head(self, list_key: str) -> Optional[str]:
        return await run_with_timeout(
            self.store.pop_head(list_key),
            self.timeout_ms,
            operation_name="pop_head"
        )
