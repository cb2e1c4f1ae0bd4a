"""
Module: base.py
Description: Durable list store interface.

Rain checks live in named FIFO lists. A store needs only two operations:
append to the tail of a list and atomically remove from its head. The
connection behind a store is owned by the embedding application.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ListStore(Protocol):
    """FIFO push/pop on named lists of text values."""

    async def push_tail(self, list_key: str, value: str) -> None:
        """Append a value to the tail of the named list."""
        ...

    async def pop_head(self, list_key: str) -> Optional[str]:
        """Remove and return the head of the named list, or None if empty."""
        ...
