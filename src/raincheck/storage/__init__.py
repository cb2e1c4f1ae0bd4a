"""
Module: storage
Description: Package initialization for the rain check persistence layer.

This package contains the durable list stores rain checks are kept in:
- base: ListStore protocol (push_tail / pop_head)
- guarded: GuardedStore applying a deadline to every store call
- redis_store: Redis lists via redis.asyncio
- sqs_store: SQS queues via aioboto3

All store implementations follow async interfaces for consistency.
"""

from .base import ListStore
from .guarded import GuardedStore

__all__ = ["ListStore", "GuardedStore"]
