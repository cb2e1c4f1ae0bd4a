"""
Module: errors.py
Description: Exception types raised by raincheck.

Transport failures are not exceptions: they are returned as data in a
SendResult so the dispatcher can decide whether to store a rain check.
The exceptions here cover the cases that must reach the caller.

Key Components:
- RainCheckError: Base class for all raincheck errors
- StoreTimeoutError: A guarded store operation missed its deadline
- UnsupportedOperationError: A requested mode is not implemented
"""

from typing import Optional


class RainCheckError(Exception):
    """Base class for raincheck errors."""


class StoreTimeoutError(RainCheckError):
    """
    Raised when a store operation does not complete within the configured
    timeout.

    The underlying operation is abandoned, not cancelled at the store
    protocol level; its eventual result is ignored.
    """

    def __init__(self, timeout_ms: int, operation: Optional[str] = None):
        self.timeout_ms = timeout_ms
        self.operation = operation
        target = f"Store operation '{operation}'" if operation else "Store operation"
        super().__init__(f"{target} timed out after {timeout_ms} ms")


class UnsupportedOperationError(RainCheckError):
    """Raised when a caller requests behaviour that is not implemented."""
