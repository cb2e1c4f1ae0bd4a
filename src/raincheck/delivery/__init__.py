"""
Package: delivery
Description: Request delivery with rain checks.

Provides the httpx transport client with connection-level retries, the
dispatcher that stores rain checks for failed sends, and the worker that
drains them.
"""

from .dispatcher import RainCheckDispatcher, SuccessCallback
from .transport import TransportClient
from .worker import RainCheckWorker

__all__ = ["RainCheckDispatcher", "RainCheckWorker", "SuccessCallback", "TransportClient"]
