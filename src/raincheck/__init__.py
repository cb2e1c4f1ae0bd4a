"""
Package: raincheck
Description: Guaranteed delivery for outbound HTTP requests.

When a send fails, the request is stored as a rain check in a durable
queue and resent later by a drain worker instead of being dropped.
"""

from .delivery import RainCheckDispatcher, RainCheckWorker, TransportClient
from .errors import RainCheckError, StoreTimeoutError, UnsupportedOperationError
from .models import (
    RainCheckParams,
    RequestError,
    RequestRainCheck,
    RequestResult,
    RequestSpec,
    RetryConfig,
    SendResult,
)
from .storage import GuardedStore, ListStore

__version__ = "0.1.0"

__all__ = [
    "GuardedStore",
    "ListStore",
    "RainCheckDispatcher",
    "RainCheckError",
    "RainCheckParams",
    "RainCheckWorker",
    "RequestError",
    "RequestRainCheck",
    "RequestResult",
    "RequestSpec",
    "RetryConfig",
    "SendResult",
    "StoreTimeoutError",
    "TransportClient",
    "UnsupportedOperationError",
]
