"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains the data models used by raincheck:
- RequestSpec: Replayable outbound request
- RetryConfig: Transport-level retry policy
- RainCheckParams / RequestRainCheck: Stored rain check descriptor
- SendResult: Success-or-failure outcome of a send

All models are exported here for convenient importing.
"""

from .request import RequestSpec
from .retry_config import RetryConfig
from .rain_check import RainCheckParams, RequestRainCheck
from .result import RequestError, RequestResult, SendResult

__all__ = [
    "RequestSpec",
    "RetryConfig",
    "RainCheckParams",
    "RequestRainCheck",
    "RequestError",
    "RequestResult",
    "SendResult",
]
