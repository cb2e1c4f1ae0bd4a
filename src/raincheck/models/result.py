"""
Module: result.py
Description: Outcome of a transport send.

A send either succeeds with a response payload or fails with a status
code. Failures are data, not exceptions: the dispatcher inspects them to
decide whether to store a rain check, and returns them to the caller.

Key Components:
- RequestResult: Successful response
- RequestError: Failed response or connection-level failure
- SendResult: Exactly one of result or error

Dependencies: pydantic, typing
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, model_validator


class RequestResult(BaseModel):
    """
    Successful HTTP response.

    Attributes:
        status_code: Response status code
        headers: Response headers
        body: Decoded JSON body, or text when the response is not JSON
    """

    status_code: int = Field(..., description="Response status code")
    headers: Dict[str, str] = Field(default_factory=dict, description="Response headers")
    body: Any = Field(default=None, description="Response body")


class RequestError(BaseModel):
    """
    Failed send.

    Attributes:
        status_code: Response status code, None if no response was received
        headers: Response headers, if any
        body: Response body, if any
        message: Human-readable failure description
        is_timeout: Whether the attempt timed out
    """

    status_code: Optional[int] = Field(default=None, description="Response status code")
    headers: Dict[str, str] = Field(default_factory=dict, description="Response headers")
    body: Any = Field(default=None, description="Response body")
    message: str = Field(default="", description="Failure description")
    is_timeout: bool = Field(default=False, description="Attempt timed out")


class SendResult(BaseModel):
    """Either a RequestResult or a RequestError, never both."""

    result: Optional[RequestResult] = None
    error: Optional[RequestError] = None

    @model_validator(mode='after')
    def validate_exactly_one(self) -> 'SendResult':
        """Ensure exactly one of result and error is present."""
        if (self.result is None) == (self.error is None):
            raise ValueError("SendResult requires exactly one of result or error")
        return self

    @property
    def is_success(self) -> bool:
        return self.result is not None

    @property
    def is_failure(self) -> bool:
        return self.error is not None
