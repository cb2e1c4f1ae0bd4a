"""
Module: request.py
Description: Outbound request specification.

Defines the model describing one HTTP request in enough detail to replay
it unchanged from a stored rain check.

Key Components:
- RequestSpec: Method, path, headers, query and body of a request

Dependencies: pydantic, typing
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


HTTP_METHODS = {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"}


class RequestSpec(BaseModel):
    """
    Specification of an outbound HTTP request.

    The path is resolved against the transport client's base URL, so an
    absolute URL may also be given. Optional fields left unset are omitted
    from the stored encoding.

    Attributes:
        method: HTTP method (normalized to upper case)
        path: Request path or absolute URL
        headers: Optional request headers
        query: Optional query string parameters
        body: Optional raw request body
    """

    model_config = ConfigDict(frozen=True)

    method: str = Field(
        default="GET",
        description="HTTP method"
    )
    path: str = Field(
        ...,
        min_length=1,
        description="Request path or absolute URL"
    )
    headers: Optional[Dict[str, str]] = Field(
        default=None,
        description="Request headers"
    )
    query: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Query string parameters"
    )
    body: Optional[str] = Field(
        default=None,
        description="Raw request body"
    )

    @field_validator('method')
    @classmethod
    def validate_method(cls, v: str) -> str:
        """Validate method is a known HTTP method."""
        method = v.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"method must be one of: {', '.join(sorted(HTTP_METHODS))}")
        return method
