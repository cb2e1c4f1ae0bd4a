"""
Module: rain_check.py
Description: Rain check models for deferred request retries.

A rain check is the persisted promise to retry a failed request later.
It is written once, when a send fails, and never modified afterwards:
requeueing pushes back the exact text that was popped.

Key Components:
- RainCheckParams: Caller-supplied parameters for storing a rain check
- RequestRainCheck: The stored descriptor with its expiry and due times
- encode()/decode(): Lossless JSON text round trip

Dependencies: pydantic, typing
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from raincheck.models.request import RequestSpec
from raincheck.models.retry_config import RetryConfig


class RainCheckParams(BaseModel):
    """
    Parameters used to store a rain check if a send fails.

    Attributes:
        id: Caller-supplied identifier, used for correlation only
        queue_key: Name of the durable list the rain check is pushed to
        rain_check_retry_in_msecs: Minimum wait before a drain may resend
        expires_in_msecs: Lifetime after which the rain check is discarded
        sleep_until_successful: Block until delivery instead of queueing
            (not implemented; a failed send with this flag raises)
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="Correlation identifier"
    )
    queue_key: str = Field(
        ...,
        min_length=1,
        description="Durable list key"
    )
    rain_check_retry_in_msecs: int = Field(
        ...,
        ge=0,
        description="Delay before a drain may resend, in milliseconds"
    )
    expires_in_msecs: int = Field(
        ...,
        ge=0,
        description="Lifetime of the rain check, in milliseconds"
    )
    sleep_until_successful: Optional[bool] = Field(
        default=None,
        description="Retry until success instead of queueing"
    )


class RequestRainCheck(BaseModel):
    """
    Stored descriptor of one deferred retry.

    Timestamps are epoch milliseconds fixed when the rain check is created.

    Attributes:
        rain_check_params: Parameters the rain check was stored with
        expires_at: Time after which the rain check is dropped unsent
        retry_after: Time before which a drain requeues instead of relying
            on the resend alone
        request: Request to replay
        retry_config: Transport retry policy to replay with
    """

    model_config = ConfigDict(frozen=True)

    rain_check_params: RainCheckParams
    expires_at: int = Field(..., description="Expiry time, epoch ms")
    retry_after: int = Field(..., description="Earliest resend time, epoch ms")
    request: RequestSpec
    retry_config: Optional[RetryConfig] = None

    def is_expired(self, now_ms: int) -> bool:
        return self.expires_at < now_ms

    def is_due(self, now_ms: int) -> bool:
        return self.retry_after <= now_ms

    def encode(self) -> str:
        """
        Encode the rain check as JSON text.

        Fields that were never set are left out, so optional fields keep
        their absence through a decode/encode cycle.
        """
        return self.model_dump_json(exclude_unset=True)

    @classmethod
    def decode(cls, data: str) -> 'RequestRainCheck':
        """
        Decode a rain check from JSON text.

        Raises:
            pydantic.ValidationError: If the text is not a valid rain check
        """
        return cls.model_validate_json(data)
