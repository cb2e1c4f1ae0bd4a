"""
Module: retry_config.py
Description: Connection-level retry policy for the transport client.

Only the transport client reads these fields. The dispatcher and the
drain worker carry a RetryConfig through a rain check untouched.
"""

from typing import List, Set
from pydantic import BaseModel, Field, ConfigDict, field_serializer


DEFAULT_RETRY_STATUS_CODES = {408, 425, 429, 500, 502, 503, 504}


class RetryConfig(BaseModel):
    """Bounded retry policy applied within a single send."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(
        default=3,
        ge=1,
        description="Total attempts, including the first"
    )
    delay_between_retries_ms: int = Field(
        default=0,
        ge=0,
        description="Fixed delay between attempts in milliseconds"
    )
    status_codes_to_retry: Set[int] = Field(
        default_factory=lambda: set(DEFAULT_RETRY_STATUS_CODES),
        description="Response status codes that trigger another attempt"
    )
    retry_on_timeout: bool = Field(
        default=False,
        description="Whether a timed out attempt is retried"
    )

    @field_serializer('status_codes_to_retry')
    def serialize_status_codes(self, codes: Set[int]) -> List[int]:
        # Sorted so that the stored encoding is stable
        return sorted(codes)
