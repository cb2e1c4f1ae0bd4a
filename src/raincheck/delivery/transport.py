"""
Module: transport.py
Description: HTTP transport client with connection-level retries.

Sends a RequestSpec over httpx and retries transient failures within the
same send according to a RetryConfig, using tenacity. The caller only
sees the final outcome, as a SendResult: HTTP errors, timeouts and
network failures are returned as data rather than raised.
"""

from typing import Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from raincheck.models.request import RequestSpec
from raincheck.models.result import RequestError, RequestResult, SendResult
from raincheck.models.retry_config import RetryConfig
from raincheck.utils.logger import get_logger

logger = get_logger(__name__)

# No retry config means a single attempt
SINGLE_ATTEMPT = RetryConfig(max_attempts=1)


def _decode_body(response: httpx.Response):
    if not response.content:
        return None
    if 'application/json' in response.headers.get('content-type', ''):
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


def _should_retry(outcome: SendResult, config: RetryConfig) -> bool:
    if outcome.is_success:
        return False
    if outcome.error.is_timeout:
        return config.retry_on_timeout
    return outcome.error.status_code in config.status_codes_to_retry


def _return_last_outcome(retry_state: RetryCallState) -> SendResult:
    return retry_state.outcome.result()


def _log_retry(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome.result()
    logger.debug(
        "Retrying request",
        attempt=retry_state.attempt_number,
        status_code=outcome.error.status_code,
        error=outcome.error.message
    )


class TransportClient:
    """
    HTTP client for sending requests with bounded retries.

    Handles a request end to end: each attempt is sent with httpx, and
    the outcome is retried in place while the RetryConfig allows it.

    Example:
        >>> async with TransportClient("https://api.example.com") as transport:
        ...     outcome = await transport.send_with_retry(RequestSpec(path="/ping"))
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize transport client.

        Args:
            base_url: Base URL request paths are resolved against
            timeout_seconds: HTTP timeout in seconds for each attempt
            client: Optional preconfigured httpx client (not closed by aclose)

        Raises:
            ValueError: If base_url is invalid
        """
        if not base_url or not isinstance(base_url, str):
            raise ValueError("base_url must be a non-empty string")
        if not base_url.startswith(('http://', 'https://')):
            raise ValueError("base_url must be a valid HTTP/HTTPS URL")

        self.base_url = base_url
        self.timeout = httpx.Timeout(timeout_seconds, connect=timeout_seconds)
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=base_url, timeout=self.timeout)

        logger.info(
            "Transport client initialized",
            base_url=base_url,
            timeout_seconds=timeout_seconds
        )

    async def __aenter__(self) -> 'TransportClient':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def send_with_retry(
        self,
        request: RequestSpec,
        retry_config: Optional[RetryConfig] = None
    ) -> SendResult:
        """
        Send a request, retrying transient failures.

        Args:
            request: Request to send
            retry_config: Retry policy; None sends a single attempt

        Returns:
            SendResult with the final attempt's outcome
        """
        config = retry_config or SINGLE_ATTEMPT

        retrying = AsyncRetrying(
            stop=stop_after_attempt(config.max_attempts),
            wait=wait_fixed(config.delay_between_retries_ms / 1000),
            retry=retry_if_result(lambda outcome: _should_retry(outcome, config)),
            before_sleep=_log_retry,
            retry_error_callback=_return_last_outcome,
        )

        return await retrying(self._send_once, request)

    async def _send_once(self, request: RequestSpec) -> SendResult:
        try:
            response = await self.client.request(
                request.method,
                request.path,
                headers=request.headers,
                params=request.query,
                content=request.body
            )

        except httpx.TimeoutException as e:
            logger.warning(
                "Request timeout",
                method=request.method,
                path=request.path
            )
            return SendResult(error=RequestError(message=str(e) or "Request timed out", is_timeout=True))

        except httpx.RequestError as e:
            logger.warning(
                "Request transport error",
                method=request.method,
                path=request.path,
                error=str(e)
            )
            return SendResult(error=RequestError(message=str(e) or type(e).__name__))

        headers = dict(response.headers)
        body = _decode_body(response)

        if response.is_error:
            logger.warning(
                "Request HTTP error",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                response=response.text[:500]  # Truncate large responses
            )
            return SendResult(error=RequestError(
                status_code=response.status_code,
                headers=headers,
                body=body,
                message=f"HTTP {response.status_code}"
            ))

        logger.debug(
            "Request sent successfully",
            method=request.method,
            path=request.path,
            status_code=response.status_code
        )
        return SendResult(result=RequestResult(
            status_code=response.status_code,
            headers=headers,
            body=body
        ))
