"""
Module: dispatcher.py
Description: Rain check dispatcher for guaranteed request delivery.

Sends a request through the transport client and, when the final outcome
is a failure worth retrying later, stores a rain check in the durable
queue so a drain worker can resend it.

Key Components:
- RainCheckDispatcher: send_request() with rain check storage on failure
- SuccessCallback: (result, params) hook invoked after a successful send
- now_ms(): Epoch millisecond clock used for rain check timestamps
"""

import inspect
import time
from typing import Any, Awaitable, Callable, Iterable, Optional, Union

from raincheck.config.settings import DEFAULT_SKIP_STATUS_CODES, RainCheckSettings
from raincheck.delivery.transport import TransportClient
from raincheck.errors import UnsupportedOperationError
from raincheck.models.rain_check import RainCheckParams, RequestRainCheck
from raincheck.models.request import RequestSpec
from raincheck.models.result import RequestResult, SendResult
from raincheck.models.retry_config import RetryConfig
from raincheck.storage.base import ListStore
from raincheck.storage.guarded import GuardedStore
from raincheck.utils.logger import get_logger

logger = get_logger(__name__)

SuccessCallback = Callable[[RequestResult, RainCheckParams], Union[Awaitable[Any], Any]]


def now_ms() -> int:
    return int(time.time() * 1000)


class RainCheckDispatcher:
    """
    Sends requests and stores rain checks for failed ones.

    Attributes:
        transport: Client used to send requests
        store: Timeout-guarded list store rain checks are pushed to
        guaranteed_delivery: Whether failed sends are stored at all
        skip_status_codes: Failure status codes that are never stored

    Example:
        >>> dispatcher = RainCheckDispatcher(transport, RedisListStore(redis))
        >>> outcome = await dispatcher.send_request(
        ...     RequestSpec(method="POST", path="/hooks", body='{"id": 1}'),
        ...     RainCheckParams(id="req_1", queue_key="webhooks",
        ...                     rain_check_retry_in_msecs=60000, expires_in_msecs=86400000),
        ... )
    """

    def __init__(
        self,
        transport: TransportClient,
        store: ListStore,
        guaranteed_delivery: bool = True,
        store_timeout_ms: Optional[int] = None,
        skip_status_codes: Optional[Iterable[int]] = None
    ):
        """
        Initialize rain check dispatcher.

        Args:
            transport: Client used to send requests
            store: Durable list store; wrapped in a GuardedStore unless it already is one
            guaranteed_delivery: Store rain checks for failed sends
            store_timeout_ms: Deadline for each store operation (None: no deadline)
            skip_status_codes: Non-retryable status codes (default: 400, 401, 403, 404, 405)
        """
        if transport is None:
            raise ValueError("transport is required")

        self.transport = transport
        if isinstance(store, GuardedStore):
            # An explicit timeout overrides the one the store was guarded with
            if store_timeout_ms is not None and store_timeout_ms != store.timeout_ms:
                store = GuardedStore(store.store, store_timeout_ms)
            self.store = store
        else:
            self.store = GuardedStore(store, store_timeout_ms)
        self.guaranteed_delivery = guaranteed_delivery
        self.skip_status_codes = frozenset(
            DEFAULT_SKIP_STATUS_CODES if skip_status_codes is None else skip_status_codes
        )

    @classmethod
    def from_settings(
        cls,
        settings: RainCheckSettings,
        transport: TransportClient,
        store: ListStore
    ) -> 'RainCheckDispatcher':
        return cls(
            transport,
            store,
            guaranteed_delivery=settings.guaranteed_delivery,
            store_timeout_ms=settings.store_timeout_ms,
            skip_status_codes=settings.skip_status_codes
        )

    async def send_request(
        self,
        request: RequestSpec,
        rain_check_params: RainCheckParams,
        retry_config: Optional[RetryConfig] = None,
        callback: Optional[SuccessCallback] = None
    ) -> SendResult:
        """
        Send a request and store a rain check if it fails.

        The expiry is measured from before the send, the retry delay from
        after it, so time spent in transport retries does not eat into the
        retry window.

        Args:
            request: Request to send
            rain_check_params: Parameters for the rain check, if one is stored
            retry_config: Transport retry policy, passed through unchanged
            callback: Invoked with (result, rain_check_params) on success

        Returns:
            The transport outcome

        Raises:
            UnsupportedOperationError: If the send failed and
                sleep_until_successful was requested
            StoreTimeoutError: If storing the rain check timed out
        """
        started_at = now_ms()
        outcome = await self.transport.send_with_retry(request, retry_config)

        if outcome.is_failure:
            if rain_check_params.sleep_until_successful:
                raise UnsupportedOperationError("sleep_until_successful is not supported")

            if self._should_store(outcome):
                await self._store_rain_check(request, rain_check_params, retry_config, started_at)
            else:
                logger.info(
                    "Request failed, no rain check stored",
                    rain_check_id=rain_check_params.id,
                    status_code=outcome.error.status_code,
                    guaranteed_delivery=self.guaranteed_delivery
                )
            return outcome

        if callback is not None:
            callback_result = callback(outcome.result, rain_check_params)
            if inspect.isawaitable(callback_result):
                await callback_result

        return outcome

    def _should_store(self, outcome: SendResult) -> bool:
        if not self.guaranteed_delivery:
            return False
        return outcome.error.status_code not in self.skip_status_codes

    async def _store_rain_check(
        self,
        request: RequestSpec,
        rain_check_params: RainCheckParams,
        retry_config: Optional[RetryConfig],
        started_at: int
    ) -> None:
        fields = {
            'rain_check_params': rain_check_params,
            'expires_at': started_at + rain_check_params.expires_in_msecs,
            'retry_after': now_ms() + rain_check_params.rain_check_retry_in_msecs,
            'request': request,
        }
        if retry_config is not None:
            fields['retry_config'] = retry_config
        rain_check = RequestRainCheck(**fields)

        await self.store.push_tail(rain_check_params.queue_key, rain_check.encode())

        logger.info(
            "Rain check stored",
            rain_check_id=rain_check_params.id,
            queue_key=rain_check_params.queue_key,
            expires_at=rain_check.expires_at,
            retry_after=rain_check.retry_after
        )
