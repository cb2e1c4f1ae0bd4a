"""
Module: worker.py
Description: Drain worker for stored rain checks.

Pops rain checks from a queue one at a time, drops expired ones, requeues
ones that are not yet due, and resends through the dispatcher, which
stores a fresh rain check if the resend fails again.
"""

from typing import Optional

from raincheck.delivery.dispatcher import RainCheckDispatcher, SuccessCallback, now_ms
from raincheck.models.rain_check import RequestRainCheck
from raincheck.utils.logger import get_logger

logger = get_logger(__name__)


class RainCheckWorker:
    """
    Consumes rain checks from durable queues.

    The worker does not schedule itself: the host application calls
    consume_rain_check() (or drain()) on whatever cadence it chooses.
    """

    def __init__(self, dispatcher: RainCheckDispatcher):
        if dispatcher is None:
            raise ValueError("dispatcher is required")

        self.dispatcher = dispatcher
        self.store = dispatcher.store

    async def consume_rain_check(
        self,
        queue_key: str,
        callback: Optional[SuccessCallback] = None
    ) -> bool:
        """
        Process the rain check at the head of a queue.

        A rain check that is not yet due is pushed back to the tail
        unchanged and is still resent in this call; the requeued copy is
        the fallback if the resend fails.

        Args:
            queue_key: Queue to pop from
            callback: Invoked with (result, rain_check_params) if the resend succeeds

        Returns:
            False if the queue was empty, True if there may be more entries

        Raises:
            StoreTimeoutError: If a store operation timed out
            pydantic.ValidationError: If the popped entry is not a valid rain check
        """
        if not queue_key or not isinstance(queue_key, str):
            raise ValueError("queue_key must be a non-empty string")

        encoded = await self.store.pop_head(queue_key)
        if encoded is None:
            return False

        rain_check = RequestRainCheck.decode(encoded)

        params = rain_check.rain_check_params
        now = now_ms()

        if rain_check.is_expired(now):
            logger.info(
                "Rain check expired, dropping",
                rain_check_id=params.id,
                queue_key=queue_key,
                expires_at=rain_check.expires_at
            )
            return True

        if not rain_check.is_due(now):
            await self.store.push_tail(queue_key, encoded)
            logger.debug(
                "Rain check not due yet, requeued",
                rain_check_id=params.id,
                queue_key=queue_key,
                retry_after=rain_check.retry_after
            )

        outcome = await self.dispatcher.send_request(
            rain_check.request,
            params,
            rain_check.retry_config,
            callback
        )

        logger.info(
            "Rain check resent",
            rain_check_id=params.id,
            queue_key=queue_key,
            success=outcome.is_success,
            status_code=outcome.result.status_code if outcome.is_success else outcome.error.status_code
        )

        return True

    async def drain(
        self,
        queue_key: str,
        callback: Optional[SuccessCallback] = None,
        max_items: Optional[int] = None
    ) -> int:
        """
        Consume rain checks until the queue is empty or max_items is reached.

        Rain checks that fail again are pushed back to the same queue, so
        pass max_items to bound a drain of a queue whose endpoint is down.

        Returns:
            Number of rain checks processed
        """
        if max_items is not None and max_items < 0:
            raise ValueError("max_items must not be negative")

        processed = 0
        while max_items is None or processed < max_items:
            if not await self.consume_rain_check(queue_key, callback):
                break
            processed += 1

        logger.info(
            "Drain finished",
            queue_key=queue_key,
            processed=processed
        )
        return processed
