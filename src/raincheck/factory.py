"""
Module: factory.py
Description: Build dispatchers and workers from settings.

Wires a TransportClient and a RedisListStore from RainCheckSettings, the
way an embedding application normally runs raincheck.
"""

from typing import Optional

from raincheck.config.settings import RainCheckSettings, settings as default_settings
from raincheck.delivery.dispatcher import RainCheckDispatcher
from raincheck.delivery.transport import TransportClient
from raincheck.delivery.worker import RainCheckWorker
from raincheck.storage.redis_store import RedisListStore
from raincheck.utils.logger import configure_logging


def create_dispatcher(settings: Optional[RainCheckSettings] = None) -> RainCheckDispatcher:
    """
    Create a dispatcher backed by Redis.

    Args:
        settings: Settings to use (default: the global settings instance)

    Returns:
        Configured RainCheckDispatcher
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    transport = TransportClient(settings.base_url, timeout_seconds=settings.request_timeout_seconds)
    store = RedisListStore.from_url(settings.redis_url)
    return RainCheckDispatcher.from_settings(settings, transport, store)


def create_worker(
    settings: Optional[RainCheckSettings] = None,
    dispatcher: Optional[RainCheckDispatcher] = None
) -> RainCheckWorker:
    """Create a drain worker, sharing a dispatcher if one is given."""
    return RainCheckWorker(dispatcher or create_dispatcher(settings))
