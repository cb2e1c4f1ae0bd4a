"""
Module: test_logger.py
Description: Unit tests for the structlog processors and level configuration.
"""

from datetime import datetime

import pytest

from raincheck.utils.logger import _add_log_level, _add_timestamp, configure_logging


class TestLogProcessors:
    """Test cases for the event dict processors."""

    def test_add_timestamp_is_utc_iso(self):
        event_dict = _add_timestamp(None, "info", {"event": "Rain check stored"})

        assert event_dict["timestamp"].endswith("Z")
        datetime.strptime(event_dict["timestamp"], "%Y-%m-%dT%H:%M:%S.%fZ")
        assert event_dict["event"] == "Rain check stored"

    def test_add_log_level_upper_cases_method(self):
        assert _add_log_level(None, "warning", {})["level"] == "WARNING"

    def test_configure_logging_rejects_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level: loud"):
            configure_logging("loud")
