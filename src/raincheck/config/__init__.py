"""
Package: config
Description: Environment-driven configuration for raincheck.
"""

from .settings import DEFAULT_SKIP_STATUS_CODES, RainCheckSettings, settings

__all__ = ["DEFAULT_SKIP_STATUS_CODES", "RainCheckSettings", "settings"]
