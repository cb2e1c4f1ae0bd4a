"""
Module: utils
Description: Package initialization for utility functions.

Shared helpers used throughout raincheck:
- logger: Structured logging configuration and helpers
- timeout: Deadline race used to guard store operations
"""

__all__ = []
