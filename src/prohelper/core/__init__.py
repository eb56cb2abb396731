"""Core ProHelper utilities.

This module exports core utilities for use throughout the client.
"""

from prohelper.core.config import Settings, get_settings
from prohelper.core.logging import (
    LoggingContext,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LoggingContext",
    "clear_context",
]
