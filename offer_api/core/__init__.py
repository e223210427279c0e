# offer_api/core/__init__.py
"""
Core package for configuration, logging, and shared errors.
"""

from offer_api.core.config import Settings, settings
from offer_api.core.logging import configure_structlog, get_structlog_logger

__all__ = [
    "Settings",
    "settings",
    "configure_structlog",
    "get_structlog_logger",
]
