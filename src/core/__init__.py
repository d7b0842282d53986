"""Core module for the file shares client.

Provides shared configuration and logging.
"""

from .config import settings, Settings
from .logging import configure_structured_logging

__all__ = [
    # Config
    "settings",
    "Settings",
    # Logging
    "configure_structured_logging",
]
