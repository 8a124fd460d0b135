"""
Debug exports.

Provides the category-aware console logger used by every system.
"""

from dino_deputy.core.debug.debug_logger import DebugLogger, LoggerConfig

__all__ = [
    'DebugLogger',
    'LoggerConfig',
]
