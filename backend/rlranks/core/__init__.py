"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .database import DatabaseManager, get_db_manager
from .enums import Platform, Playlist
from .exceptions import (
    RankServiceError,
    NormalizationError,
    RanksExhaustedError,
    NoRanksError,
    StoreError,
)
from .logging import setup_logging, get_logger
from .models import Base

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Database
    "DatabaseManager",
    "get_db_manager",
    "Base",
    # Enums
    "Platform",
    "Playlist",
    # Exceptions
    "RankServiceError",
    "NormalizationError",
    "RanksExhaustedError",
    "NoRanksError",
    "StoreError",
    # Logging
    "setup_logging",
    "get_logger",
]
