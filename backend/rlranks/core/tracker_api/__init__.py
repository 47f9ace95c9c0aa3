"""
Tracker API client package.

This package provides the HTTP client for the live rank tracker, its error
classes, translation tables and response models.
"""

from .client import TrackerAPIClient
from .constants import PLATFORM_CODES, PLAYLIST_NAMES
from .errors import (
    TrackerAPIError,
    TrackerBadRequestError,
    TrackerForbiddenError,
    TrackerNotFoundError,
    TrackerRateLimitError,
    TrackerServiceUnavailableError,
)
from .models import ProfileResponseDTO, PlaylistSegmentDTO

__all__ = [
    "TrackerAPIClient",
    "PLATFORM_CODES",
    "PLAYLIST_NAMES",
    "TrackerAPIError",
    "TrackerBadRequestError",
    "TrackerForbiddenError",
    "TrackerNotFoundError",
    "TrackerRateLimitError",
    "TrackerServiceUnavailableError",
    "ProfileResponseDTO",
    "PlaylistSegmentDTO",
]
