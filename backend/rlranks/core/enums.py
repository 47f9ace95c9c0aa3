"""Shared enums used across features.

This module provides a single source of truth for enums used in both models and schemas.
"""

from enum import Enum


class Platform(str, Enum):
    """Gaming platforms a player account can live on."""

    STEAM = "steam"
    XBOX = "xbox"
    PLAYSTATION = "playstation"
    EPIC = "epic"

    @classmethod
    def parse(cls, value: str) -> "Platform":
        """Parse a platform name, accepting the short aliases users type.

        :param value: Platform name such as ``steam``, ``ps4`` or ``XBL``
        :returns: Matching platform
        :raises ValueError: If the name matches no platform
        """
        normalized = value.strip().lower()
        return cls(_PLATFORM_ALIASES.get(normalized, normalized))


class Playlist(str, Enum):
    """Competitive playlists, declared in tie-break priority order."""

    DUEL = "duel"
    DOUBLES = "doubles"
    STANDARD = "standard"
    HOOPS = "hoops"
    RUMBLE = "rumble"
    DROPSHOT = "dropshot"
    SNOW_DAY = "snow_day"
    TOURNAMENT = "tournament"

    @property
    def display_name(self) -> str:
        """Human readable playlist name."""
        return self.value.replace("_", " ").title()

    @property
    def priority(self) -> int:
        """Position in the fixed priority order (0 is highest)."""
        return _PLAYLIST_ORDER.index(self)

    @classmethod
    def parse(cls, value: str) -> "Playlist":
        """Parse a playlist from its value or display name.

        :raises ValueError: If the name matches no playlist
        """
        return cls(value.strip().lower().replace(" ", "_"))


_PLAYLIST_ORDER = list(Playlist)

_PLATFORM_ALIASES = {
    "ps": "playstation",
    "ps4": "playstation",
    "ps5": "playstation",
    "psn": "playstation",
    "xbl": "xbox",
}
